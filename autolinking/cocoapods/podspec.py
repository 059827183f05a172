from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol

from autolinking.core.errors import PodspecLoadError

from .platform import PLATFORM_NAMES, Platform, all_platforms

log = logging.getLogger("autolinking.podspec")


@dataclass(frozen=True)
class Podspec:
    """The parts of a podspec the autolinking resolution reads."""

    name: str
    available_platforms: List[Platform] = field(default_factory=list)
    test_specs: List[str] = field(default_factory=list)
    all_dependencies: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Podspec":
        name = d.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("podspec has no name")

        declared = d.get("platforms")
        if isinstance(declared, dict) and declared:
            platforms = [Platform.of(p, v) for p, v in declared.items()]
        else:
            # no declaration means every platform, without a minimum version
            platforms = list(all_platforms())

        test_specs = []
        for ts in _list_of(d, "testspecs"):
            if not isinstance(ts, dict):
                raise ValueError(f"testspecs entries must be objects, got {type(ts).__name__}")
            ts_name = str(ts.get("name") or "")
            if not ts_name:
                continue
            test_specs.append(ts_name if ts_name.startswith(name + "/") else f"{name}/{ts_name}")

        return cls(
            name=name,
            available_platforms=platforms,
            test_specs=test_specs,
            all_dependencies=_collect_dependencies(d),
        )


def _list_of(spec: Dict[str, Any], key: str) -> List[Any]:
    value = spec.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list, got {type(value).__name__}")
    return value


def _dependency_map(spec: Dict[str, Any]) -> Dict[str, Any]:
    deps = spec.get("dependencies") or {}
    if not isinstance(deps, dict):
        raise ValueError(f"dependencies must be an object, got {type(deps).__name__}")
    return deps


def _dependency_names(spec: Dict[str, Any]) -> Iterable[str]:
    yield from _dependency_map(spec).keys()
    for platform in PLATFORM_NAMES:
        consumer = spec.get(platform)
        if isinstance(consumer, dict):
            yield from _dependency_map(consumer).keys()


def _collect_dependencies(spec: Dict[str, Any]) -> List[str]:
    out: List[str] = []
    seen = set()

    def walk(s: Dict[str, Any]) -> None:
        for dep in _dependency_names(s):
            if dep not in seen:
                seen.add(dep)
                out.append(dep)
        for child in _list_of(s, "subspecs") + _list_of(s, "testspecs"):
            if isinstance(child, dict):
                walk(child)

    walk(spec)
    return out


class PodspecLoader(Protocol):
    def load(self, pod_name: str, podspec_dir: str) -> Podspec:
        ...


class FilePodspecLoader:
    """Loads `<podspec_dir>/<pod_name>.podspec.json`, or converts the Ruby
    `<pod_name>.podspec` through `pod ipc spec`.

    Loaded podspecs are cached per path for the lifetime of the loader.
    """

    def __init__(self, pod_executable: str = "pod"):
        self.pod_executable = pod_executable
        self._cache: Dict[Path, Podspec] = {}

    def load(self, pod_name: str, podspec_dir: str) -> Podspec:
        base = Path(podspec_dir)
        json_path = base / f"{pod_name}.podspec.json"
        ruby_path = base / f"{pod_name}.podspec"

        path = json_path if json_path.exists() else ruby_path
        cached = self._cache.get(path)
        if cached is not None:
            return cached

        if path == json_path:
            try:
                raw = json_path.read_text(encoding="utf-8")
            except OSError as exc:
                raise PodspecLoadError(pod_name, str(json_path), str(exc)) from exc
        else:
            raw = self._ipc_spec(pod_name, ruby_path)

        podspec = self._parse(pod_name, path, raw)
        self._cache[path] = podspec
        return podspec

    def _ipc_spec(self, pod_name: str, path: Path) -> str:
        if not path.exists():
            raise PodspecLoadError(pod_name, str(path), "file not found")

        log.debug("Converting %s with `%s ipc spec`", path, self.pod_executable)
        try:
            r = subprocess.run(
                [self.pod_executable, "ipc", "spec", str(path)],
                cwd=str(path.parent),
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise PodspecLoadError(pod_name, str(path), str(exc)) from exc

        if r.returncode != 0:
            raise PodspecLoadError(pod_name, str(path), (r.stderr or r.stdout).strip() or f"exit code {r.returncode}")
        return r.stdout

    def _parse(self, pod_name: str, path: Path, raw: str) -> Podspec:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PodspecLoadError(pod_name, str(path), f"invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise PodspecLoadError(pod_name, str(path), f"expected an object, got {type(data).__name__}")

        try:
            return Podspec.from_dict(data)
        except ValueError as exc:
            raise PodspecLoadError(pod_name, str(path), str(exc)) from exc
