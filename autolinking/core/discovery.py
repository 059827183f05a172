from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from .config import AutolinkingOptions
from .constants import AUTOLINKING_PACKAGE
from .errors import DiscoveryError
from .models import ResolveResult

log = logging.getLogger("autolinking.discovery")


class DiscoveryClient(Protocol):
    def resolve(self, args: List[str]) -> Dict[str, Any]:
        """Run the command to completion and return its parsed JSON output."""
        ...

    def run(self, args: List[str]) -> int:
        """Run the command to completion and return its exit code."""
        ...


def base_command_args(options: AutolinkingOptions) -> List[str]:
    args: List[str] = []

    if options.search_paths:
        args.extend(options.search_paths)

    if options.ignore_paths:
        args.append("--ignore-paths")
        args.extend(options.ignore_paths)

    if options.exclude:
        args.append("--exclude")
        args.extend(options.exclude)

    return args


def command_args(command_name: str, platform_name: str, options: AutolinkingOptions) -> List[str]:
    """Arguments after the executable: `<command> --platform <platform> [search paths] [flags]`."""
    return [command_name, "--platform", platform_name.lower(), *base_command_args(options)]


def resolve_command_args(platform_name: str, options: AutolinkingOptions) -> List[str]:
    return command_args("resolve", platform_name, options) + ["--json"]


def generate_package_list_command_args(platform_name: str, options: AutolinkingOptions, target_path: str) -> List[str]:
    return command_args("generate-package-list", platform_name, options) + ["--target", str(target_path)]


def parse_resolve_result(data: Any) -> ResolveResult:
    if not isinstance(data, dict):
        raise DiscoveryError(
            f"Couldn't parse JSON coming from `{AUTOLINKING_PACKAGE}` command:\n"
            f"expected an object, got {type(data).__name__}"
        )
    try:
        return ResolveResult.model_validate(data)
    except ValidationError as exc:
        raise DiscoveryError(f"Couldn't parse JSON coming from `{AUTOLINKING_PACKAGE}` command:\n{exc}") from exc


class NodeDiscoveryClient:
    """Runs `expo-modules-autolinking` through node, resolving the package from `resolve_from`."""

    def __init__(self, resolve_from: Optional[Path] = None, node_executable: str = "node"):
        self.resolve_from = Path(resolve_from) if resolve_from is not None else Path.cwd()
        self.node_executable = node_executable

    def _argv(self, args: List[str]) -> List[str]:
        script = (
            f"require(require.resolve('{AUTOLINKING_PACKAGE}', {{ paths: ['{self.resolve_from}'] }}))"
            "(process.argv.slice(1))"
        )
        return [self.node_executable, "--no-warnings", "--eval", script, *args]

    def resolve(self, args: List[str]) -> Dict[str, Any]:
        argv = self._argv(args)
        log.debug("Running %s", " ".join(args))
        try:
            r = subprocess.run(argv, capture_output=True, text=True)
        except OSError as exc:
            raise DiscoveryError(f"Couldn't run `{AUTOLINKING_PACKAGE}` command: {exc}") from exc

        if r.returncode != 0 and r.stderr:
            log.warning("`%s` exited with %s: %s", AUTOLINKING_PACKAGE, r.returncode, r.stderr.strip())

        try:
            return json.loads(r.stdout)
        except json.JSONDecodeError as exc:
            raise DiscoveryError(f"Couldn't parse JSON coming from `{AUTOLINKING_PACKAGE}` command:\n{exc}") from exc

    def run(self, args: List[str]) -> int:
        argv = self._argv(args)
        log.debug("Running %s", " ".join(args))
        try:
            r = subprocess.run(argv)
        except OSError as exc:
            raise DiscoveryError(f"Couldn't run `{AUTOLINKING_PACKAGE}` command: {exc}") from exc
        return r.returncode
