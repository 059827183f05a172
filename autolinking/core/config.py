"""
Autolinking options.

Options come from the `use_expo_modules!` call site (a mapping) and, optionally,
from a YAML or JSON file merged underneath:

    searchPaths: [../../packages]
    exclude: [expo-camera]
    flags:
      inhibit_warnings: true

Environment variable:
    AUTOLINKING_OPTIONS_FILE — path to the options file (optional).
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .constants import MODULES_PROVIDER_FILE_NAME, OPTIONS_FILE_ENV

_log = logging.getLogger("autolinking.config")


def _str_list(v: Any) -> Optional[List[str]]:
    if v is None:
        return None
    if isinstance(v, (str, Path)):
        return [str(v)]
    if isinstance(v, (list, tuple)):
        return [str(x) for x in v if isinstance(x, (str, Path))]
    return None


@dataclass
class AutolinkingOptions:
    flags: Dict[str, Any] = field(default_factory=dict)
    tests_only: bool = False
    include_tests: bool = False
    provider_name: str = MODULES_PROVIDER_FILE_NAME
    search_paths: Optional[List[str]] = None
    ignore_paths: Optional[List[str]] = None
    exclude: List[str] = field(default_factory=list)

    # podspec paths are made relative to this directory (the Podfile's directory)
    project_root: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "AutolinkingOptions":
        """
        Accepts None or a mapping using either the Podfile spelling
        (`testsOnly`, `searchPaths`, ...) or snake_case keys.
        `searchPaths` falls back to the legacy `modules_paths`.
        """
        if payload is None:
            return cls()
        if not isinstance(payload, dict):
            _log.warning("Ignoring autolinking options of type %s (expected a mapping)", type(payload).__name__)
            return cls()

        def pick(*keys: str, default: Any = None) -> Any:
            for k in keys:
                if k in payload and payload[k] is not None:
                    return payload[k]
            return default

        flags = pick("flags", default={})
        if not isinstance(flags, dict):
            _log.warning("Ignoring autolinking flags of type %s (expected a mapping)", type(flags).__name__)
            flags = {}

        provider_name = pick("providerName", "provider_name", default=MODULES_PROVIDER_FILE_NAME)
        project_root = pick("projectRoot", "project_root")

        return cls(
            flags=dict(flags),
            tests_only=bool(pick("testsOnly", "tests_only", default=False)),
            include_tests=bool(pick("includeTests", "include_tests", default=False)),
            provider_name=str(provider_name),
            search_paths=_str_list(pick("searchPaths", "search_paths", "modules_paths")),
            ignore_paths=_str_list(pick("ignorePaths", "ignore_paths")),
            exclude=_str_list(pick("exclude", default=[])) or [],
            project_root=str(project_root) if project_root is not None else None,
        )

    @property
    def test_mode(self) -> bool:
        return self.tests_only or self.include_tests


def load_options_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load options from a YAML or JSON file.

    Returns an empty dict if the file is absent, not readable, or malformed.
    """
    resolved = _resolve_path(path)
    if resolved is None or not resolved.exists():
        return {}

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read autolinking options file %s: %s", resolved, exc)
        return {}

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse autolinking options file %s as JSON or YAML: %s", resolved, exc)
            return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        _log.warning("Autolinking options file %s must be a mapping, got %s", resolved, type(data).__name__)
        return {}

    _log.info("Loaded autolinking options from %s", resolved)
    return data


def resolve_options(payload: Any = None, *, options_file: Optional[Path] = None) -> AutolinkingOptions:
    """File options first, call-site options on top."""
    merged: Dict[str, Any] = dict(load_options_file(options_file))
    if isinstance(payload, dict):
        merged.update(payload)
        return AutolinkingOptions.from_payload(merged)
    if payload is not None:
        return AutolinkingOptions.from_payload(payload)
    return AutolinkingOptions.from_payload(merged)


def _resolve_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_path = os.getenv(OPTIONS_FILE_ENV, "").strip()
    if env_path:
        return Path(env_path)
    return None
