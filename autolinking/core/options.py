from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from autolinking.cocoapods.podspec import Podspec

from .constants import DEBUG_CONFIGURATION


@dataclass
class PodOptions:
    """Options passed along with a pod, built from ordered layers.

    Precedence (highest first): computed (`path`, `configuration`), package flags,
    global flags. `testspecs` is attached after merging.
    """

    computed: Dict[str, Any] = field(default_factory=dict)
    global_flags: Dict[str, Any] = field(default_factory=dict)
    package_flags: Dict[str, Any] = field(default_factory=dict)
    testspecs: Optional[List[str]] = None

    def source_of(self, key: str) -> Optional[str]:
        for name in ("computed", "package_flags", "global_flags"):
            if key in getattr(self, name):
                return name
        if key == "testspecs" and self.testspecs is not None:
            return "testspecs"
        return None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.computed)
        for layer in (self.global_flags, self.package_flags):
            for k, v in layer.items():
                if k not in self.computed:
                    out[k] = v
        if self.testspecs is not None:
            out["testspecs"] = list(self.testspecs)
        return out


def configuration_for(debug_only: bool) -> List[str]:
    # an empty list means all configurations
    return [DEBUG_CONFIGURATION] if debug_only else []


def podspec_test_spec_names(podspec: Podspec) -> List[str]:
    prefix = podspec.name + "/"
    return [name[len(prefix):] if name.startswith(prefix) else name for name in podspec.test_specs]


def merge_options(
    path: str,
    debug_only: bool,
    global_flags: Optional[Mapping[str, Any]],
    package_flags: Optional[Mapping[str, Any]],
    *,
    tests_only: bool = False,
    include_tests: bool = False,
    podspec: Optional[Podspec] = None,
    is_interface: bool = False,
) -> Optional[PodOptions]:
    """Build the options for one pod, or None when it has to be skipped.

    The skip only happens in tests-only mode, for a pod with no test specs that is
    not an interface.
    """
    opts = PodOptions(
        computed={"path": path, "configuration": configuration_for(debug_only)},
        global_flags=dict(global_flags or {}),
        package_flags=dict(package_flags or {}),
    )

    if tests_only or include_tests:
        names = podspec_test_spec_names(podspec) if podspec is not None else []
        if tests_only and not names and not is_interface:
            return None
        opts.testspecs = names

    return opts
