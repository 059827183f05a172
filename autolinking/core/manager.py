from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from autolinking.cocoapods.podspec import FilePodspecLoader, PodspecLoader
from autolinking.cocoapods.target_definition import TargetDefinition

from . import discovery
from .actions import AddPod, PodAction
from .config import AutolinkingOptions, resolve_options
from .constants import SUPPORTED_PLATFORMS
from .errors import ConfigurationError
from .extra_pods import inject_extra_pods
from .models import ExtraPod, Package
from .selection import select_pods

log = logging.getLogger("autolinking.manager")


@dataclass
class AutolinkingReport:
    actions: List[PodAction] = field(default_factory=list)
    extra_pods: List[AddPod] = field(default_factory=list)

    @property
    def added(self) -> List[AddPod]:
        return [a for a in self.actions if isinstance(a, AddPod)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actions": [a.to_dict() for a in self.actions],
            "extra_pods": [a.to_dict() for a in self.extra_pods],
        }


class AutolinkingManager:
    """Links Expo modules found by `expo-modules-autolinking` into a Podfile target.

    Construction validates the target and runs the discovery command once; a target
    without a platform, or with one Expo modules do not support, is rejected before
    anything is resolved.
    """

    def __init__(
        self,
        target_definition: TargetDefinition,
        options: Optional[AutolinkingOptions] = None,
        *,
        discovery_client: Optional[discovery.DiscoveryClient] = None,
        podspec_loader: Optional[PodspecLoader] = None,
    ):
        self.target_definition = target_definition
        self.options = options if options is not None else resolve_options()
        self._discovery = discovery_client or discovery.NodeDiscoveryClient()
        self._podspec_loader = podspec_loader or FilePodspecLoader()

        self._validate_target_definition()
        result = discovery.parse_resolve_result(self._discovery.resolve(self.resolve_command_args()))

        self._packages: List[Package] = list(result.modules)
        self._extra_pods: List[ExtraPod] = list(result.extra_dependencies.ios_pods)

    def use_expo_modules(self) -> AutolinkingReport:
        report = AutolinkingReport()

        if self.has_packages():
            log.info("Using Expo modules")
            report.actions = select_pods(
                self._packages,
                self.target_definition,
                self._podspec_loader,
                self.options,
            )

        report.extra_pods = inject_extra_pods(self._extra_pods, self.target_definition)
        return report

    def generate_package_list(self, target_name: str, target_path: str) -> int:
        log.info("Generating package list for %s at %s", target_name, target_path)
        return self._discovery.run(self.generate_package_list_command_args(target_path))

    def has_packages(self) -> bool:
        return bool(self._packages)

    def packages_to_generate(self) -> List[Package]:
        """Packages that need to be included in the generated modules provider."""
        return [p for p in self._packages if p.modules]

    def modules_provider_name(self) -> str:
        return self.options.provider_name

    def modules_provider_path(self, support_files_dir: str) -> str:
        """`Pods/Target Support Files/<pods target name>/<modules provider file>`"""
        return os.path.join(support_files_dir, self.modules_provider_name())

    def should_generate_modules_provider(self) -> bool:
        # no modules provider is needed for testing
        return not self.options.tests_only

    def platform_name(self) -> Optional[str]:
        """Display name of the target platform (e.g. `iOS`), not lowercased."""
        platform = self.target_definition.platform
        return platform.string_name if platform is not None else None

    def base_command_args(self) -> List[str]:
        return discovery.base_command_args(self.options)

    def resolve_command_args(self) -> List[str]:
        return discovery.resolve_command_args(self._required_platform_name(), self.options)

    def generate_package_list_command_args(self, target_path: str) -> List[str]:
        return discovery.generate_package_list_command_args(self._required_platform_name(), self.options, target_path)

    # --- internals ---

    def _required_platform_name(self) -> str:
        name = self.platform_name()
        if name is None:
            raise ConfigurationError(f"Undefined platform for target {self.target_definition.name}")
        return name

    def _validate_target_definition(self) -> None:
        name = self.platform_name()

        # The platform must be declared for the target (e.g. `platform :ios, '13.0'`).
        if name is None:
            raise ConfigurationError(
                f"Undefined platform for target {self.target_definition.name}, "
                "make sure to call `platform` method globally or inside the target"
            )

        if name not in SUPPORTED_PLATFORMS:
            raise ConfigurationError(
                f"Target {self.target_definition.name} is dedicated to {name} platform, "
                "which is not supported by Expo Modules"
            )
