from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

from autolinking.cocoapods.podspec import PodspecLoader
from autolinking.cocoapods.target_definition import TargetDefinition

from .actions import AddPod, PodAction, SkipPod, SkipReason
from .compatibility import is_supported
from .config import AutolinkingOptions
from .modular_headers import ensure_modular_headers
from .models import Package, Pod
from .observability.metrics import inc_pod
from .options import merge_options

log = logging.getLogger("autolinking.selection")


def _relative_podspec_dir(pod: Pod, project_root: Optional[str]) -> str:
    if not project_root:
        return pod.podspec_dir
    return os.path.relpath(pod.podspec_dir, project_root)


def _skip(actions: List[PodAction], pod: Pod, package: Package, reason: SkipReason) -> None:
    actions.append(SkipPod(name=pod.pod_name, reason=reason, package=package.name))
    inc_pod(reason.value)


def select_pods(
    packages: Iterable[Package],
    target: TargetDefinition,
    loader: PodspecLoader,
    options: AutolinkingOptions,
) -> List[PodAction]:
    """Add every eligible pod of the discovered packages to the target.

    Pods are visited in declared order and each one goes through:
      1) already added to the target -> skip (podspec is not loaded)
      2) podspec does not support the target platform -> skip
      3) package links Swift modules -> force modular headers on its dependencies
      4) tests-only mode without test specs (interfaces excepted) -> skip
      5) add to the target

    Podspec load failures propagate; there is no per-pod recovery.
    """
    actions: List[PodAction] = []

    for package in packages:
        for pod in package.pods:
            # A pod added before `use_expo_modules!` keeps its custom options.
            if target.has_dependency(pod.pod_name):
                log.info("— %s is already added to the target", package.name)
                _skip(actions, pod, package, SkipReason.ALREADY_ADDED)
                continue

            podspec = loader.load(pod.pod_name, pod.podspec_dir)

            if not is_supported(podspec, target.platform):
                platform_name = target.platform.string_name if target.platform else "(undefined)"
                log.info("- %s doesn't support %s platform", package.name, platform_name)
                _skip(actions, pod, package, SkipReason.UNSUPPORTED_PLATFORM)
                continue

            # Without this, `pod install` fails for Swift pods unless the Podfile
            # declares `use_modular_headers!` or lists every transitive dependency.
            if package.has_swift_modules_to_link:
                ensure_modular_headers(
                    podspec.all_dependencies,
                    target.build_pod_as_module,
                    target.mark_pod_as_modular,
                )

            pod_options = merge_options(
                _relative_podspec_dir(pod, options.project_root),
                package.debug_only,
                options.flags,
                package.flags,
                tests_only=options.tests_only,
                include_tests=options.include_tests,
                podspec=podspec,
                is_interface=pod.is_interface,
            )
            if pod_options is None:
                log.info("- %s has no test specs, skipping", pod.pod_name)
                _skip(actions, pod, package, SkipReason.NO_TEST_SPECS)
                continue

            dep = target.add_dependency(pod.pod_name, pod_options.to_dict())
            actions.append(AddPod(name=dep.name, requirements=dep.requirements, package=package.name))
            inc_pod("added")

            if pod.is_interface:
                continue
            log.info("— %s (%s)", package.name, package.version)

    return actions
