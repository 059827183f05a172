from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from autolinking.cocoapods.target_definition import TargetDefinition

from .actions import AddPod
from .models import ExtraPod
from .observability.metrics import inc_pod

log = logging.getLogger("autolinking.extra_pods")

# order in which options are written
EXTRA_POD_OPTION_KEYS = (
    "configurations",
    "modular_headers",
    "source",
    "path",
    "podspec",
    "testspecs",
    "git",
    "branch",
    "tag",
    "commit",
)


def extra_pod_requirements(pod: ExtraPod) -> List[Any]:
    """`[version?, {options}]`; only options that are set (and truthy) are written."""
    requirements: List[Any] = []
    if pod.version:
        requirements.append(pod.version)

    options: Dict[str, Any] = {}
    for key in EXTRA_POD_OPTION_KEYS:
        value = getattr(pod, key)
        if value:
            options[key] = value
    requirements.append(options)
    return requirements


def inject_extra_pods(extra_pods: Iterable[ExtraPod], target: TargetDefinition) -> List[AddPod]:
    """Add each extra pod to the target. No duplicate check against existing dependencies."""
    added: List[AddPod] = []
    for pod in extra_pods:
        log.info("Adding extra pod - %s (%s)", pod.name, pod.version or "*")
        dep = target.add_dependency(pod.name, *extra_pod_requirements(pod))
        added.append(AddPod(name=dep.name, requirements=dep.requirements))
        inc_pod("extra")
    return added
