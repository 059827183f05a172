from __future__ import annotations

from typing import Optional

from autolinking.cocoapods.platform import Platform
from autolinking.cocoapods.podspec import Podspec


def is_supported(podspec: Podspec, platform: Optional[Platform]) -> bool:
    """Whether the podspec declares support for the target platform.

    Compares the platform name and the deployment target: the target's deployment
    target must be at least the minimum the podspec asks for.
    """
    if platform is None:
        return False
    return any(platform.supports(available) for available in podspec.available_platforms)
