from __future__ import annotations


class AutolinkingError(Exception):
    pass


class ConfigurationError(AutolinkingError):
    """Target definition cannot host Expo modules (missing or unsupported platform)."""


class DiscoveryError(AutolinkingError):
    """Output of the discovery command could not be parsed."""


class PodspecLoadError(AutolinkingError):
    def __init__(self, pod_name: str, path: str, reason: str):
        super().__init__(f"Cannot load podspec for {pod_name} from {path}: {reason}")
        self.pod_name = pod_name
        self.path = path
        self.reason = reason
