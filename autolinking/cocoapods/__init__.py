from .platform import Platform, Version
from .podspec import FilePodspecLoader, Podspec, PodspecLoader
from .target_definition import Dependency, TargetDefinition

__all__ = [
    "Dependency",
    "FilePodspecLoader",
    "Platform",
    "Podspec",
    "PodspecLoader",
    "TargetDefinition",
    "Version",
]
