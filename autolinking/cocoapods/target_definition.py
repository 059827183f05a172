from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from .platform import Platform
from .podspec import Podspec


@dataclass(frozen=True)
class Dependency:
    name: str
    requirements: List[Any] = field(default_factory=list)

    @property
    def options(self) -> Dict[str, Any]:
        for req in self.requirements:
            if isinstance(req, dict):
                return req
        return {}


@dataclass
class TargetDefinition:
    """In-memory stand-in for a Podfile target definition.

    All mutation goes through `add_dependency` and `set_use_modular_headers_for_pod`.
    """

    name: str
    platform: Optional[Platform] = None
    dependencies: List[Dependency] = field(default_factory=list)

    # modular headers registry (`use_modular_headers!` / `:modular_headers => ...`)
    use_modular_headers_for_all: bool = False
    modular_headers_for_pods: Set[str] = field(default_factory=set)
    modular_headers_not_for_pods: Set[str] = field(default_factory=set)

    def existing_dependency_names(self) -> Set[str]:
        return {d.name for d in self.dependencies}

    def has_dependency(self, name: str) -> bool:
        return any(d.name == name for d in self.dependencies)

    def add_dependency(self, name: str, *requirements: Any) -> Dependency:
        dep = Dependency(name=name, requirements=list(requirements))
        self.dependencies.append(dep)
        return dep

    def build_pod_as_module(self, pod_name: str) -> bool:
        if pod_name in self.modular_headers_not_for_pods:
            return False
        if pod_name in self.modular_headers_for_pods:
            return True
        return self.use_modular_headers_for_all

    def set_use_modular_headers_for_pod(self, pod_name: str, flag: bool) -> None:
        if flag:
            self.modular_headers_for_pods.add(pod_name)
            self.modular_headers_not_for_pods.discard(pod_name)
        else:
            self.modular_headers_not_for_pods.add(pod_name)
            self.modular_headers_for_pods.discard(pod_name)

    def mark_pod_as_modular(self, pod_name: str) -> None:
        self.set_use_modular_headers_for_pod(pod_name, True)

    def platform_supported(self, podspec: Podspec) -> bool:
        from autolinking.core.compatibility import is_supported

        return is_supported(podspec, self.platform)
