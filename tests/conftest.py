from typing import Any, Dict, List, Optional

import pytest

from autolinking.cocoapods.platform import Platform
from autolinking.cocoapods.podspec import Podspec
from autolinking.cocoapods.target_definition import TargetDefinition
from autolinking.core.errors import PodspecLoadError
from autolinking.core.observability.metrics import reset_metrics


class FakePodspecLoader:
    """In-memory podspecs keyed by pod name; records every load."""

    def __init__(self, podspecs: Optional[Dict[str, Podspec]] = None):
        self.podspecs = dict(podspecs or {})
        self.loaded: List[str] = []

    def add(self, podspec: Podspec) -> None:
        self.podspecs[podspec.name] = podspec

    def load(self, pod_name: str, podspec_dir: str) -> Podspec:
        self.loaded.append(pod_name)
        if pod_name not in self.podspecs:
            raise PodspecLoadError(pod_name, podspec_dir, "file not found")
        return self.podspecs[pod_name]


class FakeDiscoveryClient:
    def __init__(self, result: Any):
        self.result = result
        self.resolve_calls: List[List[str]] = []
        self.run_calls: List[List[str]] = []

    def resolve(self, args: List[str]) -> Any:
        self.resolve_calls.append(list(args))
        return self.result

    def run(self, args: List[str]) -> int:
        self.run_calls.append(list(args))
        return 0


@pytest.fixture(autouse=True)
def _reset_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def ios_target():
    return TargetDefinition(name="App", platform=Platform.of("ios", "13.0"))


@pytest.fixture()
def podspec_loader():
    return FakePodspecLoader()


@pytest.fixture()
def make_discovery():
    return FakeDiscoveryClient


@pytest.fixture()
def make_podspec():
    def _make(name: str, platforms=None, test_specs=None, dependencies=None) -> Podspec:
        if platforms is None:
            platforms = {"ios": "11.0"}
        return Podspec(
            name=name,
            available_platforms=[Platform.of(p, v) for p, v in platforms.items()],
            test_specs=[f"{name}/{t}" for t in (test_specs or [])],
            all_dependencies=list(dependencies or []),
        )

    return _make
