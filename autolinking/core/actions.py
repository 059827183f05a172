from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class SkipReason(str, Enum):
    ALREADY_ADDED = "already_added"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    NO_TEST_SPECS = "no_test_specs"


@dataclass(frozen=True)
class AddPod:
    name: str
    requirements: List[Any] = field(default_factory=list)
    package: Optional[str] = None

    @property
    def options(self) -> Dict[str, Any]:
        for req in self.requirements:
            if isinstance(req, dict):
                return req
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return {"action": "add", "name": self.name, "package": self.package, "requirements": self.requirements}


@dataclass(frozen=True)
class SkipPod:
    name: str
    reason: SkipReason
    package: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"action": "skip", "name": self.name, "package": self.package, "reason": self.reason.value}


PodAction = Union[AddPod, SkipPod]
