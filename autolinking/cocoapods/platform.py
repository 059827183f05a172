from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple, Union

# symbolic name -> display name
PLATFORM_NAMES = {
    "ios": "iOS",
    "osx": "macOS",
    "tvos": "tvOS",
    "watchos": "watchOS",
    "visionos": "visionOS",
}

_ALIASES = {
    "macos": "osx",
}

_VERSION_RE = re.compile(r"^\d+(\.\d+)*$")


@total_ordering
class Version:
    """Dotted numeric version; trailing zero segments are insignificant (13 == 13.0)."""

    def __init__(self, raw: Union[str, int, float, "Version"]):
        if isinstance(raw, Version):
            raw = raw.raw
        text = str(raw).strip()
        if not _VERSION_RE.match(text):
            raise ValueError(f"Malformed version number string {text!r}")
        self.raw = text
        self.segments: Tuple[int, ...] = tuple(int(x) for x in text.split("."))

    def _key(self) -> Tuple[int, ...]:
        segs = list(self.segments)
        while len(segs) > 1 and segs[-1] == 0:
            segs.pop()
        return tuple(segs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "Version") -> bool:
        a, b = list(self.segments), list(other.segments)
        width = max(len(a), len(b))
        a += [0] * (width - len(a))
        b += [0] * (width - len(b))
        return a < b

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Version({self.raw!r})"


@dataclass(frozen=True)
class Platform:
    name: str
    deployment_target: Optional[Version] = None

    def __post_init__(self):
        key = _ALIASES.get(self.name.lower(), self.name.lower())
        if key not in PLATFORM_NAMES:
            raise ValueError(f"Unrecognized platform {self.name!r}")
        object.__setattr__(self, "name", key)
        if self.deployment_target is not None and not isinstance(self.deployment_target, Version):
            object.__setattr__(self, "deployment_target", Version(self.deployment_target))

    @classmethod
    def of(cls, name: str, deployment_target: Union[str, Version, None] = None) -> "Platform":
        return cls(name, Version(deployment_target) if deployment_target is not None else None)

    @property
    def string_name(self) -> str:
        return PLATFORM_NAMES[self.name]

    def supports(self, other: "Platform") -> bool:
        """Whether a target on this platform can use something built for `other`.

        Names must match; when both sides carry a deployment target, ours must be at
        least as high as the one `other` asks for.
        """
        if other.name != self.name:
            return False
        if other.deployment_target is not None and self.deployment_target is not None:
            return other.deployment_target <= self.deployment_target
        return True

    def __str__(self) -> str:
        if self.deployment_target is None:
            return self.string_name
        return f"{self.string_name} {self.deployment_target}"


def all_platforms() -> Tuple[Platform, ...]:
    return tuple(Platform(name) for name in PLATFORM_NAMES)
