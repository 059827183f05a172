from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

log = logging.getLogger("autolinking.modular_headers")


@dataclass(frozen=True)
class SpecName:
    """A dependency name such as `ReactCommon/turbomodule/core` split at the first `/`."""

    root: str
    qualifier: Optional[str] = None

    @classmethod
    def parse(cls, name: str) -> "SpecName":
        root, sep, rest = name.partition("/")
        return cls(root=root, qualifier=rest if sep else None)

    def __str__(self) -> str:
        return f"{self.root}/{self.qualifier}" if self.qualifier else self.root


def ensure_modular_headers(
    dependency_names: Iterable[str],
    is_modular: Callable[[str], bool],
    mark_modular: Callable[[str], None],
) -> List[str]:
    """Force modular headers on the root spec of every dependency not built as a module yet.

    Modular headers can only be enabled for a whole pod, never for a subspec, so the
    subspec path is dropped before the lookup. Returns the roots that were marked.
    """
    marked: List[str] = []
    for name in dependency_names:
        root = SpecName.parse(name).root
        if is_modular(root):
            continue
        log.info("[Expo] Enabling modular headers for pod %s", root)
        mark_modular(root)
        marked.append(root)
    return marked
