"""
Collision-free names for groups created during a batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class UniqueNameAllocator:
    """
    Hands out ``{base}_{n}`` names that are not yet used in the project.

    Each returned name is reserved immediately, and a per-base counter remembers
    where the next search starts, so no two allocations in one batch collide.

    Example:
        >>> names = UniqueNameAllocator(["cube_bone_1"])
        >>> names.allocate("cube_bone")
        'cube_bone_2'
        >>> names.allocate("cube_bone")
        'cube_bone_3'
    """

    __slots__ = ("_taken", "_counters")

    def __init__(self, existing: Iterable[str] = ()):
        self._taken: set[str] = set(existing)
        self._counters: dict[str, int] = {}

    def allocate(self, base: str) -> str:
        n = self._counters.get(base, 1)
        name = f"{base}_{n}"
        while name in self._taken:
            n += 1
            name = f"{base}_{n}"
        self._counters[base] = n + 1
        self._taken.add(name)
        logger.debug("[Names] Allocated '%s'", name)
        return name

    def reserve(self, name: str) -> None:
        """Mark a name created elsewhere as taken."""
        self._taken.add(name)

    def __contains__(self, name: object) -> bool:
        return name in self._taken
