"""
Scene model: cubes, groups and the project that owns them.

Nodes live in an arena addressed by stable integer handles. Parent links and
child lists hold handles, never node objects, so a group can be deleted while
its former children are being relocated without leaving dangling references.
Top-level nodes are owned by the project's ordered root list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

import numpy as np

from bonewrap.rotation.api import as_vec3, normalize_rotation

logger = logging.getLogger(__name__)

Handle: TypeAlias = int


class NodeKind(str, Enum):
    """Type discriminator, valued after the editor's element types."""

    LEAF = "cube"
    PIVOT = "group"


@dataclass
class ProjectSettings:
    """
    Per-project configuration read by the operations.

    Attributes:
        bone_rig: Tag newly created groups as rig bones (affects export only)
    """

    bone_rig: bool = False


class SceneNode:
    """
    A cube (leaf) or group (pivot) in the outliner.

    ``rotation`` is stored normalized into (-180, 180] per axis and ``origin`` is
    the model-space point the rotation is applied about. Both setters coerce
    missing or non-numeric components to 0.
    """

    __slots__ = ("handle", "kind", "name", "parent", "children", "is_bone", "_rotation", "_origin")

    def __init__(
        self,
        handle: Handle,
        kind: NodeKind,
        name: str = "",
        rotation: Iterable[float] | None = None,
        origin: Iterable[float] | None = None,
        is_bone: bool = False,
    ):
        self.handle = handle
        self.kind = kind
        self.name = name
        self.parent: Handle | None = None
        self.children: list[Handle] = []
        self.is_bone = bool(is_bone) if kind is NodeKind.PIVOT else False
        self.rotation = rotation
        self.origin = origin

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value: Iterable[float] | None) -> None:
        self._rotation = normalize_rotation(value)

    @property
    def origin(self) -> np.ndarray:
        return self._origin.copy()

    @origin.setter
    def origin(self, value: Iterable[float] | None) -> None:
        self._origin = as_vec3(value)

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def is_pivot(self) -> bool:
        return self.kind is NodeKind.PIVOT

    def __repr__(self) -> str:
        return (
            f"SceneNode({self.kind.value} #{self.handle} '{self.name}', "
            f"rotation={self._rotation.tolist()}, origin={self._origin.tolist()})"
        )


class Project:
    """
    Arena of scene nodes plus the ordered list of top-level nodes.

    Example:
        >>> project = Project()
        >>> arm = project.add_pivot("arm", rotation=[0, 0, 45])
        >>> hand = project.add_leaf("hand", origin=[0, 4, 0], parent=arm)
        >>> [n.name for n in project.walk()]
        ['arm', 'hand']
    """

    __slots__ = ("_nodes", "_roots", "_next_handle", "settings")

    def __init__(self, settings: ProjectSettings | None = None):
        self._nodes: dict[Handle, SceneNode] = {}
        self._roots: list[Handle] = []
        self._next_handle: Handle = 1
        self.settings = settings if settings is not None else ProjectSettings()

    # ------------------------------------------------------------------
    # Creation and lookup
    # ------------------------------------------------------------------

    def _add(
        self,
        kind: NodeKind,
        name: str,
        rotation: Iterable[float] | None,
        origin: Iterable[float] | None,
        parent: Handle | None,
        index: int | None,
        is_bone: bool = False,
    ) -> Handle:
        if parent is not None and not self.node(parent).is_pivot:
            raise ValueError(f"Cannot add '{name}' under cube #{parent}; only groups have children")

        handle = self._next_handle
        self._next_handle += 1
        node = SceneNode(handle, kind, name, rotation, origin, is_bone)
        self._nodes[handle] = node

        owner = self.owner_list(parent)
        if index is None:
            owner.append(handle)
        else:
            owner.insert(index, handle)
        node.parent = parent
        return handle

    def add_leaf(
        self,
        name: str,
        rotation: Iterable[float] | None = None,
        origin: Iterable[float] | None = None,
        parent: Handle | None = None,
        index: int | None = None,
    ) -> Handle:
        """Create a cube and attach it under ``parent`` (top level if None)."""
        return self._add(NodeKind.LEAF, name, rotation, origin, parent, index)

    def add_pivot(
        self,
        name: str,
        rotation: Iterable[float] | None = None,
        origin: Iterable[float] | None = None,
        parent: Handle | None = None,
        index: int | None = None,
        is_bone: bool = False,
    ) -> Handle:
        """Create a group and attach it under ``parent`` (top level if None)."""
        return self._add(NodeKind.PIVOT, name, rotation, origin, parent, index, is_bone)

    def node(self, handle: Handle) -> SceneNode:
        try:
            return self._nodes[handle]
        except KeyError:
            raise KeyError(f"No node with handle {handle} in project") from None

    def find(self, name: str) -> SceneNode | None:
        """Return the first node named ``name`` in outliner order, if any."""
        for node in self.walk():
            if node.name == name:
                return node
        return None

    def owner_list(self, parent: Handle | None) -> list[Handle]:
        """The live ordered child list owned by ``parent`` (the root list for None)."""
        if parent is None:
            return self._roots
        return self.node(parent).children

    def siblings_of(self, handle: Handle) -> tuple[Handle, ...]:
        """Snapshot of the owner list holding ``handle``, including the node itself."""
        return tuple(self.owner_list(self.node(handle).parent))

    @property
    def roots(self) -> tuple[Handle, ...]:
        return tuple(self._roots)

    def __contains__(self, handle: object) -> bool:
        return handle in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def walk(self, start: Iterable[Handle] | None = None) -> Iterator[SceneNode]:
        """Depth-first pre-order traversal in outliner order."""
        stack = list(reversed(list(self._roots if start is None else start)))
        while stack:
            node = self._nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def all_leaves(self) -> list[SceneNode]:
        return [n for n in self.walk() if n.is_leaf]

    def all_pivots(self) -> list[SceneNode]:
        return [n for n in self.walk() if n.is_pivot]

    def names(self) -> set[str]:
        return {n.name for n in self._nodes.values()}

    def depth(self, handle: Handle) -> int:
        """Number of ancestor hops to the root (0 for top-level nodes)."""
        depth = 0
        parent = self.node(handle).parent
        while parent is not None:
            depth += 1
            parent = self._nodes[parent].parent
        return depth

    def is_ancestor(self, ancestor: Handle, handle: Handle) -> bool:
        parent = self.node(handle).parent
        while parent is not None:
            if parent == ancestor:
                return True
            parent = self._nodes[parent].parent
        return False

    # ------------------------------------------------------------------
    # Removal and copying
    # ------------------------------------------------------------------

    def delete(self, handle: Handle) -> None:
        """Remove a childless node from its owner list and from the arena."""
        node = self.node(handle)
        if node.children:
            raise ValueError(
                f"Cannot delete '{node.name}' while it still owns {len(node.children)} node(s)"
            )
        self.owner_list(node.parent).remove(handle)
        del self._nodes[handle]
        logger.debug("[Project] Deleted %s #%d '%s'", node.kind.value, handle, node.name)

    def copy(self) -> Project:
        return deepcopy(self)

    def restore(self, other: Project) -> None:
        """Replace this project's contents with a deep copy of ``other``."""
        snapshot = deepcopy(other)
        self._nodes = snapshot._nodes
        self._roots = snapshot._roots
        self._next_handle = snapshot._next_handle
        self.settings = snapshot.settings
