"""
Hierarchy mutation: moving nodes between groups while keeping sibling order.

All functions operate on a Project and take node handles. Moving a node never
changes the relative order of the other nodes in either the old or the new
child list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bonewrap.scene.model import Handle, Project

logger = logging.getLogger(__name__)


def insert_position_of(project: Project, handle: Handle) -> int | None:
    """
    Current index of a node among its siblings.

    Returns:
        Index in the parent's child list, or None (append) for top-level nodes
    """
    node = project.node(handle)
    if node.parent is None:
        return None
    return project.owner_list(node.parent).index(handle)


def reparent(
    project: Project,
    handle: Handle,
    new_parent: Handle | None,
    index: int | None = None,
) -> None:
    """
    Move a node under ``new_parent`` at ``index``.

    Args:
        project: Project owning both nodes
        handle: Node to move
        new_parent: Destination group, or None for top level
        index: Position in the destination child list; None appends

    Raises:
        ValueError: If the destination is a cube, the node itself or one of its descendants
    """
    node = project.node(handle)
    if new_parent is not None:
        target = project.node(new_parent)
        if not target.is_pivot:
            raise ValueError(f"Cannot move '{node.name}' under cube '{target.name}'")
        if new_parent == handle or project.is_ancestor(handle, new_parent):
            raise ValueError(f"Cannot move '{node.name}' into its own subtree")

    project.owner_list(node.parent).remove(handle)
    destination = project.owner_list(new_parent)
    if index is None:
        destination.append(handle)
    else:
        destination.insert(index, handle)
    node.parent = new_parent

    logger.debug(
        "[Hierarchy] Moved '%s' under %s at %s",
        node.name,
        "root" if new_parent is None else f"#{new_parent}",
        "end" if index is None else index,
    )


def remove_if_empty(project: Project, handle: Handle) -> bool:
    """
    Delete a group once all of its children have been moved elsewhere.

    Returns:
        True if the group was deleted, False if it still has children
    """
    if project.node(handle).children:
        return False
    project.delete(handle)
    return True


def collect_descendant_pivots(project: Project, roots: Iterable[Handle]) -> list[Handle]:
    """
    Depth-first collection of the given groups and every group below them.

    A visited set keeps each group once even when ``roots`` overlap.

    Returns:
        Group handles in discovery order
    """
    visited: set[Handle] = set()
    collected: list[Handle] = []
    stack = list(reversed(list(roots)))
    while stack:
        handle = stack.pop()
        if handle in visited:
            continue
        visited.add(handle)
        node = project.node(handle)
        if not node.is_pivot:
            continue
        collected.append(handle)
        stack.extend(child for child in reversed(node.children) if child not in visited)
    return collected


def deepest_first(project: Project, handles: Iterable[Handle]) -> list[Handle]:
    """Stable sort of handles by descending depth."""
    return sorted(handles, key=project.depth, reverse=True)
