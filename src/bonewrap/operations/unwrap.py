"""
Unwrap: flatten group rotations back into their cubes and remove the groups.

Each direct cube child takes over the group's transform: its origin is rotated
about the group origin and its rotation is composed with the group rotation,
using the exact matrix strategy or the additive approximation. The cubes then
take the group's place among its siblings, in their original order, and the
emptied group is deleted.

Nested groups are flattened deepest first so that moving an ancestor's
children never invalidates a descendant that is still waiting.
"""

from __future__ import annotations

import logging

from bonewrap.constants import (
    LABEL_UNWRAP,
    NOTICE_UNWRAP_ANY_EMPTY,
    NOTICE_UNWRAP_DONE,
    NOTICE_UNWRAP_EMPTY,
    UNWRAP_NAMED,
)
from bonewrap.host import Host, transaction
from bonewrap.operations.config import UnwrapConfig
from bonewrap.operations.report import OperationReport
from bonewrap.rotation.api import combine, rotate_point_around
from bonewrap.scene.hierarchy import (
    collect_descendant_pivots,
    deepest_first,
    insert_position_of,
    remove_if_empty,
    reparent,
)
from bonewrap.scene.model import Handle, Project, SceneNode

logger = logging.getLogger(__name__)


class UnwrapOperation:
    """
    Flatten groups from the selection (or the whole project) into their cubes.

    Every direct cube child of a target group is flattened, in child order.
    Groups that still hold other groups afterwards are left in place.

    Example:
        >>> config = UnwrapConfig(strategy="matrix", mode="any", recursive=True)
        >>> UnwrapOperation(config).run(session)
        OperationReport(pivots=2, leaves=1)
    """

    __slots__ = ("config",)

    def __init__(self, config: UnwrapConfig):
        self.config = config

    def matches(self, node: SceneNode) -> bool:
        if not node.is_pivot:
            return False
        if self.config.mode != UNWRAP_NAMED:
            return True
        return node.is_bone or self.config.marker.lower() in node.name.lower()

    def collect_targets(self, project: Project, selection: list[Handle]) -> list[Handle]:
        """
        Groups to flatten, sorted deepest first.
        """
        if selection:
            candidates = [h for h in dict.fromkeys(selection) if project.node(h).is_pivot]
        else:
            candidates = [node.handle for node in project.all_pivots()]

        if self.config.recursive:
            candidates = collect_descendant_pivots(project, candidates)

        targets = [h for h in candidates if self.matches(project.node(h))]
        return deepest_first(project, targets)

    def unwrap_one(self, project: Project, handle: Handle) -> list[Handle]:
        """
        Flatten one group into its parent.

        Returns:
            Handles of the cubes moved out of the group, in their new order
        """
        group = project.node(handle)
        parent = group.parent
        index = insert_position_of(project, handle)
        rotation = group.rotation
        origin = group.origin

        leaves = [h for h in group.children if project.node(h).is_leaf]
        for moved, leaf_handle in enumerate(leaves):
            leaf = project.node(leaf_handle)
            leaf.origin = rotate_point_around(leaf.origin, rotation, origin)
            leaf.rotation = combine(rotation, leaf.rotation, self.config.strategy)
            reparent(project, leaf_handle, parent, None if index is None else index + moved)

        if remove_if_empty(project, handle):
            logger.debug("[Unwrap] Removed '%s' (%d cube(s) moved)", group.name, len(leaves))
        else:
            logger.debug("[Unwrap] Kept '%s', it still holds nested groups", group.name)
        return leaves

    def affected_nodes(self, project: Project, targets: list[Handle]) -> list[Handle]:
        """
        Targets plus every cube they directly hold, i.e. every node a batch rewrites.

        Empty when no target has a cube child and none is empty, in which case
        flattening would change nothing.
        """
        affected: list[Handle] = []
        changes = False
        for handle in targets:
            children = project.node(handle).children
            leaves = [h for h in children if project.node(h).is_leaf]
            changes = changes or bool(leaves) or not children
            affected.append(handle)
            affected.extend(leaves)
        return affected if changes else []

    def run(self, host: Host) -> OperationReport:
        project = host.project
        targets = self.collect_targets(project, host.selection())
        affected = self.affected_nodes(project, targets)

        if not affected:
            logger.info("[Unwrap] Nothing to unwrap (%d candidate group(s))", len(targets))
            host.notify(
                NOTICE_UNWRAP_EMPTY if self.config.mode == UNWRAP_NAMED else NOTICE_UNWRAP_ANY_EMPTY
            )
            return OperationReport()

        logger.info(
            "[Unwrap] Flattening %d group(s) (strategy=%s)", len(targets), self.config.strategy
        )
        moved: set[Handle] = set()
        unwrapped = 0
        with transaction(host, affected, LABEL_UNWRAP.format(count=len(targets))):
            for handle in targets:
                leaves = self.unwrap_one(project, handle)
                moved.update(leaves)
                # Groups holding only other groups are left untouched
                if leaves or handle not in project:
                    unwrapped += 1

        host.notify(NOTICE_UNWRAP_DONE.format(pivots=unwrapped, leaves=len(moved)))
        return OperationReport(pivots=unwrapped, leaves=len(moved))

    def __call__(self, host: Host) -> OperationReport:
        return self.run(host)

    def __repr__(self) -> str:
        return f"UnwrapOperation({self.config})"
