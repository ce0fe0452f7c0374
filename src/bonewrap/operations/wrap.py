"""
Wrap: move cube rotations into newly created parent groups.

For every target cube a group is inserted at the cube's former position,
carrying the cube's origin and rotation, and the cube is moved inside it with
its own rotation reset to zero. The rendered pose does not change.
"""

from __future__ import annotations

import logging

import numpy as np

from bonewrap.constants import (
    BONE_SUFFIX,
    DEFAULT_LEAF_NAME,
    GROUP_SUFFIX,
    LABEL_GROUP,
    LABEL_WRAP,
    NOTICE_GROUP_DONE,
    NOTICE_WRAP_DONE,
    NOTICE_WRAP_EMPTY,
    WRAP_FORCE_ALL,
)
from bonewrap.host import Host, transaction
from bonewrap.legality import RotationValidator
from bonewrap.operations.config import WrapConfig
from bonewrap.operations.report import OperationReport
from bonewrap.scene.hierarchy import insert_position_of, reparent
from bonewrap.scene.model import Handle, Project
from bonewrap.scene.names import UniqueNameAllocator

logger = logging.getLogger(__name__)

_ZERO = (0.0, 0.0, 0.0)


class WrapOperation:
    """
    Wrap cubes from the selection (or the whole project) into new groups.

    Example:
        >>> WrapOperation(WrapConfig(mode="fix-illegal")).run(session)
        OperationReport(pivots=1, leaves=1)
    """

    __slots__ = ("config", "_validator")

    def __init__(self, config: WrapConfig | None = None):
        self.config = config if config is not None else WrapConfig()
        self._validator = RotationValidator(self.config.allowed_set)

    @property
    def suffix(self) -> str:
        return GROUP_SUFFIX if self.config.preserve_rotation else BONE_SUFFIX

    def collect_targets(self, project: Project, selection: list[Handle]) -> list[Handle]:
        """
        Cubes to wrap, in selection order (or outliner order without a selection).
        """
        if selection:
            candidates = [h for h in dict.fromkeys(selection) if project.node(h).is_leaf]
        else:
            candidates = [node.handle for node in project.all_leaves()]

        if self.config.mode == WRAP_FORCE_ALL or not candidates:
            return candidates

        rotations = np.array([project.node(h).rotation for h in candidates], dtype=np.float64)
        mask = self._validator.needs_fixing_batch(rotations)
        return [h for h, illegal in zip(candidates, mask) if illegal]

    def wrap_one(self, project: Project, handle: Handle, names: UniqueNameAllocator) -> Handle:
        """
        Insert a new group in place of one cube and move the cube inside it.

        Returns:
            Handle of the created group
        """
        node = project.node(handle)
        parent = node.parent
        index = insert_position_of(project, handle)

        name = names.allocate(f"{node.name or DEFAULT_LEAF_NAME}{self.suffix}")
        pivot = project.add_pivot(
            name,
            rotation=_ZERO if self.config.preserve_rotation else node.rotation,
            origin=node.origin,
            parent=parent,
            index=index,
            is_bone=project.settings.bone_rig,
        )
        reparent(project, handle, pivot)

        if not self.config.preserve_rotation:
            node.rotation = _ZERO

        logger.debug("[Wrap] '%s' -> '%s'", node.name, name)
        return pivot

    def run(self, host: Host) -> OperationReport:
        project = host.project
        targets = self.collect_targets(project, host.selection())

        if not targets:
            logger.info("[Wrap] Nothing to wrap")
            host.notify(NOTICE_WRAP_EMPTY)
            return OperationReport()

        logger.info("[Wrap] Wrapping %d cube(s) (mode=%s)", len(targets), self.config.mode)
        names = UniqueNameAllocator(project.names())
        label = LABEL_GROUP if self.config.preserve_rotation else LABEL_WRAP

        with transaction(host, targets, label.format(count=len(targets))):
            for handle in targets:
                self.wrap_one(project, handle, names)

        notice = NOTICE_GROUP_DONE if self.config.preserve_rotation else NOTICE_WRAP_DONE
        host.notify(notice.format(leaves=len(targets)))
        return OperationReport(pivots=len(targets), leaves=len(targets))

    def __call__(self, host: Host) -> OperationReport:
        return self.run(host)

    def __repr__(self) -> str:
        return f"WrapOperation({self.config})"
