"""
Scene module.

Provides the node arena, sibling-order-preserving hierarchy mutation, batch
name allocation and outliner import/export.
"""

from bonewrap.scene.hierarchy import (
    collect_descendant_pivots,
    deepest_first,
    insert_position_of,
    remove_if_empty,
    reparent,
)
from bonewrap.scene.io import load_project, project_from_dict, project_to_dict, save_project
from bonewrap.scene.model import NodeKind, Project, ProjectSettings, SceneNode
from bonewrap.scene.names import UniqueNameAllocator

__all__ = [
    "NodeKind",
    "Project",
    "ProjectSettings",
    "SceneNode",
    "UniqueNameAllocator",
    "collect_descendant_pivots",
    "deepest_first",
    "insert_position_of",
    "remove_if_empty",
    "reparent",
    "load_project",
    "save_project",
    "project_from_dict",
    "project_to_dict",
]
