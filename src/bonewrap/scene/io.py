"""
Outliner import/export (plain dicts and JSON files).

Layout:
    {
        "settings": {"bone_rig": false},
        "outliner": [
            {"type": "group", "name": "arm", "origin": [0, 0, 0], "rotation": [0, 0, 45],
             "is_bone": true, "children": [
                {"type": "cube", "name": "hand", "origin": [0, 4, 0], "rotation": [0, 0, 0]}
            ]}
        ]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from bonewrap.scene.model import Handle, NodeKind, Project, ProjectSettings

logger = logging.getLogger(__name__)

_KINDS = {kind.value: kind for kind in NodeKind}


def _node_from_dict(project: Project, entry: Any, parent: Handle | None, path: str) -> None:
    if not isinstance(entry, dict):
        raise ValueError(f"{path}: expected an object, got {type(entry).__name__}")

    kind_name = entry.get("type", NodeKind.PIVOT.value if "children" in entry else None)
    kind = _KINDS.get(kind_name)
    if kind is None:
        valid = ", ".join(sorted(_KINDS))
        raise ValueError(f"{path}.type='{kind_name}' is not valid. Valid options are: {valid}")

    name = str(entry.get("name", ""))
    if kind is NodeKind.LEAF:
        if entry.get("children"):
            raise ValueError(f"{path}: cube '{name}' cannot have children")
        project.add_leaf(name, entry.get("rotation"), entry.get("origin"), parent)
        return

    handle = project.add_pivot(
        name,
        entry.get("rotation"),
        entry.get("origin"),
        parent,
        is_bone=bool(entry.get("is_bone", False)),
    )
    children = entry.get("children", [])
    if not isinstance(children, list):
        raise ValueError(f"{path}.children must be a list, got {type(children).__name__}")
    for i, child in enumerate(children):
        _node_from_dict(project, child, handle, f"{path}.children[{i}]")


def _settings_from_dict(data: Any) -> ProjectSettings:
    if not isinstance(data, dict):
        raise ValueError(f"settings must be a dict, got {type(data).__name__}")
    valid = {f.name for f in fields(ProjectSettings)}
    for key in data:
        if key not in valid:
            raise ValueError(
                f"settings.{key} is not a known setting. "
                f"Valid options are: {', '.join(sorted(valid))}"
            )
    return ProjectSettings(**{key: bool(value) for key, value in data.items()})


def project_from_dict(data: dict[str, Any]) -> Project:
    """
    Build a Project from an outliner dict.

    Raises:
        ValueError: If the settings or an entry are malformed
    """
    settings = _settings_from_dict(data.get("settings", {}))
    project = Project(settings)
    outliner = data.get("outliner", [])
    if not isinstance(outliner, list):
        raise ValueError(f"outliner must be a list, got {type(outliner).__name__}")
    for i, entry in enumerate(outliner):
        _node_from_dict(project, entry, None, f"outliner[{i}]")
    logger.debug("[IO] Loaded %d node(s) from dict", len(project))
    return project


def _node_to_dict(project: Project, handle: Handle) -> dict[str, Any]:
    node = project.node(handle)
    entry: dict[str, Any] = {
        "type": node.kind.value,
        "name": node.name,
        "origin": node.origin.tolist(),
        "rotation": node.rotation.tolist(),
    }
    if node.is_pivot:
        entry["is_bone"] = node.is_bone
        entry["children"] = [_node_to_dict(project, child) for child in node.children]
    return entry


def project_to_dict(project: Project) -> dict[str, Any]:
    return {
        "settings": {"bone_rig": project.settings.bone_rig},
        "outliner": [_node_to_dict(project, handle) for handle in project.roots],
    }


def load_project(path: str | Path) -> Project:
    logger.info("[IO] Loading project from: %s", path)
    with open(path, encoding="utf-8") as f:
        return project_from_dict(json.load(f))


def save_project(project: Project, path: str | Path) -> None:
    logger.info("[IO] Saving project to: %s", path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(project_to_dict(project), f, indent=2)
