"""
bonewrap - Rotation normalization for block-model outliners

Moves illegal cube rotations into generated parent bones, and flattens bones
back into their cubes, without changing the rendered pose.

Features:
- Allowed-angle legality checks (base set, or extended with +/-180)
- Exact Euler/matrix rotation algebra (R = Rz @ Ry @ Rx) with gimbal-lock handling
- Additive rotation composition for axis-aligned rigs
- Node arena with sibling-order-preserving reparenting
- Collision-free bone naming per batch
- Deepest-first flattening of nested groups
- One undo step per batch through the host transaction interface

Example - Fix illegal rotations:
    >>> from bonewrap import EditorSession, Project, run_command
    >>>
    >>> project = Project()
    >>> project.add_leaf("leaf", rotation=[10, 0, 0], origin=[1, 2, 3])
    >>> session = EditorSession(project)
    >>> run_command("fix-illegal-wrap", session)
    >>> session.notices[-1]
    'Done: 1 cube(s) wrapped into bones and reset to 0,0,0.'

Example - Flatten with an explicit strategy:
    >>> from bonewrap import UnwrapConfig, UnwrapOperation
    >>>
    >>> op = UnwrapOperation(UnwrapConfig(strategy="matrix", mode="any", recursive=True))
    >>> report = op.run(session)
"""

__version__ = "0.1.0"

# Published commands
from bonewrap.commands import available_commands, run_command

# Host interface
from bonewrap.host import EditorSession, Host, transaction

# Legality
from bonewrap.legality import RotationValidator, allowed_angles

# Operations
from bonewrap.operations import (
    OperationReport,
    UnwrapConfig,
    UnwrapOperation,
    WrapConfig,
    WrapOperation,
)

# Rotation algebra
from bonewrap.rotation import (
    combine,
    combine_additive,
    combine_matrix,
    euler_to_matrix,
    mat_mul,
    matrix_to_euler,
    normalize_angle,
    normalize_rotation,
    rotate_point_around,
)

# Scene
from bonewrap.scene import (
    NodeKind,
    Project,
    ProjectSettings,
    SceneNode,
    UniqueNameAllocator,
    load_project,
    project_from_dict,
    project_to_dict,
    save_project,
)

__all__ = [
    # Version
    "__version__",
    # Commands
    "available_commands",
    "run_command",
    # Host
    "EditorSession",
    "Host",
    "transaction",
    # Legality
    "RotationValidator",
    "allowed_angles",
    # Operations
    "OperationReport",
    "UnwrapConfig",
    "UnwrapOperation",
    "WrapConfig",
    "WrapOperation",
    # Rotation algebra
    "combine",
    "combine_additive",
    "combine_matrix",
    "euler_to_matrix",
    "mat_mul",
    "matrix_to_euler",
    "normalize_angle",
    "normalize_rotation",
    "rotate_point_around",
    # Scene
    "NodeKind",
    "Project",
    "ProjectSettings",
    "SceneNode",
    "UniqueNameAllocator",
    "load_project",
    "save_project",
    "project_from_dict",
    "project_to_dict",
]
