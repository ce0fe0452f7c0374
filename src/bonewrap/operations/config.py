"""
Configuration for wrap and unwrap operations.

Each published command is one fixed configuration of these dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass

from bonewrap.constants import (
    ALLOWED_ANGLE_SETS,
    DEFAULT_ALLOWED_SET,
    DEFAULT_BONE_MARKER,
    UNWRAP_NAMED,
    VALID_STRATEGIES,
    VALID_UNWRAP_MODES,
    VALID_WRAP_MODES,
    WRAP_FIX_ILLEGAL,
)


@dataclass(frozen=True)
class WrapConfig:
    """
    Configuration for wrapping cubes into new groups.

    Attributes:
        mode: "fix-illegal" (only cubes with disallowed angles) or "force-all"
        preserve_rotation: Keep the cube's rotation and give the group [0, 0, 0]
            instead of moving the rotation into the group
        allowed_set: Allowed-angle set used by "fix-illegal" ("base" or "extended")
    """

    mode: str = WRAP_FIX_ILLEGAL
    preserve_rotation: bool = False
    allowed_set: str = DEFAULT_ALLOWED_SET

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.mode not in VALID_WRAP_MODES:
            raise ValueError(
                f"Invalid mode: {self.mode}. Must be one of {sorted(VALID_WRAP_MODES)}"
            )
        if self.allowed_set not in ALLOWED_ANGLE_SETS:
            raise ValueError(
                f"Invalid allowed_set: {self.allowed_set}. "
                f"Must be one of {sorted(ALLOWED_ANGLE_SETS)}"
            )


@dataclass(frozen=True)
class UnwrapConfig:
    """
    Configuration for flattening groups back into their cubes.

    ``strategy`` has no default: exact and additive composition disagree for
    non-commuting rotations, so every caller picks one.

    Attributes:
        strategy: "matrix" (exact) or "additive" (approximate) rotation composition
        mode: "named" (groups whose name contains ``marker`` or flagged as bones) or "any"
        marker: Case-insensitive name marker for "named" mode
        recursive: Also flatten every group nested below the candidates
    """

    strategy: str
    mode: str = UNWRAP_NAMED
    marker: str = DEFAULT_BONE_MARKER
    recursive: bool = False

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.strategy not in VALID_STRATEGIES:
            raise ValueError(
                f"Invalid strategy: {self.strategy}. Must be one of {sorted(VALID_STRATEGIES)}"
            )
        if self.mode not in VALID_UNWRAP_MODES:
            raise ValueError(
                f"Invalid mode: {self.mode}. Must be one of {sorted(VALID_UNWRAP_MODES)}"
            )
        if self.mode == UNWRAP_NAMED and not self.marker:
            raise ValueError("marker must be a non-empty string in 'named' mode")
