"""
Constants and default values for bonewrap operations.

Centralizes magic numbers, angle sets and notice templates for better maintainability.
"""

from __future__ import annotations

# =============================================================================
# Rotation Legality
# =============================================================================

# Angles the target format accepts on an unwrapped cube (degrees)
BASE_ALLOWED_ANGLES = (0.0, 22.5, 45.0, 67.5, 90.0, 135.0, -22.5, -45.0, -67.5, -90.0, -135.0)
EXTENDED_ALLOWED_ANGLES = BASE_ALLOWED_ANGLES + (180.0, -180.0)

ALLOWED_ANGLE_SETS = {
    "base": BASE_ALLOWED_ANGLES,
    "extended": EXTENDED_ALLOWED_ANGLES,
}
DEFAULT_ALLOWED_SET = "base"

ANGLE_EPSILON = 1e-6  # Membership tolerance and zero-snap threshold

# =============================================================================
# Rotation Algebra
# =============================================================================

GIMBAL_LOCK_THRESHOLD = 0.99999  # |R[2][0]| at or above this takes the locked branch
ADDITIVE_DECIMALS = 6  # Rounding applied to additive-composed angles

STRATEGY_MATRIX = "matrix"
STRATEGY_ADDITIVE = "additive"
VALID_STRATEGIES = {STRATEGY_MATRIX, STRATEGY_ADDITIVE}

# =============================================================================
# Naming
# =============================================================================

DEFAULT_LEAF_NAME = "cube"
BONE_SUFFIX = "_bone"
GROUP_SUFFIX = "_grp"
DEFAULT_BONE_MARKER = "_bone"

# =============================================================================
# Operation Modes
# =============================================================================

WRAP_FIX_ILLEGAL = "fix-illegal"
WRAP_FORCE_ALL = "force-all"
VALID_WRAP_MODES = {WRAP_FIX_ILLEGAL, WRAP_FORCE_ALL}

UNWRAP_NAMED = "named"
UNWRAP_ANY = "any"
VALID_UNWRAP_MODES = {UNWRAP_NAMED, UNWRAP_ANY}

# =============================================================================
# Notices (English only; translation belongs to the host)
# =============================================================================

NOTICE_WRAP_EMPTY = "No cubes require processing (selection or project)."
NOTICE_WRAP_DONE = "Done: {leaves} cube(s) wrapped into bones and reset to 0,0,0."
NOTICE_GROUP_DONE = "Done: {leaves} cube(s) wrapped into zero-rotation groups."
NOTICE_UNWRAP_EMPTY = "No bones found to unwrap."
NOTICE_UNWRAP_ANY_EMPTY = "No groups to unwrap in this project."
NOTICE_UNWRAP_DONE = "Done: {pivots} group(s) unwrapped, {leaves} cube(s) moved back."

LABEL_WRAP = "Wrapped and zeroed {count} cube(s)"
LABEL_GROUP = "Added zero-rotation group to {count} cube(s)"
LABEL_UNWRAP = "Unwrapped {count} group(s)"
