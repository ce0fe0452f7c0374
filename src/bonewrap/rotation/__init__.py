"""
Rotation module.

Provides Euler/matrix conversion, exact and additive rotation composition, and
point rotation about a pivot for pose-preserving hierarchy edits.
"""

from bonewrap.rotation.api import (
    as_vec3,
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

__all__ = [
    "as_vec3",
    "combine",
    "combine_additive",
    "combine_matrix",
    "euler_to_matrix",
    "mat_mul",
    "matrix_to_euler",
    "normalize_angle",
    "normalize_rotation",
    "rotate_point_around",
]
