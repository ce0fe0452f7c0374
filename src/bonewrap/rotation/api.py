"""
Euler rotation algebra for pivot wrapping and flattening.

Two composition strategies are offered and must be chosen explicitly:
- matrix:   exact. Euler -> matrix, multiply, decompose back (R = Rz @ Ry @ Rx)
- additive: approximate. Per-axis sum; pose-preserving only for commuting rotations

Origins are always moved with the exact rotation matrix, whatever strategy is
used for the rotation value itself. All angles are in degrees.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import TypeAlias

import numpy as np

from bonewrap.constants import (
    ADDITIVE_DECIMALS,
    ANGLE_EPSILON,
    GIMBAL_LOCK_THRESHOLD,
    STRATEGY_ADDITIVE,
    STRATEGY_MATRIX,
    VALID_STRATEGIES,
)
from bonewrap.rotation.kernels import (
    euler_to_matrix_numba,
    matrix_to_euler_numba,
    normalize_angle_numba,
    rotate_point_numba,
)
from bonewrap.validators import validate_choices

logger = logging.getLogger(__name__)

# Type aliases for better readability (Python 3.12+ syntax)
Vec3Like: TypeAlias = np.ndarray | tuple | list


# ============================================================================
# Coercion and normalization
# ============================================================================


def _coerce_component(value: object) -> float:
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def as_vec3(values: Iterable[object] | None) -> np.ndarray:
    """
    Coerce a possibly malformed triple into a float64 vector [3].

    Missing, non-numeric and non-finite components become 0. Never raises.
    """
    if values is None:
        return np.zeros(3, dtype=np.float64)
    try:
        items = list(values)[:3]
    except TypeError:
        logger.warning("[Rotation] Non-iterable vector %r coerced to zeros", values)
        return np.zeros(3, dtype=np.float64)

    out = np.zeros(3, dtype=np.float64)
    for i, item in enumerate(items):
        out[i] = _coerce_component(item)
    return out


def normalize_angle(angle: float) -> float:
    """Map an angle in degrees into (-180, 180]."""
    return float(normalize_angle_numba(_coerce_component(angle)))


def _tidy_angle(angle: float, decimals: int | None = None) -> float:
    a = normalize_angle(angle)
    if abs(a) < ANGLE_EPSILON:
        return 0.0
    if decimals is not None:
        a = round(a, decimals)
        # Rounding may reach the excluded lower bound
        if a <= -180.0:
            a = 180.0
    return a + 0.0


def normalize_rotation(rotation: Vec3Like, decimals: int | None = None) -> np.ndarray:
    """
    Normalize each axis into (-180, 180] and snap near-zero values to 0.

    Args:
        rotation: Euler angles [3] in degrees
        decimals: Optional rounding applied after normalization

    Returns:
        Normalized Euler angles [3]
    """
    rot = as_vec3(rotation)
    return np.array([_tidy_angle(a, decimals) for a in rot], dtype=np.float64)


# ============================================================================
# Matrix strategy
# ============================================================================


def euler_to_matrix(rotation: Vec3Like) -> np.ndarray:
    """
    Convert Euler angles to a rotation matrix.

    The matrix is Rz @ Ry @ Rx, i.e. x is applied first, then y, then z.

    Args:
        rotation: Euler angles [3] in degrees

    Returns:
        Rotation matrix [3, 3]
    """
    R = np.empty((3, 3), dtype=np.float64)
    euler_to_matrix_numba(as_vec3(rotation), R)
    return R


def mat_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Standard 3x3 matrix product a @ b."""
    return np.asarray(a, dtype=np.float64) @ np.asarray(b, dtype=np.float64)


def matrix_to_euler(R: np.ndarray) -> np.ndarray:
    """
    Decompose a rotation matrix into Euler angles (inverse of euler_to_matrix).

    Outside gimbal lock (|R[2, 0]| < 0.99999) the decomposition is unique with
    the y angle in [-90, 90]. Inside gimbal lock z is fixed to 0.

    Args:
        R: Rotation matrix [3, 3]

    Returns:
        Euler angles [3] in degrees
    """
    out = np.empty(3, dtype=np.float64)
    matrix_to_euler_numba(np.ascontiguousarray(R, dtype=np.float64), GIMBAL_LOCK_THRESHOLD, out)
    return out


def combine_matrix(parent: Vec3Like, child: Vec3Like) -> np.ndarray:
    """Exact composition: decompose R(parent) @ R(child) back to Euler angles."""
    combined = mat_mul(euler_to_matrix(parent), euler_to_matrix(child))
    return normalize_rotation(matrix_to_euler(combined))


# ============================================================================
# Additive strategy
# ============================================================================


def combine_additive(parent: Vec3Like, child: Vec3Like) -> np.ndarray:
    """
    Approximate composition by per-axis sum.

    Each result is normalized into (-180, 180], snapped to 0 below 1e-6 and
    rounded to 6 decimals. Only pose-preserving when the rotations commute.
    """
    return normalize_rotation(as_vec3(parent) + as_vec3(child), decimals=ADDITIVE_DECIMALS)


_COMBINERS = {
    STRATEGY_MATRIX: combine_matrix,
    STRATEGY_ADDITIVE: combine_additive,
}


@validate_choices(VALID_STRATEGIES, "strategy", 2)
def combine(parent: Vec3Like, child: Vec3Like, strategy: str) -> np.ndarray:
    """
    Compose a parent rotation with a child rotation.

    Args:
        parent: Parent Euler angles [3] in degrees
        child: Child Euler angles [3] in degrees
        strategy: "matrix" (exact) or "additive" (approximate)

    Returns:
        Euler angles [3] equivalent to applying child, then parent
    """
    return _COMBINERS[strategy](parent, child)


# ============================================================================
# Points
# ============================================================================


def rotate_point_around(point: Vec3Like, rotation: Vec3Like, pivot: Vec3Like) -> np.ndarray:
    """
    Rotate a point about a pivot: R(rotation) @ (point - pivot) + pivot.

    Args:
        point: Point [3]
        rotation: Euler angles [3] in degrees
        pivot: Pivot point [3]

    Returns:
        Rotated point [3]
    """
    out = np.empty(3, dtype=np.float64)
    rotate_point_numba(as_vec3(point), euler_to_matrix(rotation), as_vec3(pivot), out)
    return out
