"""
Numba-optimized kernels for the exact rotation strategy.

Provides JIT-compiled kernels for Euler/matrix conversion, point rotation about
a pivot and batched angle-legality checks. All angles are in degrees.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

# ============================================================================
# Angle Normalization
# ============================================================================


@njit(cache=True, nogil=True)
def normalize_angle_numba(angle: float) -> float:
    """
    Map an angle in degrees into (-180, 180].

    Values already in range are returned untouched so the mapping is idempotent.
    """
    if -180.0 < angle <= 180.0:
        return angle
    a = (angle + 180.0) % 360.0 - 180.0
    # Float modulo can land exactly on either bound
    if a <= -180.0:
        a += 360.0
    elif a > 180.0:
        a -= 360.0
    return a


# ============================================================================
# Euler <-> Matrix (R = Rz @ Ry @ Rx)
# ============================================================================


@njit(cache=True, nogil=True)
def euler_to_matrix_numba(rot: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """
    Build the 3x3 rotation matrix Rz @ Ry @ Rx from Euler angles.

    Args:
        rot: Euler angles [3] in degrees (x, y, z)
        out: Output matrix [3, 3] (pre-allocated)
    """
    x = math.radians(rot[0])
    y = math.radians(rot[1])
    z = math.radians(rot[2])
    cx, sx = math.cos(x), math.sin(x)
    cy, sy = math.cos(y), math.sin(y)
    cz, sz = math.cos(z), math.sin(z)

    out[0, 0] = cy * cz
    out[0, 1] = cz * sx * sy - cx * sz
    out[0, 2] = sx * sz + cx * cz * sy

    out[1, 0] = cy * sz
    out[1, 1] = cx * cz + sx * sy * sz
    out[1, 2] = cx * sy * sz - cz * sx

    out[2, 0] = -sy
    out[2, 1] = cy * sx
    out[2, 2] = cx * cy


@njit(cache=True, nogil=True)
def matrix_to_euler_numba(
    m: NDArray[np.float64], threshold: float, out: NDArray[np.float64]
) -> None:
    """
    Decompose a rotation matrix into Euler angles for the Rz @ Ry @ Rx order.

    When |m[2, 0]| reaches the gimbal-lock threshold the z angle is fixed to 0
    and the whole remaining rotation is assigned to x.

    Args:
        m: Rotation matrix [3, 3]
        threshold: Gimbal-lock threshold on |m[2, 0]|
        out: Output Euler angles [3] in degrees (pre-allocated)
    """
    s = -m[2, 0]
    # Rounding can push the sine just outside asin's domain
    if s > 1.0:
        s = 1.0
    elif s < -1.0:
        s = -1.0
    y = math.asin(s)

    if abs(m[2, 0]) < threshold:
        x = math.atan2(m[2, 1], m[2, 2])
        z = math.atan2(m[1, 0], m[0, 0])
    else:
        x = math.atan2(-m[1, 2], m[1, 1])
        z = 0.0

    out[0] = math.degrees(x)
    out[1] = math.degrees(y)
    out[2] = math.degrees(z)


# ============================================================================
# Point Rotation
# ============================================================================


@njit(cache=True, nogil=True)
def rotate_point_numba(
    point: NDArray[np.float64],
    R: NDArray[np.float64],
    pivot: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """
    Rotate a point about a pivot: R @ (point - pivot) + pivot.

    Args:
        point: Point [3]
        R: Rotation matrix [3, 3]
        pivot: Pivot point [3]
        out: Output point [3] (pre-allocated)
    """
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    dz = point[2] - pivot[2]
    for j in range(3):
        out[j] = R[j, 0] * dx + R[j, 1] * dy + R[j, 2] * dz + pivot[j]


# ============================================================================
# Legality (batched over all leaves of a project)
# ============================================================================


@njit(parallel=True, cache=True, nogil=True)
def illegal_rotation_mask_numba(
    rotations: NDArray[np.float64],
    allowed: NDArray[np.float64],
    eps: float,
    out: NDArray[np.bool_],
) -> None:
    """
    Flag rows that have at least one axis angle outside the allowed set.

    Args:
        rotations: Euler angles [N, 3] in degrees
        allowed: Allowed angles [K]
        eps: Membership tolerance
        out: Output mask [N] (pre-allocated), True where fixing is needed
    """
    N = rotations.shape[0]
    K = allowed.shape[0]
    for i in prange(N):
        illegal = False
        for axis in range(3):
            found = False
            for k in range(K):
                if abs(rotations[i, axis] - allowed[k]) <= eps:
                    found = True
                    break
            if not found:
                illegal = True
                break
        out[i] = illegal


# ============================================================================
# Helper Functions
# ============================================================================


def warmup_rotation_kernels() -> None:
    """
    Warm up Numba JIT compilation for rotation kernels.

    Call this once at import time to avoid first-call compilation overhead.
    """
    rot = np.array([10.0, 20.0, 30.0], dtype=np.float64)
    R = np.empty((3, 3), dtype=np.float64)
    euler = np.empty(3, dtype=np.float64)
    point = np.empty(3, dtype=np.float64)

    normalize_angle_numba(270.0)
    euler_to_matrix_numba(rot, R)
    matrix_to_euler_numba(R, 0.99999, euler)
    rotate_point_numba(rot, R, rot, point)

    rotations = np.zeros((4, 3), dtype=np.float64)
    allowed = np.array([0.0, 90.0], dtype=np.float64)
    mask = np.empty(4, dtype=np.bool_)
    illegal_rotation_mask_numba(rotations, allowed, 1e-6, mask)


# Warmup on import to avoid first-call overhead
warmup_rotation_kernels()
