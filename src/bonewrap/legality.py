"""
Rotation legality checks against the target format's allowed-angle sets.

A cube whose three axis angles are all in the allowed set can be exported as-is;
any other cube needs its rotation moved into a parent bone.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from bonewrap.constants import ALLOWED_ANGLE_SETS, ANGLE_EPSILON, DEFAULT_ALLOWED_SET
from bonewrap.rotation.kernels import illegal_rotation_mask_numba
from bonewrap.validators import validate_choices


@validate_choices(set(ALLOWED_ANGLE_SETS), "name", 0)
def allowed_angles(name: str = DEFAULT_ALLOWED_SET) -> np.ndarray:
    """Return the named allowed-angle set as a float64 array."""
    return np.array(ALLOWED_ANGLE_SETS[name], dtype=np.float64)


class RotationValidator:
    """
    Membership test of angles against a fixed allowed-angle set.

    An angle is allowed when it lies within ``eps`` of some value in the set.
    A cube needs fixing when any one of its three axis angles is not allowed.

    Example:
        >>> validator = RotationValidator("base")
        >>> validator.is_allowed(22.5)
        True
        >>> validator.needs_fixing([10.0, 0.0, 0.0])
        True
    """

    __slots__ = ("_allowed", "_eps", "name")

    def __init__(self, allowed_set: str = DEFAULT_ALLOWED_SET, eps: float = ANGLE_EPSILON):
        self.name = allowed_set
        self._allowed = allowed_angles(allowed_set)
        self._eps = eps

    def is_allowed(self, angle: float) -> bool:
        return bool(np.any(np.abs(self._allowed - float(angle)) <= self._eps))

    def needs_fixing(self, rotation: Iterable[float]) -> bool:
        return not all(self.is_allowed(a) for a in rotation)

    def needs_fixing_batch(self, rotations: np.ndarray) -> np.ndarray:
        """
        Evaluate many rotations at once.

        Args:
            rotations: Euler angles [N, 3] in degrees

        Returns:
            Boolean mask [N], True where the rotation needs fixing
        """
        rotations = np.ascontiguousarray(rotations, dtype=np.float64).reshape(-1, 3)
        out = np.empty(rotations.shape[0], dtype=np.bool_)
        if rotations.shape[0]:
            illegal_rotation_mask_numba(rotations, self._allowed, self._eps, out)
        return out

    def __repr__(self) -> str:
        return f"RotationValidator(allowed_set='{self.name}', eps={self._eps})"
