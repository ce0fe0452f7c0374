"""
Batch operations over the scene, each committed as one undo step.
"""

from bonewrap.operations.config import UnwrapConfig, WrapConfig
from bonewrap.operations.report import OperationReport
from bonewrap.operations.unwrap import UnwrapOperation
from bonewrap.operations.wrap import WrapOperation

__all__ = [
    "OperationReport",
    "UnwrapConfig",
    "UnwrapOperation",
    "WrapConfig",
    "WrapOperation",
]
