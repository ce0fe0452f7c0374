"""
Outcome of a wrap or unwrap batch, used to word the user notice.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OperationReport:
    """
    Attributes:
        pivots: Groups created (wrap) or flattened (unwrap)
        leaves: Cubes moved
    """

    pivots: int = 0
    leaves: int = 0

    @property
    def is_empty(self) -> bool:
        return self.pivots == 0 and self.leaves == 0
