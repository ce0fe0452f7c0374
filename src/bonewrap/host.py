"""
Host interface consumed by the operations, plus a reference in-memory host.

The editor that embeds bonewrap supplies selection, transactions (one undo step
per batch), redraw and transient notices. ``EditorSession`` implements the same
interface with snapshot-based undo so the operations can run standalone.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Protocol, runtime_checkable

from bonewrap.scene.model import Handle, Project

logger = logging.getLogger(__name__)


@runtime_checkable
class Host(Protocol):
    """
    Protocol for editors that can run bonewrap commands.

    Transactions are not nested: ``begin`` opens one undo step and ``end``
    commits it.
    """

    project: Project

    def selection(self) -> list[Handle]:
        """Currently selected node handles (empty when nothing is selected)."""
        ...

    def begin(self, affected: Sequence[Handle], label: str) -> None:
        """Open a transaction covering ``affected`` nodes."""
        ...

    def end(self) -> None:
        """Commit the open transaction as a single undo step."""
        ...

    def redraw(self) -> None:
        """Invalidate the canvas."""
        ...

    def notify(self, message: str) -> None:
        """Show a one-line transient message."""
        ...


@contextmanager
def transaction(host: Host, affected: Sequence[Handle], label: str) -> Iterator[None]:
    """
    Run a batch inside exactly one host transaction.

    Redraw is signalled before the transaction closes. If the batch raises, the
    transaction is not committed; hosts that define ``abort()`` are rolled back.
    """
    host.begin(affected, label)
    try:
        yield
    except BaseException:
        abort = getattr(host, "abort", None)
        if abort is not None:
            abort()
        raise
    host.redraw()
    host.end()


class EditorSession:
    """
    In-memory host with snapshot-based undo/redo.

    Each committed transaction stores a full copy of the project taken at
    ``begin``; ``undo`` restores it in one step.

    Example:
        >>> session = EditorSession(project)
        >>> run_command("fix-illegal-wrap", session)
        >>> session.undo()
        True
    """

    def __init__(self, project: Project | None = None, max_history: int = 50):
        self.project = project if project is not None else Project()
        self.max_history = max_history

        self.selected: list[Handle] = []
        self.notices: list[str] = []
        self.redraw_count = 0

        # Stacks of (label, snapshot)
        self.undo_stack: list[tuple[str, Project]] = []
        self.redo_stack: list[tuple[str, Project]] = []

        self._pending: tuple[str, Project] | None = None

    # ------------------------------------------------------------------
    # Host interface
    # ------------------------------------------------------------------

    def selection(self) -> list[Handle]:
        return [h for h in self.selected if h in self.project]

    def select(self, *handles: Handle) -> None:
        self.selected = list(handles)

    def begin(self, affected: Sequence[Handle], label: str) -> None:
        if self._pending is not None:
            raise RuntimeError(f"Transaction '{self._pending[0]}' is still open")
        self._pending = (label, self.project.copy())
        logger.debug("[Session] Begin '%s' (%d affected)", label, len(affected))

    def end(self) -> None:
        if self._pending is None:
            raise RuntimeError("No open transaction to end")
        label, _ = self._pending
        self.undo_stack.append(self._pending)
        if len(self.undo_stack) > self.max_history:
            self.undo_stack.pop(0)
        self.redo_stack.clear()
        self._pending = None
        # Nodes deleted in the batch can no longer be selected
        self.selected = self.selection()
        logger.info("[Session] Committed '%s'", label)

    def abort(self) -> None:
        if self._pending is None:
            return
        label, snapshot = self._pending
        self.project.restore(snapshot)
        self._pending = None
        logger.warning("[Session] Rolled back '%s'", label)

    def redraw(self) -> None:
        self.redraw_count += 1

    def notify(self, message: str) -> None:
        self.notices.append(message)
        logger.info("[Session] %s", message)

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    @property
    def in_transaction(self) -> bool:
        return self._pending is not None

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def undo(self) -> bool:
        """Restore the project as it was before the last committed batch."""
        if not self.can_undo():
            return False
        label, snapshot = self.undo_stack.pop()
        self.redo_stack.append((label, self.project.copy()))
        self.project.restore(snapshot)
        self.selected = self.selection()
        logger.info("[Session] Undo '%s'", label)
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        label, snapshot = self.redo_stack.pop()
        self.undo_stack.append((label, self.project.copy()))
        self.project.restore(snapshot)
        self.selected = self.selection()
        logger.info("[Session] Redo '%s'", label)
        return True
