"""
Snapshot-based undo/redo for the displayed frame.

Every mutating edit pushes a deep copy of the frame's strokes before it runs.
Undo and redo swap whole stroke lists, so any kind of edit (add, erase,
move, rotate, recolor) is reverted the same way. The stacks only ever
describe one frame and are cleared whenever the displayed frame changes.
"""

import logging
from typing import List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..config import Config
from ..models.stroke import Stroke, clone_strokes

logger = logging.getLogger(__name__)


class HistoryManager(QObject):
    """Undo/redo snapshot stacks for the active frame."""

    # Signals for UI updates
    undo_available_changed = pyqtSignal(bool)
    redo_available_changed = pyqtSignal(bool)

    def __init__(self, max_history: int = Config.MAX_UNDO_HISTORY):
        super().__init__()
        self._undo_stack: List[List[Stroke]] = []
        self._redo_stack: List[List[Stroke]] = []
        self._max_history = max_history

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def save_state(self, strokes: List[Stroke]):
        """Record the pre-edit strokes. Call before mutating the frame."""
        self._undo_stack.append(clone_strokes(strokes))
        self._redo_stack.clear()
        self._trim_history()
        self._emit_state_changed()

    def undo(self, current: List[Stroke]) -> Optional[List[Stroke]]:
        """
        Step back one snapshot.

        Args:
            current: The frame's live strokes (saved for redo)

        Returns:
            Snapshot to install as the frame's strokes, or None if there is
            nothing to undo
        """
        if not self._undo_stack:
            return None
        self._redo_stack.append(clone_strokes(current))
        snapshot = self._undo_stack.pop()
        self._emit_state_changed()
        logger.debug(f"Undo: {len(self._undo_stack)} left, {len(self._redo_stack)} redoable")
        return snapshot

    def redo(self, current: List[Stroke]) -> Optional[List[Stroke]]:
        """Step forward one snapshot. Mirror of undo()."""
        if not self._redo_stack:
            return None
        self._undo_stack.append(clone_strokes(current))
        snapshot = self._redo_stack.pop()
        self._emit_state_changed()
        logger.debug(f"Redo: {len(self._redo_stack)} left, {len(self._undo_stack)} undoable")
        return snapshot

    def clear(self):
        """Drop all history (frame switched or restructured)."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._emit_state_changed()

    def _trim_history(self):
        """Remove oldest snapshots if over limit."""
        while len(self._undo_stack) > self._max_history:
            self._undo_stack.pop(0)

    def _emit_state_changed(self):
        self.undo_available_changed.emit(self.can_undo())
        self.redo_available_changed.emit(self.can_redo())


__all__ = ['HistoryManager']
