"""
EditorSession - all editing state for one open animation.

Owns the timeline, undo history, tool controller and the current selection,
and is handed to every component that needs them. Any change that should be
visible emits redraw_requested; the canvas widget answers it.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..config import Config
from ..models.stroke import Stroke
from ..models.timeline import Timeline
from .history import HistoryManager
from .tool_controller import ToolController, ToolMode

logger = logging.getLogger(__name__)


class EditorSession(QObject):
    """
    Editing session state.

    Signals:
        redraw_requested: The canvas should be re-rendered
        frame_changed(index, count): Displayed frame or frame count changed
        selection_changed(object): New selected Stroke or None
        color_changed(str): The user color changed
        playing_changed(bool): Playback started or stopped
    """

    redraw_requested = pyqtSignal()
    frame_changed = pyqtSignal(int, int)
    selection_changed = pyqtSignal(object)
    color_changed = pyqtSignal(str)
    playing_changed = pyqtSignal(bool)

    def __init__(self, timeline: Optional[Timeline] = None):
        super().__init__()
        self.timeline = timeline or Timeline()
        self.history = HistoryManager()
        self.tools = ToolController()
        self._selected: Optional[Stroke] = None
        self._is_playing = False
        self._onion_skin_enabled = Config.ONION_SKIN_DEFAULT

        self.tools.mode_changed.connect(self._on_mode_changed)

    # ==================== Properties ====================

    @property
    def selected_stroke(self) -> Optional[Stroke]:
        return self._selected

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def onion_skin_enabled(self) -> bool:
        return self._onion_skin_enabled

    @property
    def show_onion_skin(self) -> bool:
        """Onion skin is drawn only when enabled, idle, and not on frame 0."""
        return (self._onion_skin_enabled and not self._is_playing
                and self.timeline.current_index > 0)

    def request_redraw(self):
        self.redraw_requested.emit()

    # ==================== Selection ====================

    def select(self, stroke: Stroke):
        """Select a stroke and adopt its color as the user color."""
        self._selected = stroke
        self.selection_changed.emit(stroke)
        self._set_user_color(stroke.color)

    def clear_selection(self):
        if self._selected is not None:
            self._selected = None
            self.selection_changed.emit(None)

    def _on_mode_changed(self, mode: ToolMode):
        logger.debug(f"Tool mode: {mode.value}")
        self.clear_selection()
        self.request_redraw()

    # ==================== Color ====================

    def set_color(self, color: str):
        """
        Pick a new user color.

        With a stroke selected in Move/Rotate, the stroke is recolored as an
        undoable edit. Ignored while playing.
        """
        if self._is_playing:
            return
        self._set_user_color(color)
        if self._selected is not None and self.tools.is_selection_mode():
            if self._selected.color != color:
                self.history.save_state(self.timeline.strokes)
                self._selected.color = color
                self.request_redraw()

    def _set_user_color(self, color: str):
        if self.tools.user_color != color:
            self.tools.user_color = color
            self.color_changed.emit(color)

    # ==================== Undo / Redo ====================

    def undo(self) -> bool:
        if self._is_playing:
            return False
        snapshot = self.history.undo(self.timeline.strokes)
        if snapshot is None:
            return False
        self.timeline.replace_all(snapshot)
        self.clear_selection()
        self.request_redraw()
        return True

    def redo(self) -> bool:
        if self._is_playing:
            return False
        snapshot = self.history.redo(self.timeline.strokes)
        if snapshot is None:
            return False
        self.timeline.replace_all(snapshot)
        self.clear_selection()
        self.request_redraw()
        return True

    # ==================== Frames ====================

    def insert_frame(self):
        """Add an empty frame after the current one and show it."""
        self.timeline.insert_after_current()
        self._frame_changed()

    def duplicate_frame(self):
        """Copy the current frame after itself and show the copy."""
        self.timeline.duplicate_current()
        self._frame_changed()

    def prev_frame(self) -> bool:
        if self.timeline.prev():
            self._frame_changed()
            return True
        return False

    def next_frame(self) -> bool:
        if self.timeline.next():
            self._frame_changed()
            return True
        return False

    def can_go_prev(self) -> bool:
        return not self.timeline.is_first()

    def can_go_next(self) -> bool:
        return not self.timeline.is_last()

    def frame_label(self) -> str:
        return f"{self.timeline.current_index + 1} / {len(self.timeline)}"

    def toggle_onion_skin(self) -> bool:
        self._onion_skin_enabled = not self._onion_skin_enabled
        self.request_redraw()
        return self._onion_skin_enabled

    def refresh_frame(self):
        """Run the frame-changed path without moving (used after playback)."""
        self._frame_changed()

    def _frame_changed(self):
        self.history.clear()
        self.clear_selection()
        self.frame_changed.emit(self.timeline.current_index, len(self.timeline))
        self.request_redraw()

    # ==================== Playback state ====================

    def set_playing(self, playing: bool):
        """Set by AnimationPlayer; gestures and onion skin are off while playing."""
        if self._is_playing == playing:
            return
        self._is_playing = playing
        self.playing_changed.emit(playing)


__all__ = ['EditorSession']
