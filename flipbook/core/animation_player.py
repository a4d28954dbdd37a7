"""
AnimationPlayer - timed, looping preview of the frame sequence.
"""

import logging
from typing import TYPE_CHECKING, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..config import Config

if TYPE_CHECKING:
    from ..rendering.renderer import Renderer
    from .session import EditorSession

logger = logging.getLogger(__name__)


class AnimationPlayer(QObject):
    """
    Plays the timeline on a fixed QTimer cadence.

    Starting drops the undo history, since each tick shows another frame.
    While playing, gestures and undo are ignored and only the current frame
    is drawn (no onion skin, no selection highlight). Stopping returns to the normal
    frame display, which also clears history and selection.
    """

    playback_state_changed = pyqtSignal(bool)  # is_playing
    frame_shown = pyqtSignal(int)  # frame index

    def __init__(
        self,
        session: 'EditorSession',
        renderer: Optional['Renderer'] = None,
        interval_ms: int = Config.PLAYBACK_INTERVAL_MS,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._session = session
        self._renderer = renderer
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    @property
    def is_playing(self) -> bool:
        return self._session.is_playing

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self):
        """Begin looping playback from the current frame."""
        if self._session.is_playing:
            return
        self._session.clear_selection()
        self._session.history.clear()
        self._session.set_playing(True)
        self._timer.start()
        logger.info(f"Playback started ({len(self._session.timeline)} frames)")
        self.playback_state_changed.emit(True)

    def stop(self):
        """Stop playback and restore normal editing on the current frame."""
        if not self._session.is_playing:
            return
        self._timer.stop()
        self._session.set_playing(False)
        logger.info(f"Playback stopped at frame {self._session.timeline.current_index + 1}")
        self.playback_state_changed.emit(False)
        self._session.refresh_frame()

    def toggle(self):
        if self._session.is_playing:
            self.stop()
        else:
            self.start()

    def tick(self):
        """Advance one frame (wrapping) and render it."""
        if not self._session.is_playing:
            return
        timeline = self._session.timeline
        index = timeline.advance_wrapping()
        if self._renderer is not None:
            self._renderer.render_strokes(timeline.strokes)
        self._session.frame_changed.emit(index, len(timeline))
        self.frame_shown.emit(index)


__all__ = ['AnimationPlayer']
