"""
Timeline - ordered frames plus the currently displayed index.

The stroke store operations (append, remove_at, replace_all) always act on
the current frame. The timeline never holds fewer than one frame.
"""

from typing import List, Optional

from .stroke import Stroke, clone_strokes

Frame = List[Stroke]


class Timeline:
    """Ordered sequence of frames with a bounded current index."""

    def __init__(self, frames: Optional[List[Frame]] = None):
        self._frames: List[Frame] = frames if frames else [[]]
        self._current_index = 0

    # ==================== Properties ====================

    @property
    def frames(self) -> List[Frame]:
        return self._frames

    @property
    def current_index(self) -> int:
        return self._current_index

    @current_index.setter
    def current_index(self, index: int):
        if not 0 <= index < len(self._frames):
            raise IndexError(f"Frame index out of range: {index}")
        self._current_index = index

    @property
    def strokes(self) -> Frame:
        """Live stroke list of the current frame."""
        return self._frames[self._current_index]

    @property
    def previous_strokes(self) -> Optional[Frame]:
        """Strokes of the frame before the current one, if any."""
        if self._current_index == 0:
            return None
        return self._frames[self._current_index - 1]

    def __len__(self) -> int:
        return len(self._frames)

    def frame_at(self, index: int) -> Frame:
        return self._frames[index]

    def is_first(self) -> bool:
        return self._current_index == 0

    def is_last(self) -> bool:
        return self._current_index == len(self._frames) - 1

    # ==================== Stroke Store ====================

    def append(self, stroke: Stroke):
        """Add a stroke on top of the current frame."""
        self.strokes.append(stroke)

    def remove_at(self, index: int) -> Optional[Stroke]:
        """
        Remove a stroke from the current frame.

        Out-of-range indexes are ignored.

        Returns:
            The removed stroke, or None
        """
        strokes = self.strokes
        if 0 <= index < len(strokes):
            return strokes.pop(index)
        return None

    def replace_all(self, strokes: Frame):
        """Install a new stroke list for the current frame (undo/redo)."""
        self._frames[self._current_index] = strokes

    # ==================== Frame Structure ====================

    def insert_after_current(self):
        """Insert an empty frame after the current one and move to it."""
        self._frames.insert(self._current_index + 1, [])
        self._current_index += 1

    def duplicate_current(self):
        """Insert a deep copy of the current frame after it and move to it."""
        self._frames.insert(self._current_index + 1, clone_strokes(self.strokes))
        self._current_index += 1

    # ==================== Navigation ====================

    def prev(self) -> bool:
        """Step back one frame. Returns False at the first frame."""
        if self._current_index > 0:
            self._current_index -= 1
            return True
        return False

    def next(self) -> bool:
        """Step forward one frame. Returns False at the last frame."""
        if self._current_index < len(self._frames) - 1:
            self._current_index += 1
            return True
        return False

    def advance_wrapping(self) -> int:
        """Step forward, wrapping from the last frame to 0 (playback)."""
        self._current_index = (self._current_index + 1) % len(self._frames)
        return self._current_index


__all__ = ['Frame', 'Timeline']
