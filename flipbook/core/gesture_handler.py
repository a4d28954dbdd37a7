"""
InputGestureHandler - turns pointer gestures into edits.

A gesture is one pointer_down, any number of pointer_move, and one
pointer_up. What it does depends on the tool mode at pointer_down:

- Draw / area eraser: collect points into a new stroke
- Stroke eraser: delete the stroke under the pointer
- Move: drag the stroke under the pointer
- Rotate: turn the stroke under the pointer about its centroid

Nothing is processed while playback is running, and a gesture still in
progress when playback starts is dropped.
"""

import logging
from typing import TYPE_CHECKING, List, Optional

from ..models.stroke import Point, Stroke
from ..utils.geometry import (
    NO_HIT, angle_between, centroid, hit_test, rotate_points, translate_points
)
from .tool_controller import ToolMode

if TYPE_CHECKING:
    from ..rendering.renderer import Renderer
    from .session import EditorSession

logger = logging.getLogger(__name__)


class InputGestureHandler:
    """Gesture state machine for one editing session."""

    def __init__(self, session: 'EditorSession', renderer: Optional['Renderer'] = None):
        self._session = session
        self._renderer = renderer

        # Drawing state
        self._is_drawing = False
        self._current_points: List[Point] = []
        self._stroke_color = ''
        self._stroke_width = 0.0

        # Drag state (move / rotate)
        self._is_dragging = False
        self._last_pos: Optional[Point] = None
        self._pivot: Optional[Point] = None
        self._last_angle = 0.0

        session.playing_changed.connect(self._on_playing_changed)

    @property
    def is_drawing(self) -> bool:
        return self._is_drawing

    @property
    def is_dragging(self) -> bool:
        return self._is_dragging

    @property
    def current_points(self) -> List[Point]:
        """Points of the stroke being drawn (empty when idle)."""
        return self._current_points

    def cancel(self):
        """Drop any gesture in progress without committing it."""
        self._is_drawing = False
        self._current_points = []
        self._is_dragging = False
        self._last_pos = None
        self._pivot = None

    def _on_playing_changed(self, playing: bool):
        if playing:
            self.cancel()

    # ==================== Gesture Primitives ====================

    def pointer_down(self, x: float, y: float) -> bool:
        """Start a gesture. Returns True if the event was used."""
        if self._session.is_playing:
            return False

        pos = Point(x, y)
        mode = self._session.tools.mode

        if mode in (ToolMode.DRAW, ToolMode.ERASE_AREA):
            self._start_stroke(pos)
        elif mode == ToolMode.ERASE_STROKE:
            self._erase_at(pos)
        elif mode in (ToolMode.MOVE, ToolMode.ROTATE):
            self._pick_at(pos, mode)
        return True

    def pointer_move(self, x: float, y: float) -> bool:
        """Continue a gesture. Returns True if anything changed."""
        if self._session.is_playing:
            return False

        pos = Point(x, y)
        if self._is_drawing:
            self._continue_stroke(pos)
            return True

        selected = self._session.selected_stroke
        if not self._is_dragging or selected is None:
            return False

        mode = self._session.tools.mode
        if mode == ToolMode.MOVE:
            self._drag_move(selected, pos)
        elif mode == ToolMode.ROTATE:
            self._drag_rotate(selected, pos)
        else:
            return False
        self._session.request_redraw()
        return True

    def pointer_up(self) -> bool:
        """Finish the gesture."""
        if self._session.is_playing:
            return False

        if self._is_drawing:
            self._finish_stroke()
        self._is_dragging = False
        self._last_pos = None
        self._pivot = None
        return True

    # ==================== Draw / Area Eraser ====================

    def _start_stroke(self, pos: Point):
        tools = self._session.tools
        self._session.history.save_state(self._session.timeline.strokes)
        self._is_drawing = True
        self._current_points = [pos]
        self._stroke_color = tools.active_color
        self._stroke_width = tools.active_width

    def _continue_stroke(self, pos: Point):
        self._current_points.append(pos)
        if self._renderer is not None:
            self._renderer.draw_segment(
                self._current_points, self._stroke_color, self._stroke_width
            )

    def _finish_stroke(self):
        stroke = Stroke(self._current_points, self._stroke_color, self._stroke_width)
        self._session.timeline.append(stroke)
        logger.debug(f"Stroke added: {len(stroke.points)} points, {stroke.color}")

        self._current_points = []
        self._is_drawing = False
        self._session.request_redraw()

    # ==================== Stroke Eraser ====================

    def _erase_at(self, pos: Point):
        timeline = self._session.timeline
        index = hit_test(pos, timeline.strokes)
        if index == NO_HIT:
            return
        self._session.history.save_state(timeline.strokes)
        timeline.remove_at(index)
        logger.debug(f"Stroke {index} erased")
        self._session.request_redraw()

    # ==================== Move / Rotate ====================

    def _pick_at(self, pos: Point, mode: ToolMode):
        strokes = self._session.timeline.strokes
        index = hit_test(pos, strokes)
        if index == NO_HIT:
            self._session.clear_selection()
            self._session.request_redraw()
            return

        stroke = strokes[index]
        self._session.history.save_state(strokes)
        self._session.select(stroke)
        self._is_dragging = True
        self._last_pos = pos

        if mode == ToolMode.ROTATE:
            self._pivot = centroid(stroke.points)
            self._last_angle = angle_between(self._pivot, pos)
        self._session.request_redraw()

    def _drag_move(self, stroke: Stroke, pos: Point):
        translate_points(stroke.points, pos.x - self._last_pos.x, pos.y - self._last_pos.y)
        self._last_pos = pos

    def _drag_rotate(self, stroke: Stroke, pos: Point):
        # Step is relative to the previous event, not to pointer_down
        new_angle = angle_between(self._pivot, pos)
        rotate_points(stroke.points, self._pivot, new_angle - self._last_angle)
        self._last_angle = new_angle


__all__ = ['InputGestureHandler']
