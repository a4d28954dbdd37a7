"""
Renderer - projects frames onto the raster surface.
"""

from typing import TYPE_CHECKING, Optional, Sequence

from ..config import Config
from ..models.stroke import Point, Stroke
from .surface import RasterSurface, Shadow

if TYPE_CHECKING:
    from ..core.session import EditorSession


class Renderer:
    """
    Draws stroke lists onto a RasterSurface.

    Full redraws clear the surface and fill the background first. The
    previous frame (onion skin) goes underneath at reduced opacity, and the
    selected stroke is drawn wider with a soft shadow.
    """

    def __init__(self, surface: RasterSurface,
                 background: str = Config.BACKGROUND_COLOR):
        self._surface = surface
        self._background = background
        self._selection_shadow = Shadow()

    @property
    def surface(self) -> RasterSurface:
        return self._surface

    def redraw(self, session: 'EditorSession'):
        """Full editing view of the session's current frame."""
        self._begin_frame()

        if session.show_onion_skin:
            self._surface.set_opacity(Config.ONION_SKIN_OPACITY)
            self.draw_strokes(session.timeline.previous_strokes)
            self._surface.set_opacity(1.0)

        selected = None if session.is_playing else session.selected_stroke
        self.draw_strokes(session.timeline.strokes, selected)

    def render_strokes(self, strokes: Sequence[Stroke]):
        """Plain frame with no onion skin or highlight (playback, export)."""
        self._begin_frame()
        self.draw_strokes(strokes)

    def draw_strokes(self, strokes: Sequence[Stroke], selected: Optional[Stroke] = None):
        """Draw strokes in list order without clearing."""
        for stroke in strokes:
            if not stroke.is_visible:
                continue
            if stroke is selected:
                self._surface.stroke_polyline(
                    stroke.points, stroke.color,
                    stroke.width + Config.SELECTION_WIDTH_BOOST,
                    shadow=self._selection_shadow
                )
            else:
                self._surface.stroke_polyline(stroke.points, stroke.color, stroke.width)

    def draw_segment(self, points: Sequence[Point], color: str, width: float):
        """Draw only the newest segment of an in-progress stroke."""
        if len(points) < 2:
            return
        self._surface.stroke_polyline(points[-2:], color, width)

    def _begin_frame(self):
        self._surface.set_opacity(1.0)
        self._surface.clear()
        self._surface.fill(self._background)


__all__ = ['Renderer']
