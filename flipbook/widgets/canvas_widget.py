"""
CanvasWidget - shows the raster surface and feeds it pointer gestures.

Thin host adapter: left-button mouse events become gesture primitives in
surface coordinates, and the widget repaints whenever the session asks for a
redraw or the player shows a frame.
"""

from typing import Optional

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QCursor, QPainter
from PyQt6.QtWidgets import QWidget

from ..core.gesture_handler import InputGestureHandler
from ..core.session import EditorSession
from ..core.tool_controller import ToolMode
from ..rendering.renderer import Renderer
from ..rendering.surface import ImageSurface


TOOL_CURSORS = {
    ToolMode.DRAW: Qt.CursorShape.CrossCursor,
    ToolMode.MOVE: Qt.CursorShape.SizeAllCursor,
    ToolMode.ROTATE: Qt.CursorShape.DragLinkCursor,
    ToolMode.ERASE_STROKE: Qt.CursorShape.PointingHandCursor,
    ToolMode.ERASE_AREA: Qt.CursorShape.PointingHandCursor,
}


class CanvasWidget(QWidget):
    """Fixed-size drawing canvas bound to one EditorSession."""

    def __init__(self, session: EditorSession, surface: Optional[ImageSurface] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._session = session
        self._surface = surface or ImageSurface()
        self._renderer = Renderer(self._surface)
        self._gestures = InputGestureHandler(session, self._renderer)

        self.setFixedSize(self._surface.width, self._surface.height)
        self.setMouseTracking(False)
        self.setCursor(QCursor(TOOL_CURSORS[session.tools.mode]))

        session.redraw_requested.connect(self.redraw)
        session.tools.mode_changed.connect(self._on_mode_changed)

        self.redraw()

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def gestures(self) -> InputGestureHandler:
        return self._gestures

    def redraw(self):
        """Re-render the session's current frame and repaint."""
        self._renderer.redraw(self._session)
        self.update()

    def _on_mode_changed(self, mode: ToolMode):
        self.setCursor(QCursor(TOOL_CURSORS[mode]))

    # ==================== Mouse Events ====================

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            if self._gestures.pointer_down(pos.x(), pos.y()):
                self.update()
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        pos = event.position()
        if self._gestures.pointer_move(pos.x(), pos.y()):
            self.update()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and self._gestures.pointer_up():
            event.accept()
            return
        super().mouseReleaseEvent(event)

    # ==================== Painting ====================

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(QPointF(0, 0), self._surface.image)
        painter.end()


__all__ = ['CanvasWidget']
