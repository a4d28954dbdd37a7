"""
Raster surface - the draw-primitive contract the renderer paints through.

RasterSurface lists the primitives; ImageSurface implements them on an
offscreen QImage with QPainter, the same way annotation PNGs are produced
for export.
"""

import base64
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from PyQt6.QtCore import QBuffer, QByteArray, QIODevice, Qt
from PyQt6.QtGui import QColor, QImage, QPainter, QPainterPath, QPen

from ..config import Config
from ..models.stroke import Point


@dataclass
class Shadow:
    """Soft glow drawn under a polyline (selection affordance)."""
    color: str = Config.SELECTION_SHADOW_COLOR
    alpha: float = Config.SELECTION_SHADOW_ALPHA
    blur: int = Config.SELECTION_SHADOW_BLUR


class RasterSurface:
    """Draw-primitive contract used by the Renderer."""

    width: int
    height: int

    def clear(self):
        raise NotImplementedError

    def fill(self, color: str):
        raise NotImplementedError

    def set_opacity(self, opacity: float):
        raise NotImplementedError

    def stroke_polyline(self, points: Sequence[Point], color: str, width: float,
                        shadow: Optional[Shadow] = None):
        raise NotImplementedError

    def to_png_bytes(self) -> bytes:
        raise NotImplementedError

    def to_data_url(self) -> str:
        """Encoded PNG as a data URL (the render service request format)."""
        encoded = base64.b64encode(self.to_png_bytes()).decode('ascii')
        return f"data:image/png;base64,{encoded}"


class ImageSurface(RasterSurface):
    """RasterSurface backed by an ARGB32 QImage."""

    def __init__(self, width: int = Config.CANVAS_WIDTH, height: int = Config.CANVAS_HEIGHT):
        self.width = width
        self.height = height
        self._image = QImage(width, height, QImage.Format.Format_ARGB32)
        self._opacity = 1.0
        self.clear()

    @property
    def image(self) -> QImage:
        return self._image

    def resize(self, width: int, height: int):
        """Replace the backing image with a cleared one of a new size."""
        if width == self.width and height == self.height:
            return
        self.width = width
        self.height = height
        self._image = QImage(width, height, QImage.Format.Format_ARGB32)
        self.clear()

    @contextmanager
    def _painter(self) -> Iterator[QPainter]:
        painter = QPainter(self._image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setOpacity(self._opacity)
            yield painter
        finally:
            painter.end()

    def clear(self):
        self._image.fill(QColor(0, 0, 0, 0))  # Transparent

    def fill(self, color: str):
        with self._painter() as painter:
            painter.fillRect(0, 0, self.width, self.height, QColor(color))

    def set_opacity(self, opacity: float):
        self._opacity = max(0.0, min(1.0, opacity))

    def stroke_polyline(self, points: Sequence[Point], color: str, width: float,
                        shadow: Optional[Shadow] = None):
        if len(points) < 2:
            return

        path = QPainterPath()
        path.moveTo(points[0].x, points[0].y)
        for point in points[1:]:
            path.lineTo(point.x, point.y)

        with self._painter() as painter:
            if shadow is not None and shadow.blur > 0:
                self._draw_shadow(painter, path, width, shadow)
            painter.setPen(self._make_pen(QColor(color), width))
            painter.drawPath(path)

    def _draw_shadow(self, painter: QPainter, path: QPainterPath, width: float, shadow: Shadow):
        """Approximate a blurred shadow with widening translucent passes."""
        steps = max(1, shadow.blur // 2)
        step_alpha = shadow.alpha / steps
        for i in range(steps, 0, -1):
            color = QColor(shadow.color)
            color.setAlphaF(step_alpha)
            painter.setPen(self._make_pen(color, width + i * 2))
            painter.drawPath(path)

    @staticmethod
    def _make_pen(color: QColor, width: float) -> QPen:
        pen = QPen(color, width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        return pen

    def to_png_bytes(self) -> bytes:
        data = QByteArray()
        buffer = QBuffer(data)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        self._image.save(buffer, 'PNG')
        buffer.close()
        return bytes(data)


__all__ = ['Shadow', 'RasterSurface', 'ImageSurface']
