"""
Stroke data model.

A stroke is an open freehand polyline with a color and a width. A frame is
simply the ordered list of its strokes; list order is z-order.
"""

from dataclasses import dataclass, field
from typing import List, Iterable


@dataclass
class Point:
    """A position on the raster surface (pixels)."""
    x: float
    y: float

    def copy(self) -> 'Point':
        return Point(self.x, self.y)


@dataclass
class Stroke:
    """
    One freehand polyline.

    Attributes:
        points: Ordered points; the stroke is only drawn with 2 or more
        color: '#RRGGBB' color string
        width: Line width in pixels
    """
    points: List[Point] = field(default_factory=list)
    color: str = "#000000"
    width: float = 3

    @property
    def is_visible(self) -> bool:
        """Single-point strokes are kept in the data but never drawn."""
        return len(self.points) >= 2

    def clone(self) -> 'Stroke':
        """Independent deep copy (no shared points)."""
        return Stroke([p.copy() for p in self.points], self.color, self.width)

    @classmethod
    def from_points(cls, points: Iterable, color: str = "#000000", width: float = 3) -> 'Stroke':
        """Build a stroke from (x, y) pairs."""
        return cls([Point(float(x), float(y)) for x, y in points], color, width)


def clone_strokes(strokes: Iterable[Stroke]) -> List[Stroke]:
    """Deep copy of a frame's stroke sequence (history snapshot)."""
    return [stroke.clone() for stroke in strokes]


__all__ = ['Point', 'Stroke', 'clone_strokes']
