"""
Coordinate-space helpers for stroke editing.

All point functions work on ``Point`` objects in raster-surface pixels.
``rotate_points`` and ``translate_points`` modify the given points in place
so a stroke keeps its identity while it is dragged.
"""

import math
from typing import List, Optional, Sequence

from ..config import Config
from ..models.stroke import Point, Stroke

NO_HIT = -1


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def centroid(points: Sequence[Point]) -> Point:
    """
    Arithmetic mean of a point sequence (rotation pivot).

    Args:
        points: Non-empty sequence of points

    Returns:
        New Point at the mean position
    """
    count = len(points)
    sum_x = sum(p.x for p in points)
    sum_y = sum(p.y for p in points)
    return Point(sum_x / count, sum_y / count)


def angle_between(pivot: Point, point: Point) -> float:
    """Angle in radians of the vector pivot -> point."""
    return math.atan2(point.y - pivot.y, point.x - pivot.x)


def translate_points(points: List[Point], dx: float, dy: float):
    """Shift every point by (dx, dy) in place."""
    for p in points:
        p.x += dx
        p.y += dy


def rotate_points(points: List[Point], pivot: Point, angle: float):
    """
    Rotate points about a pivot in place.

    Args:
        points: Points to rotate
        pivot: Rotation center
        angle: Angle in radians (positive turns +x towards +y)
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    for p in points:
        dx = p.x - pivot.x
        dy = p.y - pivot.y
        p.x = pivot.x + dx * cos_a - dy * sin_a
        p.y = pivot.y + dx * sin_a + dy * cos_a


def hit_test(query: Point, strokes: Sequence[Stroke],
             tolerance: float = Config.HIT_TOLERANCE) -> int:
    """
    Find the topmost stroke under a point.

    Strokes are scanned from last to first (z-order), and each stroke's
    points in order. A point counts as a hit when it lies closer than half
    the stroke width plus the tolerance.

    Args:
        query: Pointer position
        strokes: Frame stroke sequence
        tolerance: Extra pick radius in pixels

    Returns:
        Index of the hit stroke, or NO_HIT
    """
    for index in range(len(strokes) - 1, -1, -1):
        stroke = strokes[index]
        radius = stroke.width / 2 + tolerance
        for p in stroke.points:
            if distance(query, p) < radius:
                return index
    return NO_HIT


def stroke_at(query: Point, strokes: Sequence[Stroke]) -> Optional[Stroke]:
    """Return the topmost stroke under a point, or None."""
    index = hit_test(query, strokes)
    return strokes[index] if index != NO_HIT else None


__all__ = [
    'NO_HIT',
    'distance',
    'centroid',
    'angle_between',
    'translate_points',
    'rotate_points',
    'hit_test',
    'stroke_at',
]
