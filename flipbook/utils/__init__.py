"""Utility functions for Flipbook"""

from .logging_config import LoggingConfig
from .geometry import (
    NO_HIT,
    distance,
    centroid,
    angle_between,
    translate_points,
    rotate_points,
    hit_test,
    stroke_at,
)

__all__ = [
    'LoggingConfig',
    'NO_HIT',
    'distance',
    'centroid',
    'angle_between',
    'translate_points',
    'rotate_points',
    'hit_test',
    'stroke_at',
]
