"""Stroke and timeline data model."""

from .stroke import Point, Stroke, clone_strokes
from .timeline import Frame, Timeline

__all__ = ['Point', 'Stroke', 'clone_strokes', 'Frame', 'Timeline']
