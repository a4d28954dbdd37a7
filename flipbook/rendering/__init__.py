"""
Rendering subpackage.

- surface: raster surface draw primitives (QImage backed)
- renderer: frame, onion skin and selection drawing
"""

from .surface import Shadow, RasterSurface, ImageSurface
from .renderer import Renderer

__all__ = ['Shadow', 'RasterSurface', 'ImageSurface', 'Renderer']
