"""
Surface Backends
================

Bounded Context: Concrete drawing surfaces for the overlay renderer.

- recording: ordered call log, no pixels (tests, headless hosts)
- raster: numpy frame per region drawn with supervision, saved as PNG
"""

from gridscope_surface.icons import ICONS, IconStyle, icon_for
from gridscope_surface.raster import RasterSurface, RasterSurfaceFactory
from gridscope_surface.recording import DrawCall, RecordingSurface, RecordingSurfaceFactory

__all__ = [
    "ICONS",
    "IconStyle",
    "icon_for",
    "RasterSurface",
    "RasterSurfaceFactory",
    "DrawCall",
    "RecordingSurface",
    "RecordingSurfaceFactory",
]
