"""
Geometry Layer
==============

Bounded Context: Grid positions and layout templates.

Responsibilities:
- Position value objects (tile, anchor, offset)
- Region grouping
- Template offset translation
- NO drawing, NO state
"""

from gridscope_overlay.geometry.coords import (
    GRID_SIZE,
    Anchor,
    Coord,
    GridPosition,
    group_by_region,
)
from gridscope_overlay.geometry.layout import MAX_TIER, StructureLayout

__all__ = [
    "GRID_SIZE",
    "Anchor",
    "Coord",
    "GridPosition",
    "group_by_region",
    "MAX_TIER",
    "StructureLayout",
]
