"""
Grid Coordinates Module
=======================

Immutable position value objects for the 50x50 region grid.

Design:
- Frozen dataclasses (value objects, no identity)
- GridPosition: integer tile inside a named region
- Anchor: real-valued position descriptor, region optional
- Grouping by region identity, independent of input order
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

GRID_SIZE = 50


@dataclass(frozen=True)
class Coord:
    """Plain (x, y) offset, used by layout templates."""

    x: float
    y: float

    def __sub__(self, other: "Coord") -> "Coord":
        return Coord(x=self.x - other.x, y=self.y - other.y)

    def __add__(self, other: "Coord") -> "Coord":
        return Coord(x=self.x + other.x, y=self.y + other.y)


@dataclass(frozen=True)
class GridPosition:
    """
    Integer tile position inside a named region.

    Attributes:
        x: Tile column in [0, 50)
        y: Tile row in [0, 50)
        region: Region identifier (e.g. "W1N1")
    """

    x: int
    y: int
    region: str


@dataclass(frozen=True)
class Anchor:
    """
    Real-valued position descriptor.

    A missing region means "the region of the default surface".
    """

    x: float
    y: float
    region: Optional[str] = None

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> "Anchor":
        return Anchor(x=self.x + dx, y=self.y + dy, region=self.region)


def group_by_region(positions: Iterable[GridPosition]) -> Dict[str, List[GridPosition]]:
    """
    Partition positions by region, keeping input order inside each region.

    Args:
        positions: Any iterable of GridPosition

    Returns:
        Dict region -> positions in that region
    """
    grouped: Dict[str, List[GridPosition]] = defaultdict(list)
    for pos in positions:
        grouped[pos.region].append(pos)
    return dict(grouped)
