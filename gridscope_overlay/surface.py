"""
Drawing Surface Protocols
=========================

Bounded Context: Host-provided drawing capabilities.

The renderer never draws pixels itself. It issues primitive calls against a
Surface bound to one region, obtained from a SurfaceFactory. Requesting a
surface for the same region twice must yield handles that accumulate into
the same region state.

Concrete backends live in gridscope_surface (recording, raster).
"""

from typing import Optional, Protocol, Sequence, Tuple

from gridscope_overlay.rendering.style import Style

Point = Tuple[float, float]


class Surface(Protocol):
    """Primitive drawing calls in grid coordinates of one region."""

    region: str

    def rect(self, x: float, y: float, w: float, h: float, style: Optional[Style] = None) -> None:
        """Filled rectangle, top-left at (x, y)."""
        ...

    def box(self, x: float, y: float, w: float, h: float, style: Optional[Style] = None) -> None:
        """Outlined rectangle, top-left at (x, y)."""
        ...

    def line(self, start: Point, end: Point, style: Optional[Style] = None) -> None:
        """Stroked line segment."""
        ...

    def circle(self, x: float, y: float, style: Optional[Style] = None) -> None:
        """Filled circle centered on (x, y); radius from style."""
        ...

    def text(self, text: str, x: float, y: float, style: Optional[Style] = None) -> None:
        """Styled text with its baseline at (x, y)."""
        ...

    def icon(self, x: float, y: float, category: str, style: Optional[Style] = None) -> None:
        """Structure icon for a category."""
        ...

    def connect_icons(self, style: Optional[Style] = None) -> None:
        """Join adjacent connectable icons drawn through this handle since its last connect pass."""
        ...

    def popup(
        self, lines: Sequence[str], x: float, y: float, style: Optional[Style] = None
    ) -> "Surface":
        """Framed block of text lines pointing at (x, y)."""
        ...


class SurfaceFactory(Protocol):
    """Opens surfaces by region name; None selects the default region."""

    def open_surface(self, region: Optional[str] = None) -> Surface:
        ...


class CostLookup(Protocol):
    """Read-only view of a 50x50 cost grid."""

    def get(self, x: int, y: int) -> int:
        ...

    def max_value(self) -> int:
        ...
