"""
Recording Surface Backend
=========================

Headless surface that records every primitive call in order.

Design:
- One shared call log per factory (all regions, global order)
- Handles for the same region are interchangeable
- popup() records itself and returns the same surface

Usage:
    factory = RecordingSurfaceFactory()
    renderer = OverlayRenderer(factory)
    renderer.draw_roads(positions)

    factory.calls_for("W1N1", op="icon")
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from gridscope_overlay.rendering.style import Style
from gridscope_overlay.surface import Point


@dataclass(frozen=True)
class DrawCall:
    """
    One recorded primitive.

    Attributes:
        region: Region the call was issued on
        op: Primitive name ("rect", "box", "line", ...)
        args: Positional arguments of the primitive
        style: Style passed (None if omitted)
    """

    region: str
    op: str
    args: Tuple[Any, ...]
    style: Optional[Style] = None


class RecordingSurface:
    """Surface that appends DrawCall entries to a shared log."""

    def __init__(self, region: str, log: List[DrawCall]):
        self.region = region
        self._log = log

    def _record(self, op: str, args: Tuple[Any, ...], style: Optional[Style]) -> None:
        self._log.append(DrawCall(region=self.region, op=op, args=args, style=style))

    def rect(self, x: float, y: float, w: float, h: float, style: Optional[Style] = None) -> None:
        self._record("rect", (x, y, w, h), style)

    def box(self, x: float, y: float, w: float, h: float, style: Optional[Style] = None) -> None:
        self._record("box", (x, y, w, h), style)

    def line(self, start: Point, end: Point, style: Optional[Style] = None) -> None:
        self._record("line", (tuple(start), tuple(end)), style)

    def circle(self, x: float, y: float, style: Optional[Style] = None) -> None:
        self._record("circle", (x, y), style)

    def text(self, text: str, x: float, y: float, style: Optional[Style] = None) -> None:
        self._record("text", (text, x, y), style)

    def icon(self, x: float, y: float, category: str, style: Optional[Style] = None) -> None:
        self._record("icon", (x, y, category), style)

    def connect_icons(self, style: Optional[Style] = None) -> None:
        self._record("connect_icons", (), style)

    def popup(
        self, lines: Sequence[str], x: float, y: float, style: Optional[Style] = None
    ) -> "RecordingSurface":
        self._record("popup", (tuple(lines), x, y), style)
        return self


class RecordingSurfaceFactory:
    """
    Opens RecordingSurfaces that share one ordered call log.

    Attributes:
        calls: Every DrawCall, in issue order
        opened: Region name per open_surface() request
    """

    def __init__(self, default_region: str = "sim"):
        self.default_region = default_region
        self.calls: List[DrawCall] = []
        self.opened: List[str] = []

    def open_surface(self, region: Optional[str] = None) -> RecordingSurface:
        region = region or self.default_region
        self.opened.append(region)
        return RecordingSurface(region, self.calls)

    def calls_for(self, region: Optional[str] = None, op: Optional[str] = None) -> List[DrawCall]:
        """Recorded calls filtered by region and/or primitive name."""
        return [
            call for call in self.calls
            if (region is None or call.region == region)
            and (op is None or call.op == op)
        ]

    def ops(self, region: Optional[str] = None) -> List[str]:
        return [call.op for call in self.calls_for(region)]

    def clear(self) -> None:
        self.calls.clear()
        self.opened.clear()
