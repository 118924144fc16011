"""
Style Options Module
====================

Immutable style record shared by every drawing primitive.

Design:
- All fields optional (None = not set)
- Shallow defaulting: merge_defaults fills only unset fields
- No mutation, merging returns a new Style
"""

from dataclasses import dataclass, fields, replace
from typing import Optional


@dataclass(frozen=True)
class Style:
    """
    Style options for surface primitives.

    Attributes:
        color: Stroke / text color ("#rrggbb")
        fill: Fill color ("#rrggbb")
        opacity: 0..1
        font: Font spec, "<size> <family>" (e.g. "0.8 Trebuchet MS")
        align: "left", "center" or "right"
        line_style: "solid", "dashed" or "dotted"
        radius: Circle radius in tiles
        stroke_width: Outline width in tiles (0 = no outline)
        background: Text / popup background color
    """

    color: Optional[str] = None
    fill: Optional[str] = None
    opacity: Optional[float] = None
    font: Optional[str] = None
    align: Optional[str] = None
    line_style: Optional[str] = None
    radius: Optional[float] = None
    stroke_width: Optional[float] = None
    background: Optional[str] = None

    def font_size(self, default: float = 0.8) -> float:
        """Leading numeric part of the font spec, or default."""
        if not self.font:
            return default
        head = self.font.split(" ", 1)[0]
        try:
            return float(head)
        except ValueError:
            return default


def merge_defaults(style: Optional[Style], defaults: Style) -> Style:
    """
    Fill unset fields of style from defaults, never overwriting set ones.

    Args:
        style: Caller style (None = all unset)
        defaults: Values to use where style has None

    Returns:
        New Style
    """
    if style is None:
        return defaults
    missing = {
        f.name: getattr(defaults, f.name)
        for f in fields(Style)
        if getattr(style, f.name) is None
    }
    return replace(style, **missing)
