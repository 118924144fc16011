"""
Rendering Layer
===============

Bounded Context: Overlay composition.

Responsibilities:
- Translate semantic requests into primitive surface calls
- Style defaulting (shallow merge)
- Panel content dispatch (lines vs. table rows)

Non-responsibilities:
- Pixels (handled by surface backends)
- Grid storage (handled by gridscope_overlay.grid)
"""

from gridscope_overlay.rendering.content import Lines, PanelContent, Tabular, content_from_raw
from gridscope_overlay.rendering.style import Style, merge_defaults
from gridscope_overlay.rendering.renderer import (
    ROAD,
    HeatmapOptions,
    OverlayRenderer,
    PopupContext,
)

__all__ = [
    "Lines",
    "PanelContent",
    "Tabular",
    "content_from_raw",
    "Style",
    "merge_defaults",
    "ROAD",
    "HeatmapOptions",
    "OverlayRenderer",
    "PopupContext",
]
