"""
gridscope Overlay v1.0
======================

Bounded Context: Grid overlay composition.

Design Philosophy:
- Separation of Concerns: Geometry, Rendering, Surfaces separated
- The renderer only composes primitive calls; backends own the pixels
- Constants injected through config, never module globals

Architecture:

    gridscope_overlay/
    ├── geometry/          # Positions, region grouping, layout templates
    ├── rendering/         # OverlayRenderer, Style, panel content
    ├── surface.py         # Surface / SurfaceFactory / CostLookup protocols
    ├── grid.py            # CostGrid (numpy-backed 50x50)
    ├── colors.py          # Hex formatting and cost ramp
    └── config.py          # RendererConfig, RasterConfig, OverlayConfig

    gridscope_surface/     # Recording and raster surface backends
    gridscope_logging/     # Structured JSON logging

Usage:

    from gridscope_overlay import OverlayRenderer, Anchor, Lines, CostGrid
    from gridscope_surface import RasterSurfaceFactory

    factory = RasterSurfaceFactory()
    renderer = OverlayRenderer(factory)

    y = renderer.draw_info_panel("Colony", Lines(["Energy: 300/550"]), Anchor(1, 2), width=9)
    renderer.draw_bar_graph((300, 550), Anchor(1, y + 1), width=9)

    grid = CostGrid.from_cells([(10, 10, 5), (11, 10, 255)])
    renderer.draw_cost_heatmap(grid)

    factory.save("./runs/overlay")
"""

from gridscope_overlay.colors import cost_ramp, rgb_to_hex
from gridscope_overlay.config import OverlayConfig, RasterConfig, RendererConfig
from gridscope_overlay.geometry import (
    GRID_SIZE,
    MAX_TIER,
    Anchor,
    Coord,
    GridPosition,
    StructureLayout,
    group_by_region,
)
from gridscope_overlay.grid import CostGrid
from gridscope_overlay.rendering import (
    ROAD,
    HeatmapOptions,
    Lines,
    OverlayRenderer,
    PanelContent,
    PopupContext,
    Style,
    Tabular,
    content_from_raw,
    merge_defaults,
)
from gridscope_overlay.surface import CostLookup, Surface, SurfaceFactory

__all__ = [
    # Colors
    "cost_ramp",
    "rgb_to_hex",
    # Config
    "OverlayConfig",
    "RasterConfig",
    "RendererConfig",
    # Geometry
    "GRID_SIZE",
    "MAX_TIER",
    "Anchor",
    "Coord",
    "GridPosition",
    "StructureLayout",
    "group_by_region",
    # Grid
    "CostGrid",
    # Rendering
    "ROAD",
    "HeatmapOptions",
    "Lines",
    "OverlayRenderer",
    "PanelContent",
    "PopupContext",
    "Style",
    "Tabular",
    "content_from_raw",
    "merge_defaults",
    # Surfaces
    "CostLookup",
    "Surface",
    "SurfaceFactory",
]

__version__ = "1.0.0"
