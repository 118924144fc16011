"""
Overlay Demo
============

Renders a sample colony overlay with the raster backend and saves one PNG per
region into ./runs/overlay/<timestamp>/.

Usage:
    python run_overlay_demo.py
    python run_overlay_demo.py --config overlay.yaml --debug
"""

import argparse
import logging
from pathlib import Path

import numpy as np

from gridscope_logging import LogEvent, create_logger
from gridscope_overlay import (
    Anchor,
    Coord,
    CostGrid,
    GridPosition,
    HeatmapOptions,
    Lines,
    OverlayConfig,
    OverlayRenderer,
    PopupContext,
    StructureLayout,
    Style,
    Tabular,
)
from gridscope_surface import RasterSurfaceFactory
from utils import get_target_run_folder

HOME = "W1N1"
REMOTE = "W2N1"

BUNKER = StructureLayout(
    anchor=Coord(25, 25),
    tiers={
        8: {
            "spawn": [Coord(25, 23), Coord(23, 25), Coord(27, 25)],
            "storage": [Coord(25, 25)],
            "terminal": [Coord(26, 26)],
            "tower": [Coord(24, 24), Coord(26, 24), Coord(24, 26)],
            "link": [Coord(25, 26)],
            "road": [Coord(x, 22) for x in range(22, 29)] + [Coord(x, 28) for x in range(22, 29)],
        },
    },
)


def build_cost_grid(seed: int = 0) -> CostGrid:
    """Distance-from-center costs with random swamp patches."""
    rng = np.random.default_rng(seed)
    ys, xs = np.mgrid[0:50, 0:50]
    costs = np.hypot(xs - 25, ys - 25).astype(np.uint8) // 3
    swamp = rng.random((50, 50)) > 0.93
    costs[swamp] = 25
    return CostGrid(costs)


def render_demo(renderer: OverlayRenderer) -> None:
    """Draw every overlay kind onto the two demo regions."""
    # Home region: layout, stats panels, popup
    renderer.draw_layout_at_anchor(BUNKER, GridPosition(30, 30, HOME))

    y = renderer.draw_info_panel(
        "Colony",
        Lines(["Level 7", "Energy 254k", "Creeps 23"]),
        Anchor(1, 2, HOME),
        width=9,
    )
    y = renderer.draw_info_panel(
        "Spawns",
        Tabular([["Spawn1", "miner", "12"], ["Spawn2", "hauler", "40"], ["Spawn3", "idle", "-"]]),
        Anchor(1, y, HOME),
        width=9,
    )
    renderer.draw_bar_graph(0.64, Anchor(1, y + 1, HOME), width=9)
    renderer.draw_bar_graph((320, 550), Anchor(1, y + 2.5, HOME), width=9, scale=1)

    renderer.draw_popup(
        ["Tower", "Energy 820/1000"],
        PopupContext(pos=GridPosition(24, 34, HOME)),
    )

    # Remote region: cost heatmap, roads, path
    renderer.draw_cost_heatmap(build_cost_grid(), region=REMOTE, options=HeatmapOptions(dots=True))
    roads = [GridPosition(x, 10, REMOTE) for x in range(5, 20)]
    roads += [GridPosition(20, y, REMOTE) for y in range(10, 25)]
    renderer.draw_roads(roads)
    renderer.draw_placement_map({
        "container": [GridPosition(19, 9, REMOTE)],
        "road": [GridPosition(x, 11 + x - 21, REMOTE) for x in range(21, 26)],
    })

    path = [GridPosition(45, y, HOME) for y in range(40, 49)]
    path += [GridPosition(5, y, REMOTE) for y in range(1, 10)]
    renderer.draw_path(path, Style(fill="#8aa1c9", opacity=0.6))


def main():
    parser = argparse.ArgumentParser(description="Render a sample grid overlay to PNG")
    parser.add_argument("--config", type=str, default=None, help="Overlay YAML config")
    parser.add_argument("--debug", action="store_true", help="Log every overlay operation")
    args = parser.parse_args()

    level = logging.DEBUG if args.debug else logging.INFO
    logger = create_logger("demo", level=level)

    config = OverlayConfig()
    if args.config:
        try:
            config = OverlayConfig.from_yaml(Path(args.config))
        except (OSError, ValueError, TypeError) as e:
            logger.error(
                event=LogEvent.CONFIG_ERROR,
                message="Invalid overlay configuration",
                metadata={'path': args.config},
                exc_info=e,
            )
            raise
        logger.info(
            event=LogEvent.CONFIG_LOADED,
            message="Loaded overlay configuration",
            metadata={'path': args.config},
        )

    factory = RasterSurfaceFactory(config.raster, logger=create_logger("raster", level=level))
    renderer = OverlayRenderer(factory, config.renderer, logger=create_logger("renderer", level=level))

    render_demo(renderer)

    target_run_folder = get_target_run_folder(application_name="overlay")
    paths = factory.save(target_run_folder)
    print(f"Overlay rendering completed. Output: {', '.join(paths)}")


if __name__ == "__main__":
    main()
