"""
Test Raster Surface Backend
===========================

Checks pixel output of the supervision-backed raster surfaces and the
renderer drawing through them.

Usage:
    pytest test_raster_surface.py
"""

from pathlib import Path

import cv2
import numpy as np
import pytest

from gridscope_overlay import (
    Anchor,
    CostGrid,
    GridPosition,
    Lines,
    OverlayRenderer,
    RasterConfig,
    Style,
)
from gridscope_surface import RasterSurfaceFactory, icon_for
from gridscope_surface.raster import _dash_segments

CELL = 16
BACKGROUND = (27, 27, 27)  # "#1b1b1b" in BGR


def make_factory() -> RasterSurfaceFactory:
    return RasterSurfaceFactory(RasterConfig(cell_px=CELL))


def tile_center(x: float, y: float):
    """(row, col) of the pixel at the center of tile (x, y)."""
    return int(round((y + 0.5) * CELL)), int(round((x + 0.5) * CELL))


def pixel(factory, region, x, y):
    row, col = tile_center(x, y)
    return tuple(int(v) for v in factory.frame(region)[row, col])


def test_new_region_frame_is_background():
    factory = make_factory()
    factory.open_surface("W1N1")

    frame = factory.frame("W1N1")
    assert frame.shape == (50 * CELL, 50 * CELL, 3)
    assert tuple(frame[0, 0]) == BACKGROUND
    assert factory.regions == ["W1N1"]


def test_default_region_used_when_none():
    factory = make_factory()
    surface = factory.open_surface(None)
    assert surface.region == "sim"
    assert factory.frame() is factory.frame("sim")


def test_handles_for_same_region_share_frame():
    factory = make_factory()
    first = factory.open_surface("W1N1")
    second = factory.open_surface("W1N1")

    first.rect(5, 5, 2, 2, Style(fill="#ff0000", opacity=1.0))

    assert second.scene is factory.frame("W1N1")
    assert pixel(factory, "W1N1", 6, 6) == (0, 0, 255)
    assert factory.regions == ["W1N1"]


def test_rect_zero_width_draws_nothing():
    factory = make_factory()
    surface = factory.open_surface("W1N1")

    surface.rect(5, 5, 0, 2, Style(fill="#ff0000", opacity=1.0))

    assert pixel(factory, "W1N1", 5, 6) == BACKGROUND


def test_circle_and_line_change_pixels():
    factory = make_factory()
    surface = factory.open_surface("W1N1")

    surface.circle(10, 10, Style(fill="#00ff00", opacity=1.0, radius=0.4))
    surface.line((20, 20), (25, 20), Style(color="#0000ff", opacity=1.0, line_style="solid"))

    assert pixel(factory, "W1N1", 10, 10) == (0, 255, 0)
    assert pixel(factory, "W1N1", 22, 20) == (255, 0, 0)


def test_dash_segments():
    assert _dash_segments((0, 0), (1, 0), "solid") == [((0, 0), (1, 0))]
    assert _dash_segments((0, 0), (0, 0), "dashed") == [((0, 0), (0, 0))]

    dashes = _dash_segments((0, 0), (1, 0), "dashed")
    assert len(dashes) == 2
    assert dashes[0][1] == pytest.approx((0.3, 0.0))
    assert dashes[-1][1] == pytest.approx((0.8, 0.0))


def test_connect_icons_joins_adjacent_roads_only():
    factory = make_factory()
    surface = factory.open_surface("W1N1")
    for x in (10, 11, 14):
        surface.icon(x, 10, "road")
    surface.icon(16, 10, "spawn")
    surface.icon(17, 10, "spawn")

    # Between tile 10 and 11 (on the half-tile boundary)
    row, _ = tile_center(10, 10)
    col_joined = int(round(11 * CELL))
    col_gap = int(round(13 * CELL))
    col_spawn = int(round(17 * CELL))

    frame = factory.frame("W1N1")
    assert tuple(frame[row, col_joined]) == BACKGROUND

    surface.connect_icons()

    frame = factory.frame("W1N1")
    road_bgr = tuple(reversed(tuple(int(icon_for("road").color[i:i + 2], 16) for i in (1, 3, 5))))
    assert tuple(int(v) for v in frame[row, col_joined]) == road_bgr
    # Tile 12 is empty, so 11 and 14 stay apart
    assert tuple(frame[row, col_gap]) == BACKGROUND
    # Spawns are not connectable by default; the spawn icons touch but add no line
    assert tuple(int(v) for v in frame[row + CELL // 2 - 1, col_spawn]) == BACKGROUND


def test_connect_pass_ignores_icons_from_earlier_calls():
    factory = make_factory()
    renderer = OverlayRenderer(factory)

    renderer.draw_roads([GridPosition(10, 10, "W1N1")])
    renderer.draw_roads([GridPosition(11, 10, "W1N1")])

    # Midway between the two road tiles
    row, _ = tile_center(10, 10)
    col = int(round(11 * CELL))
    assert tuple(factory.frame("W1N1")[row, col]) == BACKGROUND


def test_connect_pass_consumes_pending_icons():
    factory = make_factory()
    first = factory.open_surface("W1N1")
    second = factory.open_surface("W1N1")
    first.icon(10, 10, "road")
    second.icon(11, 10, "road")

    first.connect_icons()
    second.connect_icons()

    row, _ = tile_center(10, 10)
    col = int(round(11 * CELL))
    assert tuple(factory.frame("W1N1")[row, col]) == BACKGROUND

    first.icon(10, 10, "road")
    first.icon(11, 10, "road")
    first.connect_icons()
    joined = tuple(int(v) for v in factory.frame("W1N1")[row, col])
    assert joined != BACKGROUND

    first.connect_icons()
    assert tuple(int(v) for v in factory.frame("W1N1")[row, col]) == joined


def test_text_draws_inside_frame():
    factory = make_factory()
    surface = factory.open_surface("W1N1")

    surface.text("HELLO", 5, 5, Style(color="#ffffff", align="left", font="0.8 Trebuchet MS"))

    frame = factory.frame("W1N1")
    row, col = tile_center(5, 5)
    region = frame[row - CELL:row + 1, col:col + 4 * CELL]
    assert (region != np.array(BACKGROUND, dtype=np.uint8)).any()
    # Left aligned: nothing to the left of the anchor
    left = frame[row - CELL:row + 1, col - 2 * CELL:col - 2]
    assert (left == np.array(BACKGROUND, dtype=np.uint8)).all()


def test_popup_returns_same_surface_and_draws():
    factory = make_factory()
    surface = factory.open_surface("W1N1")

    result = surface.popup(["Tower", "Energy 820"], 20, 30)

    assert result is surface
    assert (factory.frame("W1N1") != np.array(BACKGROUND, dtype=np.uint8)).any()
    assert surface.popup([], 1, 1) is surface


def test_renderer_draws_through_raster_backend():
    factory = make_factory()
    renderer = OverlayRenderer(factory)

    grid = CostGrid.from_cells([(30, 30, 9)])
    renderer.draw_cost_heatmap(grid, region="W2N1")
    renderer.draw_info_panel("Colony", Lines(["Level 7"]), Anchor(1, 2, "W1N1"), width=8)
    renderer.draw_bar_graph(0.5, Anchor(1, 6, "W1N1"), width=8)
    renderer.draw_roads([GridPosition(5, 40, "W1N1"), GridPosition(6, 40, "W1N1")])
    renderer.draw_path([GridPosition(x, 45, "W1N1") for x in range(5, 10)])

    assert sorted(factory.regions) == ["W1N1", "W2N1"]
    # max = 10 -> channel = round(229.5) = 230 -> rgb(255, 25, 25), drawn at circle opacity 0.5
    blue, green, red = pixel(factory, "W2N1", 30, 30)
    assert red > blue + 50 and blue == green
    assert pixel(factory, "W2N1", 29, 30) == BACKGROUND


def test_save_writes_png_per_region(tmp_path):
    factory = make_factory()
    factory.open_surface("W1N1").rect(1, 1, 3, 3, Style(fill="#ff0000", opacity=1.0))
    factory.open_surface("W2N1")

    paths = factory.save(str(tmp_path / "frames"))

    assert sorted(Path(p).name for p in paths) == ["W1N1.png", "W2N1.png"]
    written = cv2.imread(str(tmp_path / "frames" / "W1N1.png"))
    assert written.shape == (50 * CELL, 50 * CELL, 3)
    assert tuple(int(v) for v in written[tile_center(2, 2)]) == (0, 0, 255)
