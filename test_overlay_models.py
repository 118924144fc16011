"""
Test Overlay Value Objects
==========================

Colors, styles, panel content, cost grid, layout templates, configuration
and structured logging.

Usage:
    pytest test_overlay_models.py
"""

import json
import logging
from pathlib import Path

import numpy as np
import pytest

from gridscope_logging import LogEvent, create_logger
from gridscope_overlay import (
    Anchor,
    Coord,
    CostGrid,
    GridPosition,
    Lines,
    OverlayConfig,
    RasterConfig,
    RendererConfig,
    StructureLayout,
    Style,
    Tabular,
    content_from_raw,
    cost_ramp,
    group_by_region,
    merge_defaults,
    rgb_to_hex,
)
from gridscope_overlay.colors import component_to_hex, hex_to_rgb, round_half_up


# ========== Colors ==========

def test_rgb_to_hex_pads_components():
    assert rgb_to_hex(255, 0, 0) == "#ff0000"
    assert rgb_to_hex(1, 2, 15) == "#01020f"
    assert component_to_hex(0) == "00"
    assert component_to_hex(16) == "10"


def test_hex_to_rgb():
    assert hex_to_rgb("#c9c9c9") == (201, 201, 201)
    assert hex_to_rgb("#fff") == (255, 255, 255)
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_cost_ramp_white_to_red():
    assert cost_ramp(0, 1) == "#ffffff"
    assert cost_ramp(1, 2) == "#ff7f7f"  # round(127.5) = 128
    assert cost_ramp(255, 256) == "#ff0101"


# ========== Style ==========

def test_merge_defaults_is_shallow_and_non_destructive():
    defaults = Style(color="#000000", opacity=0.8, align="left")
    style = Style(color="#ffffff", opacity=0.0)

    merged = merge_defaults(style, defaults)

    assert merged == Style(color="#ffffff", opacity=0.0, align="left")
    assert style == Style(color="#ffffff", opacity=0.0)
    assert merge_defaults(None, defaults) is defaults


def test_style_font_size():
    assert Style(font="1.6 Trebuchet MS").font_size() == pytest.approx(1.6)
    assert Style().font_size(0.5) == 0.5
    assert Style(font="bold Arial").font_size() == 0.8


# ========== Content ==========

def test_content_from_raw():
    assert content_from_raw(["a", "b"]) == Lines(lines=["a", "b"])
    assert content_from_raw([["a", "1"], ("b", "2")]) == Tabular(rows=[["a", "1"], ["b", "2"]])
    assert content_from_raw([]) == Lines(lines=[])
    assert len(Tabular(rows=[["a"]])) == 1


# ========== Geometry ==========

def test_group_by_region_keeps_order_within_region():
    positions = [GridPosition(1, 1, "A"), GridPosition(2, 2, "B"), GridPosition(3, 3, "A")]

    grouped = group_by_region(positions)

    assert grouped == {
        "A": [GridPosition(1, 1, "A"), GridPosition(3, 3, "A")],
        "B": [GridPosition(2, 2, "B")],
    }


def test_anchor_helpers():
    assert Anchor(1, 1).offset(dy=0.5) == Anchor(1, 1.5, None)
    assert Coord(5, 5) - Coord(2, 3) == Coord(3, 2)


def test_layout_from_dict():
    layout = StructureLayout.from_dict({
        "data": {"anchor": {"x": 25, "y": 25}},
        "8": {"buildings": {"spawn": {"pos": [{"x": 25, "y": 24}]}}},
        3: {"buildings": {"road": {"pos": [{"x": 24, "y": 25}, {"x": 26, "y": 25}]}}},
    })

    assert layout.anchor == Coord(25, 25)
    assert list(layout.placements(Coord(10, 10))) == [("spawn", Coord(10, 9))]
    assert list(layout.placements(Coord(10, 10), tier=3)) == [
        ("road", Coord(9, 10)),
        ("road", Coord(11, 10)),
    ]
    assert layout.buildings(5) == {}


def test_layout_validation():
    with pytest.raises(ValueError):
        StructureLayout.from_dict({"8": {"buildings": {}}})
    with pytest.raises(ValueError):
        StructureLayout.from_dict({"data": {"anchor": {"x": 1, "y": 1}}, "top": {}})
    with pytest.raises(ValueError):
        StructureLayout(anchor=Coord(0, 0), tiers={9: {}})


# ========== Cost grid ==========

def test_cost_grid_lookup_and_max():
    grid = CostGrid()
    assert grid.max_value() == 0

    grid.set(49, 0, 200)
    grid.set(3, 7, 12)

    assert grid.get(49, 0) == 200
    assert grid.get(3, 7) == 12
    assert grid.max_value() == 200


def test_cost_grid_bounds():
    grid = CostGrid()
    with pytest.raises(IndexError):
        grid.get(50, 0)
    with pytest.raises(IndexError):
        grid.set(-1, 0, 1)
    with pytest.raises(ValueError):
        grid.set(0, 0, 256)


def test_cost_grid_from_array_is_indexed_y_x():
    values = np.zeros((50, 50), dtype=np.int64)
    values[2, 9] = 7

    grid = CostGrid(values)

    assert grid.get(9, 2) == 7
    with pytest.raises(ValueError):
        CostGrid(np.zeros((10, 10)))


def test_cost_grid_rejects_fractional_costs():
    with pytest.raises(ValueError):
        CostGrid(np.full((50, 50), 1.5))
    with pytest.raises(ValueError):
        CostGrid(np.zeros((50, 50), dtype=np.float64))

    grid = CostGrid()
    with pytest.raises(ValueError):
        grid.set(0, 0, 2.5)
    assert grid.get(0, 0) == 0


# ========== Config ==========

def test_renderer_config_defaults():
    config = RendererConfig()
    assert config.char_width == pytest.approx(0.32)
    assert config.char_height == pytest.approx(0.72)
    assert config.text_color == "#c9c9c9"


def test_config_validation():
    with pytest.raises(ValueError):
        RendererConfig(text_size=0)
    with pytest.raises(ValueError):
        RendererConfig(text_opacity=1.5)
    with pytest.raises(ValueError):
        RendererConfig(text_color="grey")
    with pytest.raises(ValueError):
        RasterConfig(cell_px=2)
    with pytest.raises(ValueError):
        RasterConfig(default_region="")


def test_overlay_config_from_yaml(tmp_path):
    path = tmp_path / "overlay.yaml"
    path.write_text(
        "renderer:\n"
        "  text_size: 1.0\n"
        "  font_family: Verdana\n"
        "raster:\n"
        "  cell_px: 20\n"
        "  connectable: [road, rampart]\n"
    )

    config = OverlayConfig.from_yaml(path)

    assert config.renderer.char_height == pytest.approx(0.9)
    assert config.renderer.font_family == "Verdana"
    assert config.raster.cell_px == 20
    assert config.raster.connectable == ("road", "rampart")
    assert config.raster.frame_size_px == 1000


def test_overlay_config_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    config = OverlayConfig.from_yaml(path)

    assert config == OverlayConfig()


def test_overlay_config_null_sections_use_defaults(tmp_path):
    path = tmp_path / "nulls.yaml"
    path.write_text("renderer: null\nraster:\n")

    config = OverlayConfig.from_yaml(path)

    assert config == OverlayConfig()


def test_shipped_example_config_loads():
    config = OverlayConfig.from_yaml(Path(__file__).parent / "config" / "overlay.yaml")
    assert config.renderer == RendererConfig()


# ========== Logging ==========

def test_structured_logger_emits_json(caplog):
    caplog.set_level(logging.DEBUG)
    logger = create_logger("test_models", level=logging.DEBUG)

    logger.debug(
        event=LogEvent.HEATMAP_DRAWN,
        message="Drew cost heatmap",
        metadata={'cells': 3},
    )

    records = [r for r in caplog.records if r.name == "gridscope.test_models"]
    entry = json.loads(records[-1].getMessage())
    assert entry["event"] == "overlay.heatmap.drawn"
    assert entry["component"] == "test_models"
    assert entry["level"] == "DEBUG"
    assert entry["metadata"] == {'cells': 3}


def test_structured_logger_respects_level(caplog):
    caplog.set_level(logging.DEBUG)
    logger = create_logger("test_quiet", level=logging.WARNING)

    logger.info(event=LogEvent.FRAME_SAVED, message="ignored")

    assert [r for r in caplog.records if r.name == "gridscope.test_quiet"] == []
