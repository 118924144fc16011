"""
Configuration schema for the overlay renderer and raster backend.

Constants that drive all spacing math (text size, derived character
footprint) are injected into the renderer through RendererConfig, so tests
and hosts can override them. Everything is validated at construction and
immutable afterwards.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

import yaml

from gridscope_overlay.colors import hex_to_rgb
from gridscope_overlay.geometry.coords import GRID_SIZE


@dataclass(frozen=True)
class RendererConfig:
    """
    Text and spacing constants.

    char_width = text_size * char_width_factor   (0.32 by default)
    char_height = text_size * char_height_factor (0.72 by default)
    """

    text_color: str = "#c9c9c9"
    text_size: float = 0.8
    font_family: str = "Trebuchet MS"
    text_opacity: float = 0.8
    char_width_factor: float = 0.4
    char_height_factor: float = 0.9
    column_padding: int = 4
    panel_spacing: float = 0.5

    def __post_init__(self):
        """Validate renderer configuration."""
        hex_to_rgb(self.text_color)

        if self.text_size <= 0:
            raise ValueError(f"text_size must be > 0, got {self.text_size}")

        if not 0.0 <= self.text_opacity <= 1.0:
            raise ValueError(
                f"text_opacity must be in [0.0, 1.0], got {self.text_opacity}"
            )

        if self.char_width_factor <= 0 or self.char_height_factor <= 0:
            raise ValueError("char width/height factors must be > 0")

        if self.column_padding < 0:
            raise ValueError(
                f"column_padding must be >= 0, got {self.column_padding}"
            )

    @property
    def char_width(self) -> float:
        return self.text_size * self.char_width_factor

    @property
    def char_height(self) -> float:
        return self.text_size * self.char_height_factor


@dataclass(frozen=True)
class RasterConfig:
    """Raster backend configuration (pixels per tile, default region, etc.)."""

    cell_px: int = 16
    grid_size: int = GRID_SIZE
    default_region: str = "sim"
    background_color: str = "#1b1b1b"
    connectable: Tuple[str, ...] = ("road",)

    def __post_init__(self):
        """Validate raster configuration."""
        if not 4 <= self.cell_px <= 128:
            raise ValueError(f"cell_px must be in [4, 128], got {self.cell_px}")

        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be > 0, got {self.grid_size}")

        if not self.default_region:
            raise ValueError("default_region cannot be empty")

        hex_to_rgb(self.background_color)

    @property
    def frame_size_px(self) -> int:
        return self.grid_size * self.cell_px


@dataclass(frozen=True)
class OverlayConfig:
    """Top-level configuration, loaded from YAML."""

    renderer: RendererConfig = field(default_factory=RendererConfig)
    raster: RasterConfig = field(default_factory=RasterConfig)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "OverlayConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            renderer:
              text_color: "#c9c9c9"
              text_size: 0.8
              font_family: "Trebuchet MS"

            raster:
              cell_px: 16
              default_region: "sim"
              connectable: ["road"]

        Missing or empty sections use defaults.
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        renderer = RendererConfig(**(data.get("renderer") or {}))

        raster_data = dict(data.get("raster") or {})
        if "connectable" in raster_data:
            raster_data["connectable"] = tuple(raster_data["connectable"])
        raster = RasterConfig(**raster_data)

        return cls(renderer=renderer, raster=raster)
