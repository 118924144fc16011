"""
Raster Surface Backend
======================

Renders surface primitives onto one numpy image per region.

Design:
- One BGR frame per region, owned by the factory
- Surfaces are thin handles: same region -> same frame
- Icons pending a connect pass belong to the handle that drew them
- Tile (x, y) maps to the pixel center of that tile
- Per-primitive defaults merged shallowly into the caller style

Dependencies:
- supervision (draw utilities, Color, Point)
- numpy (frames, polygons)
- cv2 (blending, text metrics, PNG output)
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

import cv2
import numpy as np
import supervision as sv

from gridscope_logging import LogEvent, StructuredLogger, create_logger
from gridscope_overlay.config import RasterConfig
from gridscope_overlay.rendering.style import Style, merge_defaults
from gridscope_overlay.surface import Point
from gridscope_surface.icons import icon_for

RECT_DEFAULTS = Style(fill="#ffffff", opacity=0.5)
BOX_DEFAULTS = Style(color="#ffffff", opacity=1.0, stroke_width=0.05)
LINE_DEFAULTS = Style(color="#ffffff", opacity=0.5, stroke_width=0.1, line_style="solid")
CIRCLE_DEFAULTS = Style(fill="#ffffff", opacity=0.5, radius=0.15)
TEXT_DEFAULTS = Style(color="#ffffff", opacity=1.0, align="center", font="0.5 sans-serif")
POPUP_DEFAULTS = Style(color="#c9c9c9", background="#2b2b2b", opacity=0.8, font="0.5 sans-serif")

# Half of the 8-neighbourhood, so each adjacent pair is joined once
CONNECT_OFFSETS = ((1, 0), (1, 1), (0, 1), (-1, 1))

HERSHEY_PX_AT_SCALE_1 = 22.0


class RasterSurface:
    """
    Handle drawing onto one region frame of a RasterSurfaceFactory.

    Usage:
        surface = factory.open_surface("W1N1")
        surface.rect(1, 1, 5, 2, Style(fill="#ff0000"))
        surface.icon(10, 10, "road")
        surface.connect_icons()
    """

    def __init__(self, factory: "RasterSurfaceFactory", region: str):
        self.factory = factory
        self.region = region
        self.cell_px = factory.config.cell_px
        self._pending: Dict[str, Set[Tuple[int, int]]] = {}

    # ========== Frame access ==========

    @property
    def scene(self) -> np.ndarray:
        return self.factory.frame(self.region)

    @scene.setter
    def scene(self, value: np.ndarray) -> None:
        self.factory._frames[self.region] = value

    def _px(self, x: float, y: float) -> Tuple[int, int]:
        return (
            int(round((x + 0.5) * self.cell_px)),
            int(round((y + 0.5) * self.cell_px)),
        )

    def _len_px(self, tiles: float) -> int:
        return max(1, int(round(tiles * self.cell_px)))

    def _polygon(self, points: Sequence[Tuple[float, float]]) -> np.ndarray:
        return np.array([self._px(px, py) for px, py in points], dtype=np.int32)

    def _blend(self, draw: Callable[[np.ndarray], np.ndarray], opacity: float) -> None:
        """Apply a drawing function with opacity, like sv.draw_filled_polygon does."""
        base = self.scene
        overlay = draw(base.copy())
        if opacity >= 1.0:
            self.scene = overlay
        else:
            self.scene = cv2.addWeighted(base, 1 - opacity, overlay, opacity, 0)

    # ========== Primitives ==========

    def rect(self, x: float, y: float, w: float, h: float, style: Optional[Style] = None) -> None:
        style = merge_defaults(style, RECT_DEFAULTS)
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        polygon = self._polygon(corners)
        if w > 0 and h > 0:
            self.scene = sv.draw_filled_polygon(
                scene=self.scene,
                polygon=polygon,
                color=sv.Color.from_hex(style.fill),
                opacity=style.opacity,
            )
        if style.stroke_width and style.color:
            self._blend(
                lambda scene: sv.draw_polygon(
                    scene=scene,
                    polygon=polygon,
                    color=sv.Color.from_hex(style.color),
                    thickness=self._len_px(style.stroke_width),
                ),
                style.opacity,
            )

    def box(self, x: float, y: float, w: float, h: float, style: Optional[Style] = None) -> None:
        style = merge_defaults(style, BOX_DEFAULTS)
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        polygon = self._polygon(corners)
        self._blend(
            lambda scene: sv.draw_polygon(
                scene=scene,
                polygon=polygon,
                color=sv.Color.from_hex(style.color),
                thickness=self._len_px(style.stroke_width),
            ),
            style.opacity,
        )

    def line(self, start: Point, end: Point, style: Optional[Style] = None) -> None:
        style = merge_defaults(style, LINE_DEFAULTS)
        color = sv.Color.from_hex(style.color)
        thickness = self._len_px(style.stroke_width)
        segments = _dash_segments(start, end, style.line_style)

        def draw(scene: np.ndarray) -> np.ndarray:
            for a, b in segments:
                scene = sv.draw_line(
                    scene=scene,
                    start=sv.Point(*self._px(*a)),
                    end=sv.Point(*self._px(*b)),
                    color=color,
                    thickness=thickness,
                )
            return scene

        self._blend(draw, style.opacity)

    def circle(self, x: float, y: float, style: Optional[Style] = None) -> None:
        style = merge_defaults(style, CIRCLE_DEFAULTS)
        self._filled_circle(x, y, style.radius, style.fill, style.opacity)

    def _filled_circle(self, x: float, y: float, radius: float, fill: str, opacity: float) -> None:
        """Filled circle via polygon approximation."""
        angles = np.linspace(0, 2 * np.pi, 30)
        points = [(x + radius * np.cos(a), y + radius * np.sin(a)) for a in angles]
        self.scene = sv.draw_filled_polygon(
            scene=self.scene,
            polygon=self._polygon(points),
            color=sv.Color.from_hex(fill),
            opacity=opacity,
        )

    def text(self, text: str, x: float, y: float, style: Optional[Style] = None) -> None:
        style = merge_defaults(style, TEXT_DEFAULTS)
        if not text:
            return

        scale = style.font_size() * self.cell_px / HERSHEY_PX_AT_SCALE_1
        thickness = 1
        (width, height), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, thickness)
        px, py = self._px(x, y)

        # sv.draw_text centers the text on its anchor; y is the baseline
        if style.align == "left":
            cx = px + width // 2
        elif style.align == "right":
            cx = px - width // 2
        else:
            cx = px
        anchor = sv.Point(x=cx, y=py - height // 2)

        self._blend(
            lambda scene: sv.draw_text(
                scene=scene,
                text=text,
                text_anchor=anchor,
                text_color=sv.Color.from_hex(style.color),
                text_scale=scale,
                text_thickness=thickness,
                text_padding=0,
                background_color=sv.Color.from_hex(style.background) if style.background else None,
            ),
            style.opacity,
        )

    def icon(self, x: float, y: float, category: str, style: Optional[Style] = None) -> None:
        style = style or Style()
        icon = icon_for(category)
        fill = style.fill or icon.color
        opacity = style.opacity if style.opacity is not None else 1.0

        if icon.shape == "circle":
            self._filled_circle(x, y, icon.size, fill, opacity)
        else:
            s = icon.size
            if icon.shape == "diamond":
                points = [(x, y - s), (x + s, y), (x, y + s), (x - s, y)]
            else:
                points = [(x - s, y - s), (x + s, y - s), (x + s, y + s), (x - s, y + s)]
            self.scene = sv.draw_filled_polygon(
                scene=self.scene,
                polygon=self._polygon(points),
                color=sv.Color.from_hex(fill),
                opacity=opacity,
            )

        self._pending.setdefault(category, set()).add((int(x), int(y)))

    def connect_icons(self, style: Optional[Style] = None) -> None:
        """Join adjacent connectable icons drawn on this handle, then forget them."""
        style = style or Style()
        opacity = style.opacity if style.opacity is not None else 1.0
        placed, self._pending = self._pending, {}

        joined = 0
        for category in self.factory.config.connectable:
            tiles: Set[Tuple[int, int]] = placed.get(category, set())
            color = style.color or icon_for(category).color
            for tx, ty in sorted(tiles):
                for dx, dy in CONNECT_OFFSETS:
                    if (tx + dx, ty + dy) in tiles:
                        self.line(
                            (tx, ty),
                            (tx + dx, ty + dy),
                            Style(color=color, opacity=opacity, stroke_width=0.15),
                        )
                        joined += 1

        self.factory.logger.debug(
            event=LogEvent.SURFACE_CONNECTED,
            message="Connected adjacent icons",
            metadata={'region': self.region, 'segments': joined},
        )

    def popup(
        self, lines: Sequence[str], x: float, y: float, style: Optional[Style] = None
    ) -> "RasterSurface":
        """
        Framed text block above-right of (x, y) with a pointer line.
        """
        style = merge_defaults(style, POPUP_DEFAULTS)
        if len(lines) == 0:
            return self

        size = style.font_size()
        line_height = size * 1.2
        width = max(len(line) for line in lines) * size * 0.5 + 0.5
        height = len(lines) * line_height + 0.3
        left, top = x + 0.75, y - 0.75 - height

        self.line((x, y), (left, top + height), Style(color=style.color, opacity=style.opacity))
        self.rect(left, top, width, height, Style(fill=style.background, opacity=style.opacity))
        self.box(left, top, width, height, Style(color=style.color))
        for i, line in enumerate(lines):
            self.text(
                line,
                left + 0.25,
                top + 0.15 + (i + 1) * line_height - 0.2 * size,
                Style(color=style.color, align="left", font=style.font),
            )
        return self


class RasterSurfaceFactory:
    """
    Owns one frame per region and opens RasterSurface handles on them.

    Usage:
        factory = RasterSurfaceFactory(RasterConfig(cell_px=20))
        renderer = OverlayRenderer(factory)
        renderer.draw_cost_heatmap(grid, region="W1N1")
        paths = factory.save("./runs/overlay")
    """

    def __init__(
        self,
        config: Optional[RasterConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.config = config or RasterConfig()
        self.logger = logger or create_logger("raster")
        self._frames: Dict[str, np.ndarray] = {}

    @property
    def regions(self) -> List[str]:
        return list(self._frames)

    def open_surface(self, region: Optional[str] = None) -> RasterSurface:
        region = region or self.config.default_region
        if region not in self._frames:
            size = self.config.frame_size_px
            background = sv.Color.from_hex(self.config.background_color).as_bgr()
            frame = np.zeros((size, size, 3), dtype=np.uint8)
            frame[:, :] = background
            self._frames[region] = frame
            self.logger.debug(
                event=LogEvent.SURFACE_OPENED,
                message="Opened region frame",
                metadata={'region': region, 'size_px': size},
            )
        return RasterSurface(self, region)

    def frame(self, region: Optional[str] = None) -> np.ndarray:
        """BGR frame of a region (KeyError if never opened)."""
        return self._frames[region or self.config.default_region]

    def save(self, folder: str) -> List[str]:
        """
        Write every region frame as <folder>/<region>.png.

        Returns:
            Written file paths

        Raises:
            OSError: If a frame cannot be written
        """
        Path(folder).mkdir(parents=True, exist_ok=True)
        paths = []
        for region, frame in self._frames.items():
            path = str(Path(folder) / f"{region}.png")
            if not cv2.imwrite(path, frame):
                error = OSError(f"Could not write frame: {path}")
                self.logger.error(
                    event=LogEvent.FRAME_SAVE_ERROR,
                    message="Failed to save region frame",
                    metadata={'region': region, 'path': path},
                    exc_info=error,
                )
                raise error
            self.logger.info(
                event=LogEvent.FRAME_SAVED,
                message="Saved region frame",
                metadata={'region': region, 'path': path},
            )
            paths.append(path)
        return paths


def _dash_segments(
    start: Point, end: Point, line_style: Optional[str]
) -> List[Tuple[Point, Point]]:
    """Split a segment into dash pieces (tile units); solid stays whole."""
    if line_style not in ("dashed", "dotted"):
        return [(start, end)]

    dash, gap = (0.3, 0.2) if line_style == "dashed" else (0.05, 0.15)
    (x0, y0), (x1, y1) = start, end
    length = float(np.hypot(x1 - x0, y1 - y0))
    if length == 0:
        return [(start, end)]

    ux, uy = (x1 - x0) / length, (y1 - y0) / length
    segments = []
    t = 0.0
    while t < length:
        t_end = min(t + dash, length)
        segments.append(((x0 + ux * t, y0 + uy * t), (x0 + ux * t_end, y0 + uy * t_end)))
        t = t_end + gap
    return segments
