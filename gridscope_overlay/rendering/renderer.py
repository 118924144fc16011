"""
Overlay Renderer Module
=======================

Pure composition layer: turns semantic requests (placement maps, cost grids,
panels, tables, bar graphs) into primitive surface calls.

Design:
- Stateless between calls (only injected config, factory and logger)
- Surfaces acquired per region through the SurfaceFactory
- Never raises on missing optional data; empty input is a no-op
- Returns follow-on positions for vertical stacking where useful

Dependencies:
- gridscope_overlay.surface (Surface / SurfaceFactory / CostLookup protocols)
- gridscope_logging (structured logging)
"""

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Sequence, Union

from gridscope_logging import LogEvent, StructuredLogger, create_logger
from gridscope_overlay.colors import cost_ramp, round_half_up
from gridscope_overlay.config import RendererConfig
from gridscope_overlay.geometry.coords import (
    GRID_SIZE,
    Anchor,
    Coord,
    GridPosition,
    group_by_region,
)
from gridscope_overlay.geometry.layout import MAX_TIER, StructureLayout
from gridscope_overlay.rendering.content import Lines, PanelContent, Tabular
from gridscope_overlay.rendering.style import Style, merge_defaults
from gridscope_overlay.surface import CostLookup, Surface, SurfaceFactory

ROAD = "road"

Progress = Union[float, Sequence[float]]


def format_number(value: float) -> str:
    """Plain number label; integral floats drop the trailing '.0'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class HeatmapOptions:
    """
    Cost heatmap switches.

    Attributes:
        dots: Circle per nonzero cell (else hex text)
        display_zero: In text mode, also label zero cells
    """

    dots: bool = True
    display_zero: bool = True


@dataclass(frozen=True)
class PopupContext:
    """Where a popup was requested from: a tile and, optionally, an open surface."""

    pos: GridPosition
    surface: Optional[Surface] = None


class OverlayRenderer:
    """
    Stateless renderer for grid overlays.

    Usage:
        factory = RasterSurfaceFactory()
        renderer = OverlayRenderer(factory)

        y = renderer.draw_info_panel("Colony", Lines(["Energy: 300"]), Anchor(1, 2), width=8)
        renderer.draw_bar_graph(0.4, Anchor(1, y + 1), width=8)
        renderer.draw_cost_heatmap(grid, region="W1N1")
    """

    def __init__(
        self,
        surfaces: SurfaceFactory,
        config: Optional[RendererConfig] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            surfaces: Factory opening region surfaces
            config: Text/spacing constants (defaults if None)
            logger: Structured logger (created if None)
        """
        self.surfaces = surfaces
        self.config = config or RendererConfig()
        self.logger = logger or create_logger("renderer")

    @property
    def char_width(self) -> float:
        return self.config.char_width

    @property
    def char_height(self) -> float:
        return self.config.char_height

    def text_style(self, size: float = 1, override: Optional[Style] = None) -> Style:
        """
        Default text style, with override fields taking precedence.

        Args:
            size: Multiplier on the configured text size
            override: Partially filled style
        """
        defaults = Style(
            color=self.config.text_color,
            align="left",
            font=f"{size * self.config.text_size} {self.config.font_family}",
            opacity=self.config.text_opacity,
        )
        return merge_defaults(override, defaults)

    # ========== Structures ==========

    def draw_placement_map(self, placements: Mapping[str, Sequence[GridPosition]]) -> None:
        """
        Draw every category icon, then connect each touched region once.

        Args:
            placements: category -> positions
        """
        opened: Dict[str, Surface] = {}
        icon_count = 0
        for category, positions in placements.items():
            for pos in positions:
                if pos.region not in opened:
                    opened[pos.region] = self.surfaces.open_surface(pos.region)
                opened[pos.region].icon(pos.x, pos.y, category)
                icon_count += 1

        for surface in opened.values():
            surface.connect_icons()

        self.logger.debug(
            event=LogEvent.PLACEMENT_DRAWN,
            message="Drew placement map",
            metadata={'regions': sorted(opened), 'icons': icon_count},
        )

    def draw_layout_at_anchor(
        self,
        template: StructureLayout,
        anchor: GridPosition,
        style: Optional[Style] = None,
        tier: int = MAX_TIER,
    ) -> None:
        """
        Draw one tier of a layout template translated onto a real anchor.

        Args:
            template: Tiered layout
            anchor: Real position of the template anchor
            style: Icon style (opacity defaults to 0.5)
            tier: Template tier to draw
        """
        style = merge_defaults(style, Style(opacity=0.5))
        surface = self.surfaces.open_surface(anchor.region)

        icon_count = 0
        for category, pos in template.placements(Coord(anchor.x, anchor.y), tier):
            surface.icon(pos.x, pos.y, category, style)
            icon_count += 1
        surface.connect_icons(style)

        self.logger.debug(
            event=LogEvent.LAYOUT_DRAWN,
            message="Drew layout template",
            metadata={'region': anchor.region, 'tier': tier, 'icons': icon_count},
        )

    def draw_roads(self, positions: Sequence[GridPosition], style: Optional[Style] = None) -> None:
        """Draw road icons grouped by region, one connect-pass per region."""
        by_region = group_by_region(positions)
        for region, region_positions in by_region.items():
            surface = self.surfaces.open_surface(region)
            for pos in region_positions:
                surface.icon(pos.x, pos.y, ROAD, style)
            surface.connect_icons(style)

        self.logger.debug(
            event=LogEvent.ROADS_DRAWN,
            message="Drew roads",
            metadata={'regions': sorted(by_region), 'roads': len(positions)},
        )

    # ========== Paths ==========

    def draw_path(self, path: Sequence[GridPosition], style: Optional[Style] = None) -> None:
        """
        Draw a segment between each consecutive pair in the same region.

        Pairs that cross a region boundary are skipped.

        Args:
            path: Ordered positions
            style: fill -> line color, opacity (0.2), line_style ("dashed")
        """
        style = style or Style()
        line_style = Style(
            color=style.fill,
            opacity=style.opacity if style.opacity is not None else 0.2,
            line_style=style.line_style or "dashed",
        )

        segments = 0
        for pos, next_pos in zip(path, path[1:]):
            if next_pos.region != pos.region:
                continue
            self.surfaces.open_surface(pos.region).line(
                (pos.x, pos.y), (next_pos.x, next_pos.y), line_style
            )
            segments += 1

        self.logger.debug(
            event=LogEvent.PATH_DRAWN,
            message="Drew path",
            metadata={'length': len(path), 'segments': segments},
        )

    # ========== Cost grids ==========

    def draw_cost_heatmap(
        self,
        grid: CostLookup,
        region: Optional[str] = None,
        options: Optional[HeatmapOptions] = None,
    ) -> None:
        """
        Render a cost grid as white-to-red dots or hexadecimal labels.

        Args:
            grid: 50x50 cost lookup
            region: Target region (None = default surface)
            options: dots / display_zero switches
        """
        options = options or HeatmapOptions()
        surface = self.surfaces.open_surface(region)
        max_value = grid.max_value() + 1

        drawn = 0
        for y in range(GRID_SIZE):
            for x in range(GRID_SIZE):
                cost = grid.get(x, y)
                if options.dots:
                    if cost > 0:
                        surface.circle(x, y, Style(
                            radius=cost / max_value / 2,
                            fill=cost_ramp(cost, max_value),
                        ))
                        drawn += 1
                elif options.display_zero or cost != 0:
                    surface.text(
                        format(cost, "X"), x, y + 0.3,
                        Style(color=cost_ramp(cost, max_value)),
                    )
                    drawn += 1

        self.logger.debug(
            event=LogEvent.HEATMAP_DRAWN,
            message="Drew cost heatmap",
            metadata={
                'region': region,
                'mode': 'dots' if options.dots else 'text',
                'cells': drawn,
                'max_value': max_value - 1,
            },
        )

    # ========== Panels ==========

    def draw_popup(
        self,
        lines: Sequence[str],
        context: PopupContext,
        style: Optional[Style] = None,
    ) -> Surface:
        """
        Draw a popup box at the context position.

        Uses the context's open surface when given, else opens the region's.

        Returns:
            Surface returned by the popup primitive
        """
        surface = context.surface or self.surfaces.open_surface(context.pos.region)
        return surface.popup(lines, context.pos.x, context.pos.y, style or Style())

    def draw_section(self, title: str, pos: Anchor, width: float, height: float) -> Anchor:
        """
        Draw a titled frame: header strip plus outline around the content area.

        Args:
            title: Header text
            pos: Title baseline position
            width: Frame width
            height: Content height (excluding header)

        Returns:
            Content origin, below the header
        """
        ch = self.char_height
        surface = self.surfaces.open_surface(pos.region)
        surface.rect(pos.x, pos.y - ch, width, 1.1 * ch, Style(opacity=0.15))
        surface.box(
            pos.x,
            pos.y - ch,
            width,
            height + (1.1 + 0.25) * ch,
            Style(color=self.config.text_color),
        )
        surface.text(title, pos.x + 0.25, pos.y - 0.05, self.text_style())
        return pos.offset(0.25, 1.1 * ch)

    def draw_info_panel(
        self,
        header: str,
        content: PanelContent,
        pos: Anchor,
        width: float,
    ) -> float:
        """
        Draw a section sized to its content, then the content itself.

        Args:
            header: Section title
            content: Lines or Tabular
            pos: Section position
            width: Panel width

        Returns:
            y just below the panel plus spacing, for stacking the next one
        """
        height = self.char_height * (len(content) or 1)
        origin = self.draw_section(header, pos, width, height)

        if isinstance(content, Tabular):
            self.draw_table(content.rows, origin)
        elif isinstance(content, Lines):
            self.draw_multiline_text(content.lines, origin)
        else:
            raise TypeError(f"Unsupported panel content: {type(content).__name__}")

        self.logger.debug(
            event=LogEvent.PANEL_DRAWN,
            message="Drew info panel",
            metadata={'header': header, 'rows': len(content), 'region': pos.region},
        )
        return origin.y + height + self.config.panel_spacing

    def draw_bar_graph(
        self,
        progress: Progress,
        pos: Anchor,
        width: float = 7,
        scale: float = 1,
        fmt: Optional[Callable[[float], str]] = None,
    ) -> None:
        """
        Draw a progress bar with a centered label.

        Args:
            progress: Ratio (percent mode) or (numerator, denominator) (fraction mode)
            pos: Bar position (bottom-left of the label line)
            width: Bar width
            scale: Height multiplier
            fmt: Number formatter for the label
        """
        if isinstance(progress, Sequence):
            if len(progress) != 2:
                raise TypeError(
                    f"fraction progress must be (numerator, denominator), got {progress!r}"
                )
            numerator, denominator = progress
            percent = numerator / denominator if denominator else 0.0
            fraction = True
        else:
            percent = progress
            fraction = False

        if not 0.0 <= percent <= 1.0:
            self.logger.warning(
                event=LogEvent.PROGRESS_OUT_OF_RANGE,
                message="Bar graph progress outside [0, 1], drawing unclamped",
                metadata={'percent': percent},
            )

        ch = self.char_height
        surface = self.surfaces.open_surface(pos.region)
        surface.box(
            pos.x,
            pos.y - ch * scale,
            width,
            1.1 * scale * ch,
            Style(color=self.config.text_color),
        )
        surface.rect(
            pos.x,
            pos.y - ch * scale,
            percent * width,
            1.1 * scale * ch,
            Style(fill=self.config.text_color, opacity=0.4, stroke_width=0),
        )

        if fraction:
            num_str = fmt(numerator) if fmt else format_number(numerator)
            den_str = fmt(denominator) if fmt else format_number(denominator)
            label = f"{num_str}/{den_str}"
        else:
            label = fmt(percent) if fmt else f"{round_half_up(100 * percent)}%"

        surface.text(
            label,
            pos.x + width / 2,
            pos.y - 0.1 * ch,
            self.text_style(1, Style(align="center")),
        )

        self.logger.debug(
            event=LogEvent.BAR_GRAPH_DRAWN,
            message="Drew bar graph",
            metadata={'label': label, 'percent': percent},
        )

    # ========== Text ==========

    def draw_table(self, rows: Sequence[Sequence[str]], pos: Anchor) -> None:
        """
        Draw rows as left-aligned columns.

        Column pitch is (widest cell + padding) * char_width. The last cell
        of each row is not measured: nothing is placed after it.
        """
        if len(rows) == 0:
            return

        surface = self.surfaces.open_surface(pos.region)
        style = self.text_style()

        columns = [0] * max(len(row) for row in rows)
        for entries in rows:
            for i in range(len(entries) - 1):
                columns[i] = max(columns[i], len(entries[i]))

        dy = 0.0
        for entries in rows:
            dx = 0.0
            for i, entry in enumerate(entries):
                surface.text(entry, pos.x + dx, pos.y + dy, style)
                dx += self.char_width * (columns[i] + self.config.column_padding)
            dy += self.char_height

    def draw_multiline_text(self, lines: Sequence[str], pos: Anchor) -> None:
        """Draw lines one char_height apart."""
        if len(lines) == 0:
            return

        surface = self.surfaces.open_surface(pos.region)
        style = self.text_style()

        dy = 0.0
        for line in lines:
            surface.text(line, pos.x, pos.y + dy, style)
            dy += self.char_height
