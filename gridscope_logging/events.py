"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging across the overlay layer.

Event Naming Convention:
    <component>.<category>.<action>

    component: overlay, surface, config, error
    category: placement, heatmap, panel, frame
    action: drawn, skipped, saved

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.region
    | filter event = "overlay.heatmap.drawn"
    | stats count() by metadata.region
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - overlay.*: Renderer operations
    - surface.*: Drawing surface lifecycle
    - config.*: Configuration loading
    - error.*: Error conditions
    """

    # ========== Overlay Events ==========
    PLACEMENT_DRAWN = "overlay.placement.drawn"
    """Structure placement map drawn."""

    LAYOUT_DRAWN = "overlay.layout.drawn"
    """Layout template drawn at an anchor."""

    ROADS_DRAWN = "overlay.roads.drawn"
    """Road network drawn and connected."""

    PATH_DRAWN = "overlay.path.drawn"
    """Path drawn as line segments."""

    HEATMAP_DRAWN = "overlay.heatmap.drawn"
    """Cost grid rendered as dots or hex text."""

    PANEL_DRAWN = "overlay.panel.drawn"
    """Info panel (section + content) drawn."""

    BAR_GRAPH_DRAWN = "overlay.bar_graph.drawn"
    """Progress bar drawn."""

    PROGRESS_OUT_OF_RANGE = "overlay.bar_graph.out_of_range"
    """Bar graph progress outside [0, 1], drawn unclamped."""

    # ========== Surface Events ==========
    SURFACE_OPENED = "surface.opened"
    """Drawing surface handle acquired for a region."""

    SURFACE_CONNECTED = "surface.connected"
    """Connect-pass executed on a region."""

    FRAME_SAVED = "surface.frame.saved"
    """Rendered region frame written to disk."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Configuration loaded from YAML."""

    # ========== Error Events ==========
    CONFIG_ERROR = "error.config"
    """Configuration failed validation."""

    FRAME_SAVE_ERROR = "error.frame_save"
    """Frame could not be written to disk."""

