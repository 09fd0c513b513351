"""Visual theme definition."""

from __future__ import annotations

__all__ = ["Theme"]

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Colors, fonts, and stroke styles for rendering a topology graph."""

    name: str
    background_color: str
    background_radius: float
    node_fill: str
    label_color: str
    muted_color: str  # Legend text and default caption color
    badge_text_color: str
    font_family: str
    label_font_size: float = 10.0
    sublabel_font_size: float = 8.0
    caption_font_size: float = 10.0
    edge_label_font_size: float = 8.0
    badge_font_size: float = 8.0
    legend_font_size: float = 9.0
    edge_width: float = 1.5
    edge_opacity: float = 0.6
    edge_label_opacity: float = 0.7
    dash_pattern: str = "4,3"
    glow_blur: float = 4.0
    glow_opacity: float = 0.3
    glow_stroke_width: float = 2.0
    # Radial instance topology
    ring_node_fill: str = "#1e1e2a"
    ring_stroke_width: float = 2.5
    ring_edge_opacity: float = 0.3
    secondary_text_color: str = "#a1a1aa"
    center_text_color: str = "#ffffff"
