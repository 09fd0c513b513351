"""SVG rendering of the radial instance topology."""

from __future__ import annotations

__all__ = ["draw_radial", "render_radial_svg"]

import drawsvg as draw

from topolayer.layout.constants import CENTER_NODE_SIZE, RING_NODE_SIZE
from topolayer.layout.radial import RadialEdge, RadialLayout, RadialNode
from topolayer.render.constants import (
    RADIAL_CENTER_NAME_FONT_SIZE,
    RADIAL_CENTER_TYPE_FONT_SIZE,
    RADIAL_LABEL_FONT_SIZE,
    RADIAL_LABEL_HEIGHT,
    RADIAL_NAME_FONT_SIZE,
    RADIAL_TYPE_FONT_SIZE,
)
from topolayer.render.style import Theme
from topolayer.themes import DARK_THEME


def render_radial_svg(layout: RadialLayout, theme: Theme = DARK_THEME) -> str:
    return draw_radial(layout, theme).as_svg()


def draw_radial(layout: RadialLayout, theme: Theme = DARK_THEME) -> draw.Drawing:
    """Connectors first, then relation labels, then nodes on top."""
    min_x, min_y, width, height = layout.view_box
    d = draw.Drawing(width, height, origin=(min_x, min_y))

    if theme.background_color != "none":
        d.append(
            draw.Rectangle(
                min_x, min_y, width, height,
                rx=theme.background_radius,
                fill=theme.background_color,
            )
        )

    for edge in layout.edges:
        d.append(
            draw.Line(
                edge.start[0], edge.start[1], edge.end[0], edge.end[1],
                stroke=edge.node.color,
                stroke_width=2,
                stroke_opacity=theme.ring_edge_opacity,
            )
        )
    for edge in layout.edges:
        if edge.node.relation:
            _render_relation_label(d, edge, theme)

    for node in layout.neighbors:
        x, y = layout.positions[node.id]
        _render_ring_node(d, node, x, y, theme)

    cx, cy = layout.positions[layout.center.id]
    _render_center_node(d, layout.center, cx, cy, theme)

    return d


def _render_relation_label(d: draw.Drawing, edge: RadialEdge, theme: Theme) -> None:
    color = edge.node.color
    group = draw.Group(
        transform=(
            f"translate({edge.label_x:.2f}, {edge.label_y:.2f}) "
            f"rotate({edge.label_angle:.2f})"
        )
    )
    group.append(
        draw.Rectangle(
            -edge.label_width / 2, -RADIAL_LABEL_HEIGHT / 2,
            edge.label_width, RADIAL_LABEL_HEIGHT,
            rx=2,
            fill=theme.background_color,
            stroke=color,
            stroke_width=1,
            stroke_dasharray="2,2",
        )
    )
    group.append(
        draw.Text(
            edge.node.relation,
            RADIAL_LABEL_FONT_SIZE,
            0, 0,
            text_anchor="middle",
            dominant_baseline="central",
            fill=color,
            font_family=theme.font_family,
        )
    )
    d.append(group)


def _render_ring_node(
    d: draw.Drawing, node: RadialNode, x: float, y: float, theme: Theme
) -> None:
    d.append(
        draw.Circle(
            x, y, RING_NODE_SIZE / 2,
            fill=theme.ring_node_fill,
            stroke=node.color,
            stroke_width=theme.ring_stroke_width,
        )
    )
    d.append(
        draw.Text(
            node.name,
            RADIAL_NAME_FONT_SIZE,
            x, y,
            text_anchor="middle",
            dominant_baseline="central",
            fill=theme.label_color,
            font_family=theme.font_family,
            font_weight=500,
        )
    )
    if not node.type:
        return
    d.append(
        draw.Text(
            node.type,
            RADIAL_TYPE_FONT_SIZE,
            x, y + 14,
            text_anchor="middle",
            dominant_baseline="central",
            fill=theme.secondary_text_color,
            font_family=theme.font_family,
        )
    )


def _render_center_node(
    d: draw.Drawing, node: RadialNode, x: float, y: float, theme: Theme
) -> None:
    d.append(draw.Circle(x, y, CENTER_NODE_SIZE / 2, fill=node.color))
    d.append(
        draw.Text(
            node.name,
            RADIAL_CENTER_NAME_FONT_SIZE,
            x, y,
            text_anchor="middle",
            dominant_baseline="central",
            fill=theme.center_text_color,
            font_family=theme.font_family,
            font_weight=600,
        )
    )
    if not node.type:
        return
    d.append(
        draw.Text(
            node.type,
            RADIAL_CENTER_TYPE_FONT_SIZE,
            x, y + 20,
            text_anchor="middle",
            dominant_baseline="central",
            fill=theme.center_text_color,
            font_family=theme.font_family,
            opacity=0.8,
        )
    )
