"""SVG rendering of a computed topology layout via drawsvg.

Every call builds a fresh Drawing: the surface is cleared and fully
redrawn rather than patched.
"""

from __future__ import annotations

__all__ = ["draw_topology", "render", "render_svg"]

import drawsvg as draw

from topolayer.layout.constants import (
    GLOW_CORNER_RADIUS,
    LAYER_GAP,
    LEGEND_SWATCH_SIZE,
    NODE_CORNER_RADIUS,
    NODE_GAP,
    NODE_HEIGHT,
    NODE_WIDTH,
    SUBLABEL_DROP,
    SUBLABEL_LIFT,
)
from topolayer.layout.edges import EdgePath, marker_id
from topolayer.layout.engine import TopologyLayout, compute_layout
from topolayer.layout.labels import badge_box, glow_ring
from topolayer.layout.layers import NodePlacement
from topolayer.parser.model import GraphEdge, GraphNode, LayerLabel, LegendEntry
from topolayer.render.constants import (
    BADGE_CORNER_RADIUS,
    GLOW_FILTER_ID,
    GLOW_FILTER_REGION,
    LEGEND_SWATCH_RADIUS,
    MARKER_HEIGHT,
    MARKER_PATH,
    MARKER_WIDTH,
)
from topolayer.render.style import Theme
from topolayer.themes import DARK_THEME


def render(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    layer_labels: list[LayerLabel] | None = None,
    legend: list[LegendEntry] | None = None,
    width: float | None = None,
    height: float | None = None,
    node_width: float = NODE_WIDTH,
    node_height: float = NODE_HEIGHT,
    layer_gap: float = LAYER_GAP,
    node_gap: float = NODE_GAP,
    theme: Theme = DARK_THEME,
    title: str = "",
) -> draw.Drawing:
    """Lay out and draw a layered topology graph.

    Returns a drawing sized to fit its content; ``drawing.width`` and
    ``drawing.height`` are the resolved canvas dimensions.
    """
    layout = compute_layout(
        nodes,
        edges,
        layer_labels=layer_labels,
        legend=legend,
        width=width,
        height=height,
        node_width=node_width,
        node_height=node_height,
        layer_gap=layer_gap,
        node_gap=node_gap,
    )
    return draw_topology(layout, theme, title)


def render_svg(
    layout: TopologyLayout, theme: Theme = DARK_THEME, title: str = ""
) -> str:
    """Render a computed layout to an SVG string."""
    return draw_topology(layout, theme, title).as_svg()


def draw_topology(
    layout: TopologyLayout, theme: Theme = DARK_THEME, title: str = ""
) -> draw.Drawing:
    """Draw a computed layout onto a new drawing.

    Draw order: background, captions, edges, nodes, legend. Edges go
    beneath nodes so their trimmed ends meet the node borders cleanly.
    A non-empty ``title`` becomes the SVG ``<title>``.
    """
    d = draw.Drawing(layout.width, layout.height)
    if title:
        d.append_title(title)

    _add_defs(d, layout, theme)

    if theme.background_color != "none":
        d.append(
            draw.Rectangle(
                0, 0, layout.width, layout.height,
                rx=theme.background_radius,
                fill=theme.background_color,
            )
        )

    for caption in layout.captions:
        d.append(
            draw.Text(
                caption.text,
                theme.caption_font_size,
                caption.x, caption.y,
                text_anchor="middle",
                fill=caption.color or theme.muted_color,
                font_family=theme.font_family,
            )
        )

    for path in layout.edges:
        _render_edge(d, path, theme)

    for placement in layout.placements:
        _render_node(d, placement, theme)

    _render_legend(d, layout, theme)

    return d


def _add_defs(d: draw.Drawing, layout: TopologyLayout, theme: Theme) -> None:
    """One arrow marker per drawn edge color, one shared glow filter."""
    for color in layout.edge_colors:
        marker = draw.Marker(
            0, 0, 10, 6,
            markerWidth=MARKER_WIDTH,
            markerHeight=MARKER_HEIGHT,
            orient="auto",
            id=marker_id(color),
            refX=10,
            refY=3,
        )
        marker.append(draw.Path(d=MARKER_PATH, fill=color))
        d.append_def(marker)

    if not layout.has_glow:
        return

    fx, fy, fw, fh = GLOW_FILTER_REGION
    glow = draw.Filter(id=GLOW_FILTER_ID, x=fx, y=fy, width=fw, height=fh)
    glow.append(
        draw.FilterItem("feGaussianBlur", stdDeviation=theme.glow_blur, result="blur")
    )
    merge = draw.FilterItem("feMerge")
    merge.append(draw.FilterItem("feMergeNode", **{"in": "blur"}))
    merge.append(draw.FilterItem("feMergeNode", **{"in": "SourceGraphic"}))
    glow.append(merge)
    d.append_def(glow)


def _render_edge(d: draw.Drawing, path: EdgePath, theme: Theme) -> None:
    d.append(
        draw.Path(
            d=path.d,
            fill="none",
            stroke=path.color,
            stroke_width=theme.edge_width,
            stroke_opacity=theme.edge_opacity,
            marker_end=f"url(#{path.marker_id})",
        )
    )
    if path.label_anchor is not None and path.edge.label:
        lx, ly = path.label_anchor
        d.append(
            draw.Text(
                path.edge.label,
                theme.edge_label_font_size,
                lx, ly,
                text_anchor="start",
                fill=path.color,
                font_family=theme.font_family,
                opacity=theme.edge_label_opacity,
            )
        )


def _render_node(d: draw.Drawing, placement: NodePlacement, theme: Theme) -> None:
    node = placement.node

    ring = glow_ring(placement)
    if ring is not None:
        d.append(
            draw.Rectangle(
                ring.x, ring.y, ring.width, ring.height,
                rx=GLOW_CORNER_RADIUS,
                fill="none",
                stroke=node.color,
                stroke_width=theme.glow_stroke_width,
                opacity=theme.glow_opacity,
                filter=f"url(#{GLOW_FILTER_ID})",
            )
        )

    box_style = {
        "rx": NODE_CORNER_RADIUS,
        "fill": node.background or theme.node_fill,
        "stroke": node.color,
        "stroke_width": node.border_width,
        "opacity": node.opacity,
    }
    if node.dashed:
        box_style["stroke_dasharray"] = theme.dash_pattern
    d.append(
        draw.Rectangle(
            placement.left, placement.top,
            placement.node_width, placement.node_height,
            **box_style,
        )
    )

    label_y = placement.y - (SUBLABEL_LIFT if node.sublabel else 0)
    d.append(
        draw.Text(
            node.label,
            theme.label_font_size,
            placement.x, label_y,
            text_anchor="middle",
            dominant_baseline="central",
            fill=theme.label_color,
            font_family=theme.font_family,
            opacity=node.opacity,
        )
    )

    if node.sublabel:
        d.append(
            draw.Text(
                node.sublabel,
                theme.sublabel_font_size,
                placement.x, placement.y + SUBLABEL_DROP,
                text_anchor="middle",
                dominant_baseline="central",
                fill=node.color,
                font_family=theme.font_family,
                font_weight=600,
                opacity=node.opacity,
            )
        )

    badge = badge_box(placement)
    if badge is not None:
        d.append(
            draw.Rectangle(
                badge.x, badge.y, badge.width, badge.height,
                rx=BADGE_CORNER_RADIUS,
                fill=badge.color,
            )
        )
        d.append(
            draw.Text(
                badge.text,
                theme.badge_font_size,
                badge.center_x, badge.center_y,
                text_anchor="middle",
                dominant_baseline="central",
                fill=theme.badge_text_color,
                font_family=theme.font_family,
                font_weight=700,
            )
        )


def _render_legend(d: draw.Drawing, layout: TopologyLayout, theme: Theme) -> None:
    for item in layout.legend_items:
        d.append(
            draw.Rectangle(
                item.swatch_x, item.swatch_y,
                LEGEND_SWATCH_SIZE, LEGEND_SWATCH_SIZE,
                rx=LEGEND_SWATCH_RADIUS,
                fill=item.entry.color,
            )
        )
        d.append(
            draw.Text(
                item.entry.label,
                theme.legend_font_size,
                item.text_x, item.text_y,
                dominant_baseline="central",
                fill=theme.muted_color,
                font_family=theme.font_family,
            )
        )
