"""Layout coordinator: grouping, sizing, placement, and edge geometry.

Stages run in order on every call; nothing is cached between calls:

1. Group nodes by layer
2. Size the canvas
3. Place rows and captions
4. Route edges and place decorations (badges, legend)
"""

from __future__ import annotations

__all__ = ["TopologyLayout", "compute_graph_layout", "compute_layout"]

import warnings
from collections import Counter
from dataclasses import dataclass, field

from topolayer.layout.constants import LAYER_GAP, NODE_GAP, NODE_HEIGHT, NODE_WIDTH
from topolayer.layout.edges import EdgePath, edge_marker_colors, route_edges
from topolayer.layout.labels import (
    BadgeBox,
    GlowRing,
    LegendItem,
    badge_box,
    glow_ring,
    place_legend,
)
from topolayer.layout.layers import (
    CanvasSize,
    CaptionRow,
    NodePlacement,
    assign_positions,
    compute_canvas_size,
    group_layers,
    sorted_layer_indices,
)
from topolayer.parser.model import (
    GraphEdge,
    GraphNode,
    LayerLabel,
    LegendEntry,
    TopologyGraph,
)


@dataclass
class TopologyLayout:
    """Complete geometry for one render of a layered topology graph."""

    canvas: CanvasSize
    node_width: float
    node_height: float
    sorted_layers: list[int] = field(default_factory=list)
    layer_groups: dict[int, list[GraphNode]] = field(default_factory=dict)
    positions: dict[str, tuple[float, float]] = field(default_factory=dict)
    placements: list[NodePlacement] = field(default_factory=list)
    edges: list[EdgePath] = field(default_factory=list)
    skipped_edges: list[GraphEdge] = field(default_factory=list)
    captions: list[CaptionRow] = field(default_factory=list)
    legend_items: list[LegendItem] = field(default_factory=list)

    @property
    def width(self) -> float:
        return self.canvas.width

    @property
    def height(self) -> float:
        return self.canvas.height

    @property
    def has_glow(self) -> bool:
        return any(p.node.glow for p in self.placements)

    @property
    def edge_colors(self) -> list[str]:
        return edge_marker_colors(self.edges)

    def badges(self) -> list[BadgeBox]:
        return [b for b in (badge_box(p) for p in self.placements) if b]

    def glow_rings(self) -> list[GlowRing]:
        return [g for g in (glow_ring(p) for p in self.placements) if g]


def _check_unique_ids(nodes: list[GraphNode], strict: bool) -> None:
    dupes = sorted(nid for nid, n in Counter(n.id for n in nodes).items() if n > 1)
    if not dupes:
        return
    msg = (
        f"Duplicate node id(s) {', '.join(dupes)}; "
        f"the last occurrence is used for edges"
    )
    if strict:
        raise ValueError(msg)
    warnings.warn(msg, stacklevel=3)


def compute_layout(
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
    strict: bool = False,
) -> TopologyLayout:
    """Compute node positions, edge paths, captions, and legend placement.

    Edges referencing a missing node id are skipped and reported in
    ``skipped_edges``. An empty node list yields an empty layout on the
    minimum canvas. With ``strict=True`` duplicate node ids raise
    ValueError; otherwise they emit a warning.
    """
    layer_labels = layer_labels or []
    legend = legend or []
    _check_unique_ids(nodes, strict)

    groups = group_layers(nodes)
    canvas = compute_canvas_size(
        groups,
        layer_labels,
        legend,
        node_width=node_width,
        node_height=node_height,
        layer_gap=layer_gap,
        node_gap=node_gap,
        width=width,
        height=height,
    )
    rows = assign_positions(
        groups,
        canvas.width,
        layer_labels,
        node_width=node_width,
        node_height=node_height,
        layer_gap=layer_gap,
        node_gap=node_gap,
    )
    paths, skipped = route_edges(edges, rows.positions, node_height)

    return TopologyLayout(
        canvas=canvas,
        node_width=node_width,
        node_height=node_height,
        sorted_layers=sorted_layer_indices(groups),
        layer_groups=groups,
        positions=rows.positions,
        placements=rows.placements,
        edges=paths,
        skipped_edges=skipped,
        captions=rows.captions,
        legend_items=place_legend(legend, canvas),
    )


def compute_graph_layout(
    graph: TopologyGraph, strict: bool = False, **overrides: float | None
) -> TopologyLayout:
    """Lay out a loaded graph, applying its ``layout`` options.

    Keyword overrides that are not None take precedence over the graph's
    own options.
    """
    options: dict[str, float] = dict(graph.layout_options)
    options.update({k: v for k, v in overrides.items() if v is not None})
    return compute_layout(
        graph.nodes,
        graph.edges,
        layer_labels=graph.layer_labels,
        legend=graph.legend,
        strict=strict,
        **options,
    )
