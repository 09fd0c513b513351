"""Edge geometry: trimmed vertical S-curves between node boxes.

Edges leave the bottom-center of the source box and enter the top-center
of the target box. The path is a cubic Bezier whose control points sit at
the vertical midpoint, directly below the start and above the end, so the
curve straightens as the endpoints' x-coordinates converge.

Only layer-increasing edges look right. Same-layer and upward edges are
drawn with the same rule and overlap their nodes; routing around them is
not attempted.
"""

from __future__ import annotations

__all__ = [
    "EdgePath",
    "edge_marker_colors",
    "marker_id",
    "route_edge",
    "route_edges",
    "s_curve_path",
]

import re
from dataclasses import dataclass

from topolayer.layout.constants import EDGE_LABEL_DX, NODE_HEIGHT
from topolayer.parser.model import GraphEdge

Point = tuple[float, float]

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]+")
_ID_UNSAFE = re.compile(r"[^0-9A-Za-z-]")


@dataclass
class EdgePath:
    """Resolved geometry for one drawable edge."""

    edge: GraphEdge
    start: Point
    end: Point
    control1: Point
    control2: Point
    d: str
    label_anchor: Point | None = None

    @property
    def color(self) -> str:
        return self.edge.effective_color

    @property
    def marker_id(self) -> str:
        return marker_id(self.color)

    @property
    def mid_y(self) -> float:
        return (self.start[1] + self.end[1]) / 2


def marker_id(color: str) -> str:
    """Arrow marker id for an edge color.

    Hex colors keep their digits (``#ef4444`` -> ``arrow-ef4444``). Any
    other color is escaped character by character under an ``arrow-c-``
    prefix, so distinct colors never share an id.
    """
    if _HEX_COLOR.fullmatch(color):
        return f"arrow-{color[1:]}"
    escaped = _ID_UNSAFE.sub(lambda m: f"_{ord(m.group()):x}_", color)
    return f"arrow-c-{escaped}"


def s_curve_path(start: Point, end: Point) -> str:
    """SVG path data for a vertical S-curve from start to end."""
    sx, sy = start
    tx, ty = end
    my = (sy + ty) / 2
    return (
        f"M {sx:.2f} {sy:.2f} "
        f"C {sx:.2f} {my:.2f} {tx:.2f} {my:.2f} {tx:.2f} {ty:.2f}"
    )


def route_edge(
    edge: GraphEdge,
    positions: dict[str, Point],
    node_height: float = NODE_HEIGHT,
) -> EdgePath | None:
    """Trim an edge to its node boundaries, or None if an endpoint is missing."""
    src = positions.get(edge.source)
    tgt = positions.get(edge.target)
    if src is None or tgt is None:
        return None

    start = (src[0], src[1] + node_height / 2)
    end = (tgt[0], tgt[1] - node_height / 2)
    my = (start[1] + end[1]) / 2

    label_anchor = None
    if edge.label:
        label_anchor = ((start[0] + end[0]) / 2 + EDGE_LABEL_DX, my)

    return EdgePath(
        edge=edge,
        start=start,
        end=end,
        control1=(start[0], my),
        control2=(end[0], my),
        d=s_curve_path(start, end),
        label_anchor=label_anchor,
    )


def route_edges(
    edges: list[GraphEdge],
    positions: dict[str, Point],
    node_height: float = NODE_HEIGHT,
) -> tuple[list[EdgePath], list[GraphEdge]]:
    """Route every edge; dangling references are returned separately.

    Returns (paths, skipped) where skipped holds edges whose source or
    target id has no position.
    """
    paths: list[EdgePath] = []
    skipped: list[GraphEdge] = []
    for edge in edges:
        path = route_edge(edge, positions, node_height)
        if path is None:
            skipped.append(edge)
        else:
            paths.append(path)
    return paths, skipped


def edge_marker_colors(paths: list[EdgePath]) -> list[str]:
    """Distinct colors of drawn edges, in first-use order."""
    seen: dict[str, None] = {}
    for path in paths:
        seen.setdefault(path.color, None)
    return list(seen)
