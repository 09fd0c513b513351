"""Radial instance topology: one instance ringed by its related instances.

The ring uses fixed offsets around the origin. User drags are kept in a
separate ``PositionOverrides`` map and merged over the defaults before
each layout, so the layout functions themselves stay pure.
"""

from __future__ import annotations

__all__ = [
    "PositionOverrides",
    "RadialEdge",
    "RadialGraph",
    "RadialLayout",
    "RadialNode",
    "compute_radial_layout",
    "default_positions",
    "label_angle",
    "trim_segment",
]

import math
from dataclasses import dataclass, field

from topolayer.layout.constants import (
    CENTER_NODE_SIZE,
    RADIAL_LABEL_MIN_WIDTH,
    RADIAL_LABEL_WIDTH_FRACTION,
    RADIAL_MARGIN,
    RING_NODE_SIZE,
    RING_OFFSETS,
)

Point = tuple[float, float]


@dataclass
class RadialNode:
    id: str
    name: str
    type: str
    color: str
    relation: str = ""  # Predicate linking the center to this node


@dataclass
class RadialGraph:
    center: RadialNode
    neighbors: list[RadialNode] = field(default_factory=list)


@dataclass
class RadialEdge:
    """Center-to-neighbor connector with its label geometry."""

    node: RadialNode
    start: Point  # Center of the center node
    end: Point  # Center of the neighbor
    visible_start: Point  # On the center node's circle
    visible_end: Point  # On the neighbor's circle
    label_x: float
    label_y: float
    label_angle: float
    label_width: float


@dataclass
class RadialLayout:
    center: RadialNode
    neighbors: list[RadialNode]
    positions: dict[str, Point]
    edges: list[RadialEdge]
    dropped: list[RadialNode]
    view_box: tuple[float, float, float, float]  # min_x, min_y, width, height


class PositionOverrides:
    """Per-node drag offsets layered over default positions.

    A drag records the pointer and the node's offset when it starts; each
    move sets the offset from those, so repeated moves never accumulate
    rounding drift.
    """

    def __init__(self) -> None:
        self.offsets: dict[str, Point] = {}
        self._drag: tuple[str, Point, Point] | None = None

    @property
    def dragging(self) -> str | None:
        return self._drag[0] if self._drag else None

    def begin_drag(self, node_id: str, pointer: Point) -> None:
        self._drag = (node_id, pointer, self.offsets.get(node_id, (0.0, 0.0)))

    def drag_to(self, pointer: Point) -> None:
        if self._drag is None:
            return
        node_id, start_pointer, start_offset = self._drag
        self.offsets[node_id] = (
            start_offset[0] + pointer[0] - start_pointer[0],
            start_offset[1] + pointer[1] - start_pointer[1],
        )

    def end_drag(self) -> None:
        self._drag = None

    def reset(self) -> None:
        """Drop all offsets, e.g. when a different instance is shown."""
        self.offsets.clear()
        self._drag = None

    def apply(self, defaults: dict[str, Point]) -> dict[str, Point]:
        merged: dict[str, Point] = {}
        for node_id, (x, y) in defaults.items():
            dx, dy = self.offsets.get(node_id, (0.0, 0.0))
            merged[node_id] = (x + dx, y + dy)
        return merged


def default_positions(graph: RadialGraph) -> dict[str, Point]:
    """Center at the origin, neighbors on the fixed ring slots."""
    positions: dict[str, Point] = {graph.center.id: (0.0, 0.0)}
    for node, offset in zip(graph.neighbors, RING_OFFSETS):
        positions[node.id] = offset
    return positions


def trim_segment(p1: Point, p2: Point, r1: float, r2: float) -> tuple[Point, Point]:
    """Portion of the segment p1-p2 outside circles of radius r1 and r2.

    Coincident points are treated as one unit apart to avoid dividing by
    zero. Overlapping circles produce a reversed segment.
    """
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    dist = math.hypot(dx, dy) or 1.0
    t1 = r1 / dist
    t2 = 1 - r2 / dist
    return (
        (p1[0] + dx * t1, p1[1] + dy * t1),
        (p1[0] + dx * t2, p1[1] + dy * t2),
    )


def label_angle(p1: Point, p2: Point) -> float:
    """Segment angle in degrees, folded into [-90, 90] so text reads upright."""
    angle = math.degrees(math.atan2(p2[1] - p1[1], p2[0] - p1[0]))
    if angle > 90:
        angle -= 180
    if angle < -90:
        angle += 180
    return angle


def _radial_edge(node: RadialNode, start: Point, end: Point) -> RadialEdge:
    vis_start, vis_end = trim_segment(
        start, end, CENTER_NODE_SIZE / 2, RING_NODE_SIZE / 2
    )
    visible_len = math.hypot(vis_end[0] - vis_start[0], vis_end[1] - vis_start[1])
    # A reversed segment (overlapping circles) has no visible length
    dist = math.hypot(end[0] - start[0], end[1] - start[1]) or 1.0
    if dist < (CENTER_NODE_SIZE + RING_NODE_SIZE) / 2:
        visible_len = 0.0
    return RadialEdge(
        node=node,
        start=start,
        end=end,
        visible_start=vis_start,
        visible_end=vis_end,
        label_x=(vis_start[0] + vis_end[0]) / 2,
        label_y=(vis_start[1] + vis_end[1]) / 2,
        label_angle=label_angle(start, end),
        label_width=max(
            visible_len * RADIAL_LABEL_WIDTH_FRACTION, RADIAL_LABEL_MIN_WIDTH
        ),
    )


def compute_radial_layout(
    graph: RadialGraph,
    overrides: PositionOverrides | None = None,
) -> RadialLayout:
    """Position the center and ring nodes and compute connector geometry.

    Only as many neighbors as there are ring slots are shown; the rest are
    returned in ``dropped``.
    """
    shown = graph.neighbors[: len(RING_OFFSETS)]
    dropped = graph.neighbors[len(RING_OFFSETS):]

    positions = default_positions(graph)
    if overrides is not None:
        positions = overrides.apply(positions)

    center_pos = positions[graph.center.id]
    edges = [_radial_edge(node, center_pos, positions[node.id]) for node in shown]

    # View box covers every circle plus a margin
    extents = [(center_pos, CENTER_NODE_SIZE / 2)]
    extents += [(positions[node.id], RING_NODE_SIZE / 2) for node in shown]
    min_x = min(p[0] - r for p, r in extents) - RADIAL_MARGIN
    min_y = min(p[1] - r for p, r in extents) - RADIAL_MARGIN
    max_x = max(p[0] + r for p, r in extents) + RADIAL_MARGIN
    max_y = max(p[1] + r for p, r in extents) + RADIAL_MARGIN

    return RadialLayout(
        center=graph.center,
        neighbors=list(shown),
        positions=positions,
        edges=edges,
        dropped=list(dropped),
        view_box=(min_x, min_y, max_x - min_x, max_y - min_y),
    )
