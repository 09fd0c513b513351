"""Layer grouping, canvas sizing, and row placement.

Layers are assigned by the caller. This module only partitions nodes by
their layer index, sizes the canvas to fit the widest row and the row
count, and centers each row horizontally while stacking rows top to
bottom.
"""

from __future__ import annotations

__all__ = [
    "CanvasSize",
    "CaptionRow",
    "NodePlacement",
    "RowPlacement",
    "assign_positions",
    "compute_canvas_size",
    "group_layers",
    "sorted_layer_indices",
]

from dataclasses import dataclass, field

from topolayer.layout.constants import (
    BOTTOM_MARGIN,
    CAPTION_BASELINE_OFFSET,
    CAPTION_ROW_HEIGHT,
    EDGE_LABEL_OVERHANG,
    LAYER_GAP,
    LEGEND_ROW_HEIGHT,
    MIN_CANVAS_HEIGHT,
    MIN_CANVAS_WIDTH,
    NODE_GAP,
    NODE_HEIGHT,
    NODE_WIDTH,
    ROW_PADDING,
    TOP_MARGIN,
)
from topolayer.parser.model import GraphNode, LayerLabel, LegendEntry


@dataclass(frozen=True)
class CanvasSize:
    width: float
    height: float


@dataclass
class NodePlacement:
    """Center point assigned to one input node."""

    node: GraphNode
    x: float
    y: float
    node_width: float
    node_height: float

    @property
    def left(self) -> float:
        return self.x - self.node_width / 2

    @property
    def top(self) -> float:
        return self.y - self.node_height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.node_height / 2


@dataclass
class CaptionRow:
    """An inter-layer caption centered on the canvas."""

    after_layer: int
    text: str
    color: str | None
    x: float
    y: float


@dataclass
class RowPlacement:
    """Result of walking the sorted layers."""

    positions: dict[str, tuple[float, float]] = field(default_factory=dict)
    placements: list[NodePlacement] = field(default_factory=list)
    captions: list[CaptionRow] = field(default_factory=list)
    content_bottom: float = TOP_MARGIN


def group_layers(nodes: list[GraphNode]) -> dict[int, list[GraphNode]]:
    """Partition nodes by layer index, keeping input order within a layer."""
    groups: dict[int, list[GraphNode]] = {}
    for node in nodes:
        groups.setdefault(node.layer, []).append(node)
    return groups


def sorted_layer_indices(groups: dict[int, list[GraphNode]]) -> list[int]:
    return sorted(groups)


def _caption_lookup(layer_labels: list[LayerLabel]) -> dict[int, LayerLabel]:
    """Map layer index -> caption, first caption wins for a repeated index."""
    lookup: dict[int, LayerLabel] = {}
    for ll in layer_labels:
        lookup.setdefault(ll.after_layer, ll)
    return lookup


def _inter_row_gap(node_height: float, layer_gap: float) -> float:
    return max(0.0, layer_gap - node_height - ROW_PADDING)


def compute_canvas_size(
    groups: dict[int, list[GraphNode]],
    layer_labels: list[LayerLabel] | None = None,
    legend: list[LegendEntry] | None = None,
    node_width: float = NODE_WIDTH,
    node_height: float = NODE_HEIGHT,
    layer_gap: float = LAYER_GAP,
    node_gap: float = NODE_GAP,
    width: float | None = None,
    height: float | None = None,
) -> CanvasSize:
    """Size the canvas to fit every row, caption row, and the legend.

    The height counts both the inter-layer gap and each inserted caption
    row, so adding a caption or a legend always grows the canvas. Explicit
    ``width``/``height`` act as lower bounds: the canvas is never smaller
    than its content.
    """
    layers = sorted_layer_indices(groups)
    rows = len(layers)
    widest = max((len(groups[layer]) for layer in layers), default=0)

    auto_width = widest * (node_width + node_gap) + node_gap + EDGE_LABEL_OVERHANG

    captions = _caption_lookup(layer_labels or [])
    caption_rows = sum(1 for layer in layers if layer in captions)

    auto_height = TOP_MARGIN + BOTTOM_MARGIN
    if rows:
        auto_height += rows * (node_height + ROW_PADDING)
        auto_height += (rows - 1) * _inter_row_gap(node_height, layer_gap)
    auto_height += caption_rows * CAPTION_ROW_HEIGHT
    if legend:
        auto_height += LEGEND_ROW_HEIGHT

    return CanvasSize(
        width=max(auto_width, MIN_CANVAS_WIDTH, width or 0.0),
        height=max(auto_height, MIN_CANVAS_HEIGHT, height or 0.0),
    )


def assign_positions(
    groups: dict[int, list[GraphNode]],
    canvas_width: float,
    layer_labels: list[LayerLabel] | None = None,
    node_width: float = NODE_WIDTH,
    node_height: float = NODE_HEIGHT,
    layer_gap: float = LAYER_GAP,
    node_gap: float = NODE_GAP,
) -> RowPlacement:
    """Center each layer's row and stack rows from the top margin down.

    A caption after a layer replaces that layer's gap with a caption row.
    Duplicate node ids each keep their own slot in the row, but the
    position map holds only the last one.
    """
    layers = sorted_layer_indices(groups)
    captions = _caption_lookup(layer_labels or [])
    result = RowPlacement()
    cursor = TOP_MARGIN

    for i, layer in enumerate(layers):
        row = groups[layer]
        n = len(row)
        total_width = n * node_width + (n - 1) * node_gap
        start_x = (canvas_width - total_width) / 2

        for j, node in enumerate(row):
            x = start_x + j * (node_width + node_gap) + node_width / 2
            y = cursor + node_height / 2
            result.positions[node.id] = (x, y)
            result.placements.append(
                NodePlacement(node, x, y, node_width, node_height)
            )

        cursor += node_height + ROW_PADDING

        caption = captions.get(layer)
        if caption is not None:
            cursor += CAPTION_BASELINE_OFFSET
            result.captions.append(
                CaptionRow(
                    after_layer=layer,
                    text=caption.text,
                    color=caption.color,
                    x=canvas_width / 2,
                    y=cursor,
                )
            )
            cursor += CAPTION_ROW_HEIGHT - CAPTION_BASELINE_OFFSET
        elif i < len(layers) - 1:
            cursor += _inter_row_gap(node_height, layer_gap)

    result.content_bottom = cursor
    return result
