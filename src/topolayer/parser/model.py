"""Data model for layered topology graphs."""

from __future__ import annotations

__all__ = [
    "GraphEdge",
    "GraphNode",
    "LayerLabel",
    "LegendEntry",
    "TopologyGraph",
]

from dataclasses import dataclass, field

from topolayer.layout.constants import DEFAULT_EDGE_COLOR


@dataclass
class GraphNode:
    """A node box placed on a caller-assigned layer (row)."""

    id: str
    label: str
    layer: int
    color: str
    sublabel: str | None = None
    background: str | None = None  # None means the theme's node fill
    border_width: float = 2.0
    dashed: bool = False
    opacity: float = 1.0
    badge: str | None = None
    badge_color: str | None = None
    glow: bool = False

    @property
    def effective_badge_color(self) -> str:
        return self.badge_color or self.color


@dataclass
class GraphEdge:
    """A directed connector between two node ids."""

    source: str
    target: str
    label: str | None = None
    color: str | None = None

    @property
    def effective_color(self) -> str:
        return self.color or DEFAULT_EDGE_COLOR


@dataclass
class LayerLabel:
    """Caption row inserted below the layer ``after_layer``."""

    after_layer: int
    text: str
    color: str | None = None


@dataclass
class LegendEntry:
    color: str
    label: str


@dataclass
class TopologyGraph:
    """Complete graph definition as loaded from a graph file."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    layer_labels: list[LayerLabel] = field(default_factory=list)
    legend: list[LegendEntry] = field(default_factory=list)
    title: str = ""
    theme: str | None = None
    layout_options: dict[str, float] = field(default_factory=dict)

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}
