"""topolayer: layered topology graph layout and SVG rendering."""

__version__ = "0.1.0"

from topolayer.layout.engine import TopologyLayout, compute_layout  # noqa: E402
from topolayer.parser.model import (  # noqa: E402
    GraphEdge,
    GraphNode,
    LayerLabel,
    LegendEntry,
    TopologyGraph,
)
from topolayer.render.svg import render, render_svg  # noqa: E402

__all__ = [
    "GraphEdge",
    "GraphNode",
    "LayerLabel",
    "LegendEntry",
    "TopologyGraph",
    "TopologyLayout",
    "__version__",
    "compute_layout",
    "render",
    "render_svg",
]
