"""JSON graph file loader.

A layered graph document looks like::

    {
      "title": "Propagation chain",
      "theme": "dark",
      "layout": {"nodeWidth": 72, "layerGap": 80},
      "nodes": [{"id": "db", "label": "db-02", "layer": 0, "color": "#ef4444"}],
      "edges": [{"source": "db", "target": "cache", "label": "uses"}],
      "layerLabels": [{"afterLayer": 0, "text": "uses"}],
      "legend": [{"color": "#ef4444", "label": "Source"}]
    }

A radial instance document has ``center`` and ``neighbors`` instead of
``nodes``/``edges``. Keys are camelCase; snake_case spellings are also
accepted.
"""

from __future__ import annotations

__all__ = [
    "GraphFormatError",
    "is_radial_document",
    "load_graph",
    "parse_graph",
    "parse_radial_graph",
]

import json
import re
from pathlib import Path
from typing import Any

from topolayer.layout.radial import RadialGraph, RadialNode
from topolayer.parser.model import (
    GraphEdge,
    GraphNode,
    LayerLabel,
    LegendEntry,
    TopologyGraph,
)

_LAYOUT_OPTIONS = frozenset(
    {"width", "height", "node_width", "node_height", "layer_gap", "node_gap"}
)


class GraphFormatError(ValueError):
    """Raised when a graph document is malformed."""


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _normalize(entry: Any, where: str) -> dict[str, Any]:
    if not isinstance(entry, dict):
        raise GraphFormatError(
            f"{where}: expected an object, got {type(entry).__name__}"
        )
    return {_snake(k): v for k, v in entry.items()}


def _require(entry: dict[str, Any], keys: tuple[str, ...], where: str) -> None:
    missing = [k for k in keys if k not in entry]
    if missing:
        raise GraphFormatError(
            f"{where}: missing required field(s) {', '.join(missing)}"
        )


def _list(doc: dict[str, Any], key: str) -> list[Any]:
    value = doc.get(key) or []
    if not isinstance(value, list):
        raise GraphFormatError(f"'{key}' must be a list")
    return value


def _number(entry: dict[str, Any], key: str, default: float, where: str) -> float:
    value = entry.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise GraphFormatError(f"{where}: {key} must be a number") from e


def _layer_index(entry: dict[str, Any], key: str, where: str) -> int:
    value = entry[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise GraphFormatError(f"{where}: {key} must be a non-negative integer")
    return value


def _color(
    entry: dict[str, Any], key: str, where: str, required: bool = False
) -> str | None:
    value = entry.get(key)
    if (value is None and required) or (
        value is not None and not isinstance(value, str)
    ):
        raise GraphFormatError(f"{where}: {key} must be a color string")
    return value


def _parse_node(raw: Any, i: int) -> GraphNode:
    where = f"nodes[{i}]"
    entry = _normalize(raw, where)
    _require(entry, ("id", "layer", "color"), where)
    return GraphNode(
        id=str(entry["id"]),
        label=str(entry.get("label", entry["id"])),
        layer=_layer_index(entry, "layer", where),
        color=_color(entry, "color", where, required=True),
        sublabel=entry.get("sublabel"),
        background=_color(entry, "background", where) or _color(entry, "bg", where),
        border_width=_number(entry, "border_width", 2.0, where),
        dashed=bool(entry.get("dashed", False)),
        opacity=_number(entry, "opacity", 1.0, where),
        badge=entry.get("badge"),
        badge_color=_color(entry, "badge_color", where),
        glow=bool(entry.get("glow", False)),
    )


def _parse_edge(raw: Any, i: int) -> GraphEdge:
    where = f"edges[{i}]"
    entry = _normalize(raw, where)
    _require(entry, ("source", "target"), where)
    return GraphEdge(
        source=str(entry["source"]),
        target=str(entry["target"]),
        label=entry.get("label"),
        color=_color(entry, "color", where),
    )


def _parse_layer_label(raw: Any, i: int) -> LayerLabel:
    where = f"layerLabels[{i}]"
    entry = _normalize(raw, where)
    _require(entry, ("after_layer", "text"), where)
    return LayerLabel(
        after_layer=_layer_index(entry, "after_layer", where),
        text=str(entry["text"]),
        color=_color(entry, "color", where),
    )


def _parse_legend_entry(raw: Any, i: int) -> LegendEntry:
    where = f"legend[{i}]"
    entry = _normalize(raw, where)
    _require(entry, ("color", "label"), where)
    return LegendEntry(
        color=_color(entry, "color", where, required=True),
        label=str(entry["label"]),
    )


def _parse_layout_options(raw: Any) -> dict[str, float]:
    if raw is None:
        return {}
    entry = _normalize(raw, "layout")
    options: dict[str, float] = {}
    for key, value in entry.items():
        if key not in _LAYOUT_OPTIONS:
            raise GraphFormatError(f"layout: unknown option '{key}'")
        try:
            options[key] = float(value)
        except (TypeError, ValueError) as e:
            raise GraphFormatError(f"layout: '{key}' must be a number") from e
    return options


def _load_document(text: str) -> dict[str, Any]:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"Invalid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise GraphFormatError("Graph document must be a JSON object")
    return doc


def is_radial_document(text: str) -> bool:
    return "center" in _load_document(text)


def parse_graph(text: str) -> TopologyGraph:
    """Parse a layered graph document."""
    doc = _load_document(text)
    if "nodes" not in doc:
        raise GraphFormatError("Graph document has no 'nodes'")
    raw_labels = _list(doc, "layerLabels") or _list(doc, "layer_labels")
    return TopologyGraph(
        nodes=[_parse_node(n, i) for i, n in enumerate(_list(doc, "nodes"))],
        edges=[_parse_edge(e, i) for i, e in enumerate(_list(doc, "edges"))],
        layer_labels=[_parse_layer_label(ll, i) for i, ll in enumerate(raw_labels)],
        legend=[
            _parse_legend_entry(le, i) for i, le in enumerate(_list(doc, "legend"))
        ],
        title=str(doc.get("title", "")),
        theme=doc.get("theme"),
        layout_options=_parse_layout_options(doc.get("layout")),
    )


def _parse_radial_node(raw: Any, where: str) -> RadialNode:
    entry = _normalize(raw, where)
    _require(entry, ("id", "name", "color"), where)
    return RadialNode(
        id=str(entry["id"]),
        name=str(entry["name"]),
        type=str(entry.get("type", "")),
        color=_color(entry, "color", where, required=True),
        relation=str(entry.get("relation", "")),
    )


def parse_radial_graph(text: str) -> RadialGraph:
    """Parse a radial instance document."""
    doc = _load_document(text)
    if "center" not in doc:
        raise GraphFormatError("Radial document has no 'center'")
    return RadialGraph(
        center=_parse_radial_node(doc["center"], "center"),
        neighbors=[
            _parse_radial_node(n, f"neighbors[{i}]")
            for i, n in enumerate(_list(doc, "neighbors"))
        ],
    )


def load_graph(path: str | Path) -> TopologyGraph:
    return parse_graph(Path(path).read_text())
