"""Shared test fixtures and helpers for the topolayer test suite."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from topolayer.parser.loader import load_graph
from topolayer.parser.model import GraphEdge, GraphNode, TopologyGraph

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PROPAGATION_FILE = FIXTURES_DIR / "propagation.json"
INSTANCE_FILE = FIXTURES_DIR / "instance_person.json"

SVG_NS = "{http://www.w3.org/2000/svg}"


# --- Graph builders ---


def node(nid: str, layer: int, **kwargs) -> GraphNode:
    """GraphNode with its id as label and a default color."""
    kwargs.setdefault("color", "#8b5cf6")
    return GraphNode(id=nid, label=kwargs.pop("label", nid), layer=layer, **kwargs)


def edge(source: str, target: str, **kwargs) -> GraphEdge:
    return GraphEdge(source=source, target=target, **kwargs)


# --- SVG helpers ---


def svg_elements(svg: str, tag: str) -> list[ET.Element]:
    """All elements with the given SVG tag name, in document order."""
    root = ET.fromstring(svg)
    return list(root.iter(f"{SVG_NS}{tag}"))


def svg_texts(svg: str) -> list[str]:
    return [t.text for t in svg_elements(svg, "text") if t.text]


# --- Pytest fixtures ---


@pytest.fixture
def row_graph() -> TopologyGraph:
    """Three nodes sharing layer 0."""
    return TopologyGraph(
        nodes=[node("a", 0), node("b", 0), node("c", 0)],
        edges=[],
    )


@pytest.fixture
def chain_graph() -> TopologyGraph:
    """Two nodes on layers 0 and 1 joined by one labelled edge."""
    return TopologyGraph(
        nodes=[node("a", 0), node("b", 1)],
        edges=[edge("a", "b", label="uses", color="#22c55e")],
    )


@pytest.fixture
def propagation_graph() -> TopologyGraph:
    """Four-layer propagation chain with captions, badges, and a legend."""
    return load_graph(PROPAGATION_FILE)
