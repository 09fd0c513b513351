"""Graph checks for caller misuse the layout engine tolerates silently.

The engine never fails on these cases; it skips dangling edges, draws
non-increasing edges with the usual S-curve, and lets the last duplicate
id win. These checks surface them for tooling and tests.
"""

from __future__ import annotations

__all__ = [
    "Severity",
    "Violation",
    "build_digraph",
    "check_dangling_edges",
    "check_duplicate_ids",
    "check_edge_direction",
    "check_layer_labels",
    "validate_graph",
]

from collections import Counter
from dataclasses import dataclass
from enum import Enum

import networkx as nx

from topolayer.parser.model import TopologyGraph


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Violation:
    check: str
    severity: Severity
    message: str

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.check}: {self.message}"


def build_digraph(graph: TopologyGraph) -> nx.DiGraph:
    """Directed graph of nodes (with ``layer`` attributes) and resolvable edges.

    Edges whose endpoints are missing are left out, as the engine does.
    """
    G = nx.DiGraph()
    for node in graph.nodes:
        G.add_node(node.id, layer=node.layer)
    for edge in graph.edges:
        if edge.source in G and edge.target in G:
            G.add_edge(edge.source, edge.target, label=edge.label)
    return G


def check_duplicate_ids(graph: TopologyGraph) -> list[Violation]:
    counts = Counter(n.id for n in graph.nodes)
    return [
        Violation(
            "duplicate_ids",
            Severity.ERROR,
            f"Node id '{nid}' is used {count} times",
        )
        for nid, count in counts.items()
        if count > 1
    ]


def check_dangling_edges(graph: TopologyGraph) -> list[Violation]:
    ids = graph.node_ids()
    violations: list[Violation] = []
    for edge in graph.edges:
        missing = [end for end in (edge.source, edge.target) if end not in ids]
        if missing:
            violations.append(
                Violation(
                    "dangling_edges",
                    Severity.WARNING,
                    f"Edge {edge.source} -> {edge.target} references unknown "
                    f"node(s) {', '.join(missing)}; it will not be drawn",
                )
            )
    return violations


def check_edge_direction(graph: TopologyGraph) -> list[Violation]:
    """Flag edges that do not go to a strictly higher layer."""
    G = build_digraph(graph)
    violations: list[Violation] = []
    for u, v in G.edges:
        lu = G.nodes[u]["layer"]
        lv = G.nodes[v]["layer"]
        if lv > lu:
            continue
        kind = "same-layer" if lv == lu else "upward"
        violations.append(
            Violation(
                "edge_direction",
                Severity.WARNING,
                f"Edge {u} -> {v} is {kind} (layer {lu} -> {lv}) and will "
                f"overlap its nodes",
            )
        )
    return violations


def check_layer_labels(graph: TopologyGraph) -> list[Violation]:
    layers = {n.layer for n in graph.nodes}
    return [
        Violation(
            "layer_labels",
            Severity.WARNING,
            f"Caption '{ll.text}' follows layer {ll.after_layer}, which has no nodes",
        )
        for ll in graph.layer_labels
        if ll.after_layer not in layers
    ]


def validate_graph(graph: TopologyGraph) -> list[Violation]:
    """Run every check and return all violations."""
    violations: list[Violation] = []
    violations.extend(check_duplicate_ids(graph))
    violations.extend(check_dangling_edges(graph))
    violations.extend(check_edge_direction(graph))
    violations.extend(check_layer_labels(graph))
    return violations
