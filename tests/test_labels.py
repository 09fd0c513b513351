"""Tests for badge, glow, and legend geometry."""

from conftest import node

from topolayer.layout.engine import compute_layout
from topolayer.layout.labels import (
    badge_box,
    glow_ring,
    legend_entry_advance,
    place_legend,
    text_width,
)
from topolayer.layout.layers import CanvasSize, NodePlacement
from topolayer.parser.model import LegendEntry


def _placement(**kwargs) -> NodePlacement:
    return NodePlacement(
        node("n", 0, **kwargs), x=100, y=50, node_width=72, node_height=44
    )


def test_text_width():
    assert text_width("CRIT", 5.5) == 22
    assert text_width("", 6) == 0


def test_badge_sized_from_text():
    badge = badge_box(_placement(badge="CRIT"))
    assert badge.width == 32
    assert badge.height == 14
    assert badge.x == 100 - 16
    assert badge.y == 50 + 22 + 4
    assert badge.color == "#8b5cf6"


def test_badge_color_override():
    badge = badge_box(_placement(badge="NEW", badge_color="#dc2626"))
    assert badge.color == "#dc2626"


def test_no_badge():
    assert badge_box(_placement()) is None


def test_glow_ring_surrounds_box():
    ring = glow_ring(_placement(glow=True))
    assert (ring.x, ring.y, ring.width, ring.height) == (61, 25, 78, 50)
    assert glow_ring(_placement()) is None


def test_legend_centered_strip():
    legend = [LegendEntry("#ef4444", "Source")]
    items = place_legend(legend, CanvasSize(240, 200))
    assert legend_entry_advance(legend[0]) == 60
    item = items[0]
    assert item.swatch_x == 90
    assert item.swatch_y == 180
    assert item.text_x == 102
    assert item.text_y == 184


def test_legend_entries_advance_by_label_length():
    legend = [LegendEntry("#000", "ab"), LegendEntry("#fff", "abcdef")]
    items = place_legend(legend, CanvasSize(400, 200))
    assert items[1].swatch_x - items[0].swatch_x == 2 * 6 + 24


def test_empty_legend():
    assert place_legend([], CanvasSize(240, 120)) == []


def test_layout_badges_and_glow(propagation_graph):
    layout = compute_layout(propagation_graph.nodes, propagation_graph.edges)
    assert [b.text for b in layout.badges()] == ["CRIT"]
    assert len(layout.glow_rings()) == 1
    assert layout.has_glow
