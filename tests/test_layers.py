"""Tests for layer grouping, canvas sizing, and row placement."""

import pytest

from conftest import node

from topolayer.layout.constants import (
    BOTTOM_MARGIN,
    LEGEND_ROW_HEIGHT,
    MIN_CANVAS_HEIGHT,
    MIN_CANVAS_WIDTH,
    TOP_MARGIN,
)
from topolayer.layout.engine import compute_layout
from topolayer.layout.layers import (
    assign_positions,
    compute_canvas_size,
    group_layers,
    sorted_layer_indices,
)
from topolayer.parser.model import LayerLabel, LegendEntry


def test_group_layers_keeps_input_order():
    nodes = [node("x", 1), node("a", 0), node("y", 1), node("b", 0)]
    groups = group_layers(nodes)
    assert [n.id for n in groups[0]] == ["a", "b"]
    assert [n.id for n in groups[1]] == ["x", "y"]


def test_sorted_layers_allow_gaps():
    groups = group_layers([node("c", 7), node("a", 0), node("b", 3)])
    assert sorted_layer_indices(groups) == [0, 3, 7]


def test_single_row_canvas_width(row_graph):
    """3 nodes in one layer: 3*(72+20)+20+40."""
    layout = compute_layout(row_graph.nodes, row_graph.edges)
    assert layout.width == 336
    assert layout.height == MIN_CANVAS_HEIGHT


def test_single_row_is_centered(row_graph):
    layout = compute_layout(row_graph.nodes, row_graph.edges)
    xs = [layout.positions[nid][0] for nid in ("a", "b", "c")]
    assert xs == [76, 168, 260]
    assert {layout.positions[nid][1] for nid in ("a", "b", "c")} == {42}

    first, last = layout.placements[0], layout.placements[-1]
    left_margin = first.left
    right_margin = layout.width - (last.left + last.node_width)
    assert left_margin == pytest.approx(right_margin)


def test_empty_graph_uses_floor_canvas():
    layout = compute_layout([], [])
    assert layout.width == MIN_CANVAS_WIDTH
    assert layout.height == MIN_CANVAS_HEIGHT
    assert layout.positions == {}
    assert layout.placements == []


def test_two_layer_positions(chain_graph):
    layout = compute_layout(chain_graph.nodes, chain_graph.edges)
    assert layout.width == MIN_CANVAS_WIDTH
    assert layout.positions["a"] == (120, 42)
    # 20 top + 44 node + 8 padding + 20 gap, then half a node
    assert layout.positions["b"] == (120, 114)
    assert layout.height == 168


def test_caption_replaces_layer_gap(chain_graph):
    layout = compute_layout(
        chain_graph.nodes,
        chain_graph.edges,
        layer_labels=[LayerLabel(after_layer=0, text="uses", color="#06b6d4")],
    )
    assert len(layout.captions) == 1
    caption = layout.captions[0]
    assert caption.y == 76
    assert caption.x == layout.width / 2
    assert layout.positions["b"][1] == 116


def test_first_caption_wins_for_repeated_layer(chain_graph):
    labels = [
        LayerLabel(after_layer=0, text="first"),
        LayerLabel(after_layer=0, text="second"),
    ]
    layout = compute_layout(chain_graph.nodes, chain_graph.edges, layer_labels=labels)
    assert [c.text for c in layout.captions] == ["first"]


def test_caption_for_missing_layer_is_ignored(chain_graph):
    plain = compute_layout(chain_graph.nodes, chain_graph.edges)
    layout = compute_layout(
        chain_graph.nodes,
        chain_graph.edges,
        layer_labels=[LayerLabel(after_layer=9, text="nowhere")],
    )
    assert layout.captions == []
    assert layout.height == plain.height


def test_caption_grows_canvas(chain_graph):
    plain = compute_layout(chain_graph.nodes, chain_graph.edges)
    captioned = compute_layout(
        chain_graph.nodes,
        chain_graph.edges,
        layer_labels=[LayerLabel(after_layer=0, text="uses")],
    )
    assert captioned.height > plain.height


def test_caption_grows_canvas_with_wide_gap(chain_graph):
    plain = compute_layout(chain_graph.nodes, chain_graph.edges, layer_gap=200)
    captioned = compute_layout(
        chain_graph.nodes,
        chain_graph.edges,
        layer_labels=[LayerLabel(after_layer=0, text="uses")],
        layer_gap=200,
    )
    assert captioned.height > plain.height


def test_legend_grows_canvas(chain_graph):
    plain = compute_layout(chain_graph.nodes, chain_graph.edges)
    with_legend = compute_layout(
        chain_graph.nodes,
        chain_graph.edges,
        legend=[LegendEntry(color="#ef4444", label="Source")],
    )
    assert with_legend.height == plain.height + 32


def test_canvas_grows_with_nodes_and_layers():
    small = compute_canvas_size(group_layers([node(str(i), 0) for i in range(3)]))
    wide = compute_canvas_size(group_layers([node(str(i), 0) for i in range(6)]))
    tall = compute_canvas_size(group_layers([node(str(i), i) for i in range(6)]))
    assert wide.width > small.width
    assert tall.height > small.height


def test_explicit_size_is_a_lower_bound(row_graph):
    larger = compute_layout(row_graph.nodes, row_graph.edges, width=500, height=300)
    assert (larger.width, larger.height) == (500, 300)
    # Row stays centered on the wider canvas
    assert larger.positions["b"][0] == 250

    smaller = compute_layout(row_graph.nodes, row_graph.edges, width=100, height=50)
    assert smaller.width == 336
    assert smaller.height == MIN_CANVAS_HEIGHT


def test_layer_order_maps_to_vertical_order(propagation_graph):
    layout = compute_layout(
        propagation_graph.nodes,
        propagation_graph.edges,
        layer_labels=propagation_graph.layer_labels,
    )
    for a in propagation_graph.nodes:
        for b in propagation_graph.nodes:
            if a.layer < b.layer:
                assert layout.positions[a.id][1] < layout.positions[b.id][1]


def test_within_layer_order_follows_input(propagation_graph):
    layout = compute_layout(propagation_graph.nodes, propagation_graph.edges)
    for layer, members in layout.layer_groups.items():
        xs = [layout.positions[n.id][0] for n in members]
        assert xs == sorted(xs)
        assert len(set(xs)) == len(xs)


def test_every_node_positioned_once(propagation_graph):
    layout = compute_layout(propagation_graph.nodes, propagation_graph.edges)
    assert set(layout.positions) == {n.id for n in propagation_graph.nodes}
    assert len(layout.placements) == len(propagation_graph.nodes)


def test_content_fits_canvas(propagation_graph):
    layout = compute_layout(
        propagation_graph.nodes,
        propagation_graph.edges,
        layer_labels=propagation_graph.layer_labels,
        legend=propagation_graph.legend,
    )
    for p in layout.placements:
        assert p.left >= 0
        assert p.left + p.node_width <= layout.width
        assert p.bottom <= layout.height
    for badge in layout.badges():
        assert badge.y + badge.height <= layout.legend_items[0].swatch_y


def test_content_bottom_clears_legend_row(propagation_graph):
    groups = group_layers(propagation_graph.nodes)
    labels = propagation_graph.layer_labels
    canvas = compute_canvas_size(groups, labels, propagation_graph.legend)
    rows = assign_positions(groups, canvas.width, labels)
    assert rows.content_bottom >= max(p.bottom for p in rows.placements)
    limit = canvas.height - BOTTOM_MARGIN - LEGEND_ROW_HEIGHT
    assert rows.content_bottom <= limit


def test_content_bottom_of_empty_graph():
    assert assign_positions({}, canvas_width=240).content_bottom == TOP_MARGIN


def test_rows_with_gapped_layers():
    nodes = [node("top", 0), node("bottom", 5)]
    rows = assign_positions(group_layers(nodes), canvas_width=240)
    assert rows.positions["top"][1] < rows.positions["bottom"][1]
    # Missing layers 1-4 produce no rows: same pitch as adjacent layers
    assert rows.positions["bottom"][1] - rows.positions["top"][1] == 72
