"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET

from conftest import SVG_NS, edge, node, svg_elements, svg_texts

from topolayer import render
from topolayer.layout.engine import compute_layout
from topolayer.render.svg import render_svg
from topolayer.themes import DARK_THEME, LIGHT_THEME


def _render_propagation(graph, theme=DARK_THEME) -> str:
    layout = compute_layout(
        graph.nodes,
        graph.edges,
        layer_labels=graph.layer_labels,
        legend=graph.legend,
    )
    return render_svg(layout, theme)


def test_render_produces_valid_svg(propagation_graph):
    svg = _render_propagation(propagation_graph)
    root = ET.fromstring(svg)
    assert root.tag.endswith("svg")


def test_render_entry_point_resolves_size():
    drawing = render([node("a", 0), node("b", 0), node("c", 0)], [])
    assert drawing.width == 336
    assert drawing.height == 120


def test_render_contains_labels_and_sublabels(propagation_graph):
    texts = svg_texts(_render_propagation(propagation_graph))
    assert "db-02" in texts
    assert "cache-04" in texts
    assert "+540ms" in texts


def test_render_captions_and_edge_label(propagation_graph):
    texts = svg_texts(_render_propagation(propagation_graph))
    assert "uses (x4 connections)" in texts
    assert texts.count("routes_to") == 2  # caption and edge label


def test_render_legend(propagation_graph):
    texts = svg_texts(_render_propagation(propagation_graph))
    for label in ("Source", "+200ms", "+340ms", "+540ms"):
        assert label in texts


def test_render_badge(propagation_graph):
    svg = _render_propagation(propagation_graph)
    assert "CRIT" in svg_texts(svg)
    assert "#dc2626" in svg


def test_one_marker_per_edge_color(propagation_graph):
    svg = _render_propagation(propagation_graph)
    ids = [m.get("id") for m in svg_elements(svg, "marker")]
    assert ids == ["arrow-fbbf24", "arrow-f59e0b", "arrow-ef4444"]
    paths = [p for p in svg_elements(svg, "path") if p.get("marker-end")]
    assert len(paths) == len(propagation_graph.edges)
    assert {p.get("marker-end") for p in paths} == {
        "url(#arrow-fbbf24)",
        "url(#arrow-f59e0b)",
        "url(#arrow-ef4444)",
    }


def test_similar_colors_get_their_own_markers():
    svg = render_svg(
        compute_layout(
            [node("a", 0), node("b", 1), node("c", 1)],
            [edge("a", "b", color="rgb(1,23,4)"), edge("a", "c", color="rgb(12,3,4)")],
        )
    )
    markers = svg_elements(svg, "marker")
    ids = [m.get("id") for m in markers]
    assert len(set(ids)) == 2
    fills = {m.get("id"): m.find(f"{SVG_NS}path").get("fill") for m in markers}
    for p in svg_elements(svg, "path"):
        if p.get("marker-end"):
            marker = p.get("marker-end")[len("url(#"):-1]
            assert fills[marker] == p.get("stroke")


def test_marker_size(propagation_graph):
    svg = _render_propagation(propagation_graph)
    marker = svg_elements(svg, "marker")[0]
    assert float(marker.get("markerWidth")) == 8
    assert float(marker.get("markerHeight")) == 6
    assert marker.get("viewBox") == "0 0 10 6"


def test_glow_node_draws_ring_and_box():
    svg = render_svg(
        compute_layout([node("hot", 0, glow=True), node("cold", 0)], [])
    )
    rects = svg_elements(svg, "rect")
    glowing = [r for r in rects if r.get("filter") == "url(#glow)"]
    assert len(glowing) == 1
    filters = svg_elements(svg, "filter")
    assert [f.get("id") for f in filters] == ["glow"]
    # background + glow ring + two node boxes
    assert len(rects) == 4


def test_no_glow_filter_without_glowing_nodes():
    svg = render_svg(compute_layout([node("a", 0), node("b", 0)], []))
    assert svg_elements(svg, "filter") == []
    assert not any(r.get("filter") for r in svg_elements(svg, "rect"))


def test_dashed_border(propagation_graph):
    svg = _render_propagation(propagation_graph)
    dashed = [r for r in svg_elements(svg, "rect") if r.get("stroke-dasharray")]
    assert len(dashed) == 1
    assert dashed[0].get("stroke-dasharray") == "4,3"


def test_node_background_override(propagation_graph):
    svg = _render_propagation(propagation_graph)
    fills = [r.get("fill") for r in svg_elements(svg, "rect")]
    assert "#ef444415" in fills
    assert DARK_THEME.node_fill in fills


def test_dangling_edge_render_succeeds():
    svg = render_svg(
        compute_layout(
            [node("a", 0), node("b", 1)],
            [edge("a", "b"), edge("a", "ghost")],
        )
    )
    paths = [p for p in svg_elements(svg, "path") if p.get("marker-end")]
    assert len(paths) == 1


def test_render_empty_graph():
    drawing = render([], [])
    svg = drawing.as_svg()
    assert (drawing.width, drawing.height) == (240, 120)
    assert svg_elements(svg, "text") == []


def test_render_background_color(propagation_graph):
    assert DARK_THEME.background_color in _render_propagation(propagation_graph)


def test_render_light_theme(propagation_graph):
    svg = _render_propagation(propagation_graph, LIGHT_THEME)
    assert LIGHT_THEME.label_color in svg
    assert DARK_THEME.background_color not in svg


def test_render_is_deterministic(propagation_graph):
    assert _render_propagation(propagation_graph) == _render_propagation(
        propagation_graph
    )


def test_title_element(propagation_graph):
    layout = compute_layout(propagation_graph.nodes, propagation_graph.edges)
    svg = render_svg(layout, title=propagation_graph.title)
    titles = svg_elements(svg, "title")
    assert [t.text for t in titles] == ["Propagation chain"]


def test_no_title_element_by_default(propagation_graph):
    layout = compute_layout(propagation_graph.nodes, propagation_graph.edges)
    assert svg_elements(render_svg(layout), "title") == []
