"""Tests for callgraph_layout.renderers.svg — SVG output of layout results."""

from __future__ import annotations

from callgraph_layout import layout_edge_list
from callgraph_layout.config import RenderConfig
from callgraph_layout.ir.graph import Graph
from callgraph_layout.layout import full_layout, straight_layout
from callgraph_layout.renderers import render_svg


def _layout(*pairs: tuple[str, str]):
    return full_layout(Graph.from_edges(pairs))


class TestRenderSvg:
    def test_is_svg_document(self):
        svg = render_svg(_layout(("A", "B")))
        assert "<svg" in svg
        assert svg.rstrip().endswith("</svg>")

    def test_one_path_per_edge(self):
        result = _layout(("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"))
        svg = render_svg(result)
        for edge_path in result.paths.values():
            assert f'd="{edge_path.to_svg_path()}"' in svg

    def test_one_rect_per_real_node(self):
        """Background plus one rectangle per vertex; virtual nodes are not drawn."""
        result = _layout(("A", "B"), ("B", "C"), ("A", "C"))
        assert result.levels.virtual_count() == 1
        svg = render_svg(result)
        assert svg.count("<rect") == 1 + 3

    def test_labels_rendered(self):
        svg = render_svg(_layout(("main", "helper")))
        assert ">main</text>" in svg
        assert ">helper</text>" in svg

    def test_arrowheads_on_edges(self):
        svg = render_svg(_layout(("A", "B")))
        assert "<marker" in svg
        assert "marker-end" in svg

    def test_self_loop_has_no_arrowhead(self):
        svg = render_svg(_layout(("A", "A")))
        assert 'd="M 57.5 25"' in svg
        assert "marker-end" not in svg

    def test_straight_paths(self):
        result = straight_layout(Graph.from_edges([("A", "B")]))
        svg = render_svg(result)
        assert 'd="M 57.5 25 L 57.5 70"' in svg

    def test_colors_from_config(self):
        config = RenderConfig(node_fill="#abcdef", edge_stroke="#123456")
        svg = render_svg(_layout(("A", "B")), config)
        assert "#abcdef" in svg
        assert "#123456" in svg

    def test_empty_layout(self):
        svg = render_svg(full_layout(Graph()))
        assert "<svg" in svg
        assert svg.count("<rect") == 1


class TestLayoutEdgeList:
    def test_end_to_end(self):
        svg = layout_edge_list("a -> b -> c\na -> c\n")
        assert ">a</text>" in svg
        assert 'd="M 82.5 25 S 117.5 53.75 152.5 82.5 S 117.5 111.25 82.5 140"' in svg

    def test_straight_option(self):
        svg = layout_edge_list("a -> b\n", curved=False)
        assert 'd="M 57.5 25 L 57.5 70"' in svg
