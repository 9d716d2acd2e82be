"""callgraph-layout: layered (Sugiyama-style) layout for directed graphs."""

from callgraph_layout.config import LayoutConfig, RenderConfig
from callgraph_layout.ir.graph import Edge, Graph
from callgraph_layout.layout import full_layout
from callgraph_layout.parsers import parse_edge_list
from callgraph_layout.renderers import render_svg


def layout_edge_list(src: str, curved: bool = True, passes: int = 4, break_cycles: bool = False) -> str:
    """Parse an edge list and render its layered layout to SVG.

    Args:
        src: Edge-list source text (``a -> b`` per line).
        curved: True for smooth curves; False for straight segments.
        passes: Number of crossing-minimization passes.
        break_cycles: Reverse a feedback arc set before ranking.

    Returns:
        The SVG document as a string.

    Raises:
        ValueError: If the input cannot be parsed.
        LayoutError: If the graph cannot be laid out.
    """
    graph = parse_edge_list(src)
    config = LayoutConfig(ordering_passes=passes, curved=curved, break_cycles=break_cycles)
    return render_svg(full_layout(graph, config))


__all__ = [
    "Edge",
    "Graph",
    "LayoutConfig",
    "RenderConfig",
    "full_layout",
    "layout_edge_list",
    "parse_edge_list",
    "render_svg",
]
