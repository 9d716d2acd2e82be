"""SVG renderer for layout results, using drawsvg."""

from __future__ import annotations

import drawsvg as draw

from callgraph_layout.config import RenderConfig
from callgraph_layout.layout.types import LayoutResult


def _arrow_marker(config: RenderConfig) -> draw.Marker:
    arrow = draw.Marker(-0.1, -0.51, 0.9, 0.5, scale=4, orient="auto")
    arrow.append(draw.Lines(-0.1, 0.5, -0.1, -0.5, 0.9, 0, fill=config.edge_stroke, close=True))
    return arrow


def render_svg(result: LayoutResult, config: RenderConfig | None = None) -> str:
    """Render a layout result to an SVG string.

    Real nodes become labelled rectangles; every edge becomes one path.
    Virtual nodes are not drawn.
    """
    config = config or RenderConfig()
    pad = config.padding
    svg_width = result.width() + pad * 2
    svg_height = result.height() + pad * 2

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill="white"))

    content = draw.Group(transform=f"translate({pad},{pad})")
    _render_nodes(content, result, config)
    _render_edges(content, result, config)
    d.append(content)

    return d.as_svg()


def _render_nodes(g: draw.Group, result: LayoutResult, config: RenderConfig) -> None:
    for level in result.levels.levels:
        for node in level:
            if node.is_virtual:
                continue
            rect = result.rect_for(node)
            g.append(draw.Rectangle(rect.left(), rect.top(), rect.width, rect.height, fill=config.node_fill))
            g.append(draw.Text(
                str(node.vertex),
                config.font_size,
                rect.left(), rect.top(),
                fill=config.label_color,
                font_family=config.font_family,
                dominant_baseline="hanging",
            ))


def _render_edges(g: draw.Group, result: LayoutResult, config: RenderConfig) -> None:
    arrow = _arrow_marker(config)
    for edge in result.graph.edges():
        edge_path = result.paths.get(edge)
        if edge_path is None:
            continue
        extra = {}
        # A self-loop path is a bare move and has no direction to mark.
        if len(edge_path.commands) > 1:
            extra["marker_end"] = arrow
        g.append(draw.Path(
            d=edge_path.to_svg_path(),
            stroke=config.edge_stroke,
            stroke_width=config.edge_width,
            fill="none",
            **extra,
        ))
