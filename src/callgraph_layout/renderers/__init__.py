"""Renderers that turn layout results into drawings."""

from callgraph_layout.renderers.svg import render_svg

__all__ = ["render_svg"]
