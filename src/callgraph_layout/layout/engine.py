"""Layout engine convenience functions."""

from __future__ import annotations

from dataclasses import replace

from callgraph_layout.config import LayoutConfig
from callgraph_layout.ir.graph import Graph
from callgraph_layout.layout.sugiyama import SugiyamaLayout
from callgraph_layout.layout.types import LayoutResult


def full_layout(graph: Graph, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the full layout pipeline."""
    return SugiyamaLayout(config).layout(graph)


def straight_layout(graph: Graph, config: LayoutConfig | None = None) -> LayoutResult:
    """Run the pipeline with straight edge segments instead of splines."""
    return SugiyamaLayout(replace(config or LayoutConfig(), curved=False)).layout(graph)
