"""Centralized configuration for callgraph-layout."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LayoutConfig:
    """Geometry and heuristics for the layout pipeline."""

    node_width: float = 115.0
    node_height: float = 25.0
    vertical_spacing: float = 45.0
    horizontal_spacing: float = 25.0
    # Horizontal room reserved for a virtual node.
    virtual_width: float = 25.0
    ordering_passes: int = 4
    curved: bool = True
    break_cycles: bool = False


@dataclass
class RenderConfig:
    """Configuration for the SVG renderer."""

    padding: float = 20.0
    node_fill: str = "#00FF00"
    label_color: str = "#FF0000"
    edge_stroke: str = "#000000"
    edge_width: float = 2.0
    font_size: float = 12.0
    font_family: str = "sans-serif"
