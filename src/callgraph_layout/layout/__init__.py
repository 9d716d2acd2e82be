"""Layout engine public API."""

from __future__ import annotations

from callgraph_layout.layout.engine import full_layout, straight_layout
from callgraph_layout.layout.sugiyama import (
    CycleRemovalResult,
    SugiyamaLayout,
    assign_coordinates,
    build_levels,
    count_crossings,
    find_cycle_participants,
    greedy_fas_ordering,
    level_width,
    order_levels,
    rank_vertices,
    ranks_to_levels,
    remove_cycles,
    route_edge,
    route_edges,
)
from callgraph_layout.layout.types import (
    EdgePath,
    LayoutResult,
    LevelNode,
    LevelResult,
    PathCommand,
    Point,
    Rect,
)

__all__ = [
    "CycleRemovalResult",
    "EdgePath",
    "LayoutResult",
    "LevelNode",
    "LevelResult",
    "PathCommand",
    "Point",
    "Rect",
    "SugiyamaLayout",
    "assign_coordinates",
    "build_levels",
    "count_crossings",
    "find_cycle_participants",
    "full_layout",
    "greedy_fas_ordering",
    "level_width",
    "order_levels",
    "rank_vertices",
    "ranks_to_levels",
    "remove_cycles",
    "route_edge",
    "route_edges",
    "straight_layout",
]
