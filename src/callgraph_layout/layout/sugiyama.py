"""Sugiyama-style layered graph layout engine.

Phases:
  1. Rank assignment (longest path from sources, optional greedy-FAS cycle breaking)
  2. Level construction (virtual node insertion, per-edge node chains)
  3. Crossing minimization (barycenter sweeps)
  4. Coordinate assignment
  5. Edge routing (through-point splines or straight segments)
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass, field

import networkx as nx

from callgraph_layout.config import LayoutConfig
from callgraph_layout.exceptions import MissingLevelNodeError, MissingRankError, MissingRectError, SidewaysEdgeError
from callgraph_layout.ir.graph import Edge, Graph
from callgraph_layout.layout.types import EdgePath, LayoutResult, LevelNode, LevelResult, PathCommand, Point, Rect

logger = logging.getLogger(__name__)


# ─── Cycle Removal (Greedy-FAS) ─────────────────────────────────────────────


@dataclass
class CycleRemovalResult:
    dag: Graph
    reversed_edges: set[Edge] = field(default_factory=set)


def greedy_fas_ordering(digraph: nx.MultiDiGraph) -> list[Hashable]:
    """Compute a vertex ordering using the greedy-FAS heuristic."""
    # dict keeps insertion order so ties resolve the same way on every run
    active: dict[Hashable, None] = dict.fromkeys(digraph.nodes)
    out_deg: dict[Hashable, int] = {}
    in_deg: dict[Hashable, int] = {}
    for node in digraph.nodes:
        out_deg[node] = digraph.out_degree(node)
        in_deg[node] = digraph.in_degree(node)

    s1: list[Hashable] = []
    s2: list[Hashable] = []

    while active:
        changed = True
        while changed:
            changed = False
            sinks = [n for n in active if out_deg[n] == 0]
            if sinks:
                changed = True
                for sink in sinks:
                    del active[sink]
                    s2.append(sink)
                    for pred, _ in digraph.in_edges(sink):
                        if pred in active:
                            out_deg[pred] -= 1

        changed = True
        while changed:
            changed = False
            sources = [n for n in active if in_deg[n] == 0]
            if sources:
                changed = True
                for source in sources:
                    del active[source]
                    s1.append(source)
                    for _, succ in digraph.out_edges(source):
                        if succ in active:
                            in_deg[succ] -= 1

        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            del active[best]
            s1.append(best)
            for _, succ in digraph.out_edges(best):
                if succ in active:
                    in_deg[succ] -= 1
            for pred, _ in digraph.in_edges(best):
                if pred in active:
                    out_deg[pred] -= 1

    s2.reverse()
    s1.extend(s2)
    return s1


def remove_cycles(graph: Graph) -> CycleRemovalResult:
    """Reverse a feedback arc set so the result is acyclic.

    Self-loops are dropped from the DAG and reported as reversed. A reversed
    edge that duplicates an existing forward edge collapses into it, which is
    harmless for ranking.
    """
    dag = Graph()
    for v in graph.vertices():
        dag.add_vertex(v)
    if graph.vertex_count() == 0:
        return CycleRemovalResult(dag=dag)

    ordering = greedy_fas_ordering(graph.digraph)
    position: dict[Hashable, int] = {v: pos for pos, v in enumerate(ordering)}

    reversed_edges: set[Edge] = set()
    for edge in graph.edges():
        if edge.is_self_loop:
            reversed_edges.add(edge)
        elif position[edge.source] > position[edge.target]:
            reversed_edges.add(edge)
            dag.add_edge(edge.reversed())
        else:
            dag.add_edge(edge)

    return CycleRemovalResult(dag=dag, reversed_edges=reversed_edges)


# ─── Rank Assignment ─────────────────────────────────────────────────────────


@dataclass
class _RankFrame:
    vertex: Hashable
    entering: Iterator[Edge]
    best: int = -1


def _longest_path_ranks(graph: Graph) -> tuple[dict[Hashable, int], set[Hashable]]:
    """Depth-first longest-path ranking on an explicit stack.

    A predecessor that is on the stack but not yet ranked closes a cycle; it
    contributes -1, which never raises ``best``. Ranks are stored in DFS
    finish order.
    """
    ranks: dict[Hashable, int] = {}
    on_stack: set[Hashable] = set()
    cycle_hits: set[Hashable] = set()

    for root in graph.vertices():
        if root in ranks:
            continue
        on_stack.add(root)
        stack = [_RankFrame(root, iter(graph.edges_entering(root)))]
        while stack:
            frame = stack[-1]
            descended = False
            for edge in frame.entering:
                parent = edge.source
                if parent in ranks:
                    frame.best = max(frame.best, ranks[parent])
                elif parent in on_stack:
                    cycle_hits.add(parent)
                else:
                    on_stack.add(parent)
                    stack.append(_RankFrame(parent, iter(graph.edges_entering(parent))))
                    descended = True
                    break
            if descended:
                continue

            stack.pop()
            on_stack.discard(frame.vertex)
            ranks[frame.vertex] = frame.best + 1
            if stack:
                stack[-1].best = max(stack[-1].best, ranks[frame.vertex])

    return ranks, cycle_hits


def find_cycle_participants(graph: Graph) -> set[Hashable]:
    """Vertices that ranking revisits before they are ranked."""
    _, cycle_hits = _longest_path_ranks(graph)
    return cycle_hits


def rank_vertices(graph: Graph, break_cycles: bool = False) -> dict[Hashable, int]:
    """Assign every vertex the length of the longest path reaching it from a source.

    With ``break_cycles`` the ranking runs on a greedy-FAS acyclic copy of the
    graph; otherwise cycle participants fall back to a -1 contribution.
    """
    source = graph
    if break_cycles:
        removal = remove_cycles(graph)
        source = removal.dag
        logger.debug(f"Reversed {len(removal.reversed_edges)} edge(s) to break cycles")

    ranks, cycle_hits = _longest_path_ranks(source)
    if cycle_hits:
        logger.warning(
            f"Rank assignment found {len(cycle_hits)} cycle participant(s); "
            "their rank contribution falls back to -1"
        )
    logger.debug(f"Ranked {len(ranks)} vertices into {max(ranks.values(), default=-1) + 1} rows")
    return ranks


# ─── Level Construction ──────────────────────────────────────────────────────


def _reindex(level: list[LevelNode]) -> None:
    for i, node in enumerate(level):
        node.index = i


def build_levels(ranks: dict[Hashable, int], edges: Iterable[Edge]) -> LevelResult:
    """Fill rows with real nodes and the virtual nodes multi-row edges pass through."""
    nodes: list[LevelNode] = []
    rank_to_level: dict[int, list[LevelNode]] = {}
    vertex_nodes: dict[Hashable, LevelNode] = {}
    chains: dict[Edge, list[LevelNode]] = {}

    def new_node(rank: int, vertex: Hashable | None = None) -> LevelNode:
        node = LevelNode(id=len(nodes), rank=rank, vertex=vertex)
        nodes.append(node)
        rank_to_level.setdefault(rank, []).append(node)
        return node

    min_rank = 0
    max_rank = 0
    for vertex, rank in ranks.items():
        min_rank = min(min_rank, rank)
        max_rank = max(max_rank, rank)
        vertex_nodes[vertex] = new_node(rank, vertex)

    def chain_for(source: Hashable, target: Hashable) -> list[LevelNode]:
        if source == target:
            node = vertex_nodes.get(source)
            if node is None:
                raise MissingLevelNodeError(source)
            return [node]

        if source not in ranks:
            raise MissingRankError(source)
        if target not in ranks:
            raise MissingRankError(target)
        from_rank = ranks[source]
        to_rank = ranks[target]

        if from_rank == to_rank:
            raise SidewaysEdgeError(source, target)
        if to_rank < from_rank:
            # Back edge: reserve space top-down, then flip so the chain runs source -> target
            chain = chain_for(target, source)
            chain.reverse()
            return chain

        from_node = vertex_nodes.get(source)
        if from_node is None:
            raise MissingLevelNodeError(source)
        to_node = vertex_nodes.get(target)
        if to_node is None:
            raise MissingLevelNodeError(target)

        chain = [from_node]
        parent = from_node
        for rank in range(from_rank + 1, to_rank):
            node = new_node(rank)
            node.parents.append(parent.id)
            parent.children.append(node.id)
            parent = node
            chain.append(node)
        to_node.parents.append(parent.id)
        parent.children.append(to_node.id)
        chain.append(to_node)
        return chain

    for edge in edges:
        chains[edge] = chain_for(edge.source, edge.target)

    levels: list[list[LevelNode]] = []
    if ranks:
        for rank in range(min_rank, max_rank + 1):
            level = rank_to_level.get(rank, [])
            _reindex(level)
            levels.append(level)

    result = LevelResult(levels=levels, nodes=nodes, chains=chains, vertex_nodes=vertex_nodes, first_rank=min_rank)
    logger.debug(f"Built {len(levels)} rows with {result.virtual_count()} virtual node(s)")
    return result


# ─── Crossing Minimization ───────────────────────────────────────────────────


def _mean_index(node: LevelNode, neighbour_ids: list[int], nodes: list[LevelNode]) -> float:
    # No neighbours on this side: hold the current position.
    if not neighbour_ids:
        return float(node.index)
    return sum(nodes[i].index for i in neighbour_ids) / len(neighbour_ids)


def order_levels(result: LevelResult, passes: int = 4) -> None:
    """Reorder each row in place to reduce crossings.

    Each pass sorts rows top-to-bottom by mean parent index, then
    bottom-to-top by mean child index. Sorts are stable, so ties keep the
    previous pass's order.
    """
    nodes = result.nodes
    for _pass in range(passes):
        for level in result.levels:
            level.sort(key=lambda n: _mean_index(n, n.parents, nodes))
            _reindex(level)
        for level in reversed(result.levels):
            level.sort(key=lambda n: _mean_index(n, n.children, nodes))
            _reindex(level)


def count_crossings(result: LevelResult) -> int:
    """Count pairwise crossings of layout links between adjacent rows."""
    total = 0
    for level in result.levels:
        links: list[tuple[int, int]] = []
        for node in level:
            for child_id in node.children:
                links.append((node.index, result.nodes[child_id].index))
        for i in range(len(links)):
            for j in range(i + 1, len(links)):
                li, lj = links[i], links[j]
                if (li[0] < lj[0] and li[1] > lj[1]) or (li[0] > lj[0] and li[1] < lj[1]):
                    total += 1
    return total


def ranks_to_levels(ranks: dict[Hashable, int], edges: Iterable[Edge], passes: int = 4) -> LevelResult:
    """Build rows from ranks and edges, then order them to minimise crossings."""
    result = build_levels(ranks, edges)
    if logger.isEnabledFor(logging.DEBUG):
        before = count_crossings(result)
        order_levels(result, passes)
        logger.debug(f"Crossings {before} -> {count_crossings(result)} after {passes} ordering pass(es)")
    else:
        order_levels(result, passes)
    return result


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def _node_width(node: LevelNode, config: LayoutConfig) -> float:
    return config.virtual_width if node.is_virtual else config.node_width


def level_width(level: list[LevelNode], config: LayoutConfig) -> float:
    """Total horizontal extent of a row, spacing included."""
    if not level:
        return 0.0
    occupied = sum(_node_width(n, config) for n in level)
    return occupied + (len(level) - 1) * config.horizontal_spacing


def assign_coordinates(levels: list[list[LevelNode]], config: LayoutConfig | None = None) -> dict[int, Rect]:
    """Assign a bounding rectangle to every level node, keyed by node id.

    Each row is centered under the widest row.
    """
    config = config or LayoutConfig()
    rects: dict[int, Rect] = {}

    total_width = max((level_width(level, config) for level in levels), default=0.0)

    y = 0.0
    for level in levels:
        x = (total_width - level_width(level, config)) / 2
        for node in level:
            if node.is_virtual:
                rects[node.id] = Rect(x=x + config.virtual_width / 2, y=y + config.node_height / 2, width=0.0, height=0.0)
            else:
                rects[node.id] = Rect(x=x, y=y, width=config.node_width, height=config.node_height)
            x += _node_width(node, config) + config.horizontal_spacing
        y += config.node_height + config.vertical_spacing

    return rects


# ─── Edge Routing ────────────────────────────────────────────────────────────


def _rect_for(rects: dict[int, Rect], node: LevelNode) -> Rect:
    rect = rects.get(node.id)
    if rect is None:
        raise MissingRectError(node.id)
    return rect


def _segment_anchors(from_rect: Rect, to_rect: Rect) -> tuple[Point, Point]:
    """Exit/entry points on the vertically nearer faces of two rectangles."""
    from_anchor = Point(x=from_rect.center_x(), y=from_rect.top())
    to_anchor = Point(x=to_rect.center_x(), y=to_rect.top())
    if from_rect.top() < to_rect.top():
        from_anchor.y = from_rect.bottom()
    else:
        to_anchor.y = to_rect.bottom()
    return from_anchor, to_anchor


def route_edge(edge: Edge, chain: list[LevelNode], rects: dict[int, Rect], curved: bool = True) -> EdgePath:
    """Convert one edge's node chain into path commands."""
    first = _rect_for(rects, chain[0])
    if len(chain) == 1:
        return EdgePath(edge=edge, commands=[PathCommand("M", [Point(x=first.center_x(), y=first.bottom())])])

    commands: list[PathCommand] = []
    for from_node, to_node in zip(chain, chain[1:]):
        start, end = _segment_anchors(_rect_for(rects, from_node), _rect_for(rects, to_node))
        if not commands:
            commands.append(PathCommand("M", [start]))
        if curved:
            commands.append(PathCommand("S", [start.midpoint(end), end]))
        else:
            commands.append(PathCommand("L", [end]))
    return EdgePath(edge=edge, commands=commands)


def route_edges(
    chains: dict[Edge, list[LevelNode]],
    rects: dict[int, Rect],
    curved: bool = True,
) -> dict[Edge, EdgePath]:
    """Route every edge through the rectangles of its chain."""
    paths = {edge: route_edge(edge, chain, rects, curved) for edge, chain in chains.items()}
    logger.debug(f"Routed {len(paths)} edge path(s)")
    return paths


# ─── SugiyamaLayout Engine ───────────────────────────────────────────────────


class SugiyamaLayout:
    """Sugiyama layered layout engine."""

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def layout(self, graph: Graph) -> LayoutResult:
        cfg = self.config
        ranks = rank_vertices(graph, break_cycles=cfg.break_cycles)
        levels = ranks_to_levels(ranks, graph.edges(), passes=cfg.ordering_passes)
        rects = assign_coordinates(levels.levels, cfg)
        paths = route_edges(levels.chains, rects, curved=cfg.curved)
        return LayoutResult(graph=graph, ranks=ranks, levels=levels, rects=rects, paths=paths)
