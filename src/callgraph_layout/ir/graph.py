"""Graph IR: a generic directed multigraph backed by networkx.

This module owns the graph container that feeds the layout pipeline. Vertices
are opaque hashable values supplied by the caller; the container only relies
on their identity. Edges are value objects, so inserting an equal edge twice
is a no-op, while parallel edges between the same pair are kept apart by
their ``key``.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass

import networkx as nx


@dataclass(frozen=True)
class Edge:
    """A directed edge ``source -> target``."""

    source: Hashable
    target: Hashable
    key: int = 0

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def reversed(self) -> Edge:
        return Edge(source=self.target, target=self.source, key=self.key)


class Graph:
    """Insert-only directed multigraph.

    Wraps a networkx MultiDiGraph; the entering/leaving indices are the
    MultiDiGraph's own predecessor/successor adjacency, so they always reflect
    exactly the inserted edges.
    """

    def __init__(self) -> None:
        self.digraph: nx.MultiDiGraph = nx.MultiDiGraph()

    @classmethod
    def from_edges(
        cls,
        pairs: Iterable[tuple[Hashable, Hashable]],
        vertices: Iterable[Hashable] = (),
    ) -> Graph:
        """Build a Graph from ``(source, target)`` pairs.

        A pair that repeats becomes a parallel edge with the next free key.
        """
        graph = cls()
        for v in vertices:
            graph.add_vertex(v)
        seen: dict[tuple[Hashable, Hashable], int] = {}
        for source, target in pairs:
            key = seen.get((source, target), 0)
            seen[(source, target)] = key + 1
            graph.add_edge(Edge(source, target, key))
        return graph

    def add_vertex(self, v: Hashable) -> None:
        if v not in self.digraph:
            self.digraph.add_node(v)

    def add_edge(self, e: Edge) -> None:
        self.add_vertex(e.source)
        self.add_vertex(e.target)
        if self.digraph.has_edge(e.source, e.target, key=e.key):
            return
        self.digraph.add_edge(e.source, e.target, key=e.key, edge=e)

    def vertices(self) -> list[Hashable]:
        return list(self.digraph.nodes)

    def edges(self) -> list[Edge]:
        return [e for _, _, e in self.digraph.edges(data="edge")]

    def edges_entering(self, v: Hashable) -> list[Edge]:
        if v not in self.digraph:
            return []
        return [e for _, _, e in self.digraph.in_edges(v, data="edge")]

    def edges_leaving(self, v: Hashable) -> list[Edge]:
        if v not in self.digraph:
            return []
        return [e for _, _, e in self.digraph.out_edges(v, data="edge")]

    def has_vertex(self, v: Hashable) -> bool:
        return v in self.digraph

    def has_edge(self, e: Edge) -> bool:
        return self.digraph.has_edge(e.source, e.target, key=e.key)

    def vertex_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def find_cycle(self) -> list[Edge] | None:
        """Return the edges of one cycle, or None if the graph is acyclic."""
        try:
            cycle = nx.find_cycle(self.digraph)
        except nx.NetworkXNoCycle:
            return None
        return [self.digraph.edges[u, v, k]["edge"] for u, v, k in cycle]
