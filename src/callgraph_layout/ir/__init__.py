"""Intermediate representation: the directed graph container."""

from callgraph_layout.ir.graph import Edge, Graph

__all__ = [
    "Edge",
    "Graph",
]
