"""Graph source parsers."""

from callgraph_layout.parsers.edgelist import EdgeListParser, parse_edge_list

__all__ = [
    "EdgeListParser",
    "parse_edge_list",
]
