"""Errors raised by the layout pipeline.

Every error here is fatal for the layout request that raised it: the pipeline
never returns a partial result.
"""

from __future__ import annotations

from collections.abc import Hashable


class LayoutError(ValueError):
    """Base exception for layout failures."""

    def format_user_message(self) -> str:
        """Format a user-friendly error message."""
        return f"cannot lay out graph: {self}"


class MissingRankError(LayoutError):
    """Raised when an edge references a vertex absent from the rank map."""

    def __init__(self, vertex: Hashable) -> None:
        self.vertex = vertex
        super().__init__(f"vertex {vertex!r} has no rank")


class SidewaysEdgeError(LayoutError):
    """Raised when both endpoints of an edge share a rank."""

    def __init__(self, source: Hashable, target: Hashable) -> None:
        self.source = source
        self.target = target
        super().__init__(f"found sideways edge: {source!r} -> {target!r}")


class MissingLevelNodeError(LayoutError):
    """Raised when an edge endpoint has no corresponding level node."""

    def __init__(self, vertex: Hashable) -> None:
        self.vertex = vertex
        super().__init__(f"missing level node for vertex {vertex!r}")


class MissingRectError(LayoutError):
    """Raised when edge routing meets a chain node without a rectangle."""

    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"failed to find position for level node {node_id}")
