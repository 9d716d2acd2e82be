"""Layout types shared across the pipeline stages and renderers."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

from callgraph_layout.ir.graph import Edge, Graph


@dataclass
class Point:
    """A 2D point in drawing coordinates."""

    x: float
    y: float

    def midpoint(self, other: Point) -> Point:
        return Point(x=(self.x + other.x) / 2, y=(self.y + other.y) / 2)


@dataclass
class Rect:
    """Axis-aligned bounding box assigned to a level node."""

    x: float
    y: float
    width: float
    height: float

    def left(self) -> float:
        return self.x

    def top(self) -> float:
        return self.y

    def right(self) -> float:
        return self.x + self.width

    def bottom(self) -> float:
        return self.y + self.height

    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass
class LevelNode:
    """One occupant of one row: a real vertex or a virtual edge carrier.

    ``parents`` and ``children`` hold arena ids of neighbouring level nodes in
    the rows above and below.
    """

    id: int
    rank: int
    index: int = 0
    vertex: Hashable | None = None
    parents: list[int] = field(default_factory=list)
    children: list[int] = field(default_factory=list)

    @property
    def is_virtual(self) -> bool:
        return self.vertex is None


@dataclass
class LevelResult:
    """Rows of level nodes plus the chain of nodes each edge passes through."""

    # Top-to-bottom rows, each ordered left-to-right.
    levels: list[list[LevelNode]]
    # Arena: nodes[i].id == i
    nodes: list[LevelNode]
    # First and last entries are always real nodes; interior ones are virtual.
    chains: dict[Edge, list[LevelNode]]
    vertex_nodes: dict[Hashable, LevelNode]
    # Rank of levels[0]; 0 unless the rank map holds negative ranks.
    first_rank: int = 0

    def node(self, node_id: int) -> LevelNode:
        return self.nodes[node_id]

    def virtual_count(self) -> int:
        return sum(1 for n in self.nodes if n.is_virtual)

    def row_of(self, node: LevelNode) -> int:
        return node.rank - self.first_rank


@dataclass
class PathCommand:
    """One drawing command of an SVG path: ``M``, ``L`` or ``S``."""

    op: str
    points: list[Point]


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass
class EdgePath:
    """A drawable curve threading through the rectangles of an edge's chain."""

    edge: Edge
    commands: list[PathCommand]

    def to_svg_path(self) -> str:
        parts: list[str] = []
        for cmd in self.commands:
            parts.append(cmd.op)
            for p in cmd.points:
                parts.append(_fmt(p.x))
                parts.append(_fmt(p.y))
        return " ".join(parts)


@dataclass
class LayoutResult:
    """Self-contained layout output: everything renderers need."""

    graph: Graph
    ranks: dict[Hashable, int]
    levels: LevelResult
    rects: dict[int, Rect]
    paths: dict[Edge, EdgePath]

    def rect_for(self, node: LevelNode) -> Rect:
        return self.rects[node.id]

    def width(self) -> float:
        return max((r.right() for r in self.rects.values()), default=0.0)

    def height(self) -> float:
        return max((r.bottom() for r in self.rects.values()), default=0.0)
