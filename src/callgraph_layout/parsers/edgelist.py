"""Edge-list parser.

One statement per line::

    # comment
    main -> parse -> tokenize
    main -> "render svg"
    orphan

``a -> b -> c`` declares the edges ``a -> b`` and ``b -> c``; a line with a
single name declares a vertex. Repeating an edge declares a parallel edge.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from callgraph_layout.ir.graph import Edge, Graph

_COMMENT_RE = re.compile(r"#[^\n]*")
_WHITESPACE_RE = re.compile(r"[ \t]+")
_ARROW = "->"
_NAME_RE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.:$<>-]*?(?=\s|->|#|$)")


@dataclass
class _Cursor:
    """Stateful cursor over a single line."""

    src: str
    lineno: int
    pos: int = 0

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def skip_ws(self) -> None:
        while True:
            m = _WHITESPACE_RE.match(self.src, self.pos)
            if m:
                self.pos = m.end()
                continue
            m = _COMMENT_RE.match(self.src, self.pos)
            if m:
                self.pos = m.end()
                continue
            break

    def consume(self, s: str) -> bool:
        if self.src.startswith(s, self.pos):
            self.pos += len(s)
            return True
        return False

    def error(self, message: str) -> ValueError:
        return ValueError(f"line {self.lineno}, column {self.pos + 1}: {message}")

    def parse_quoted_name(self) -> str:
        end = self.src.find('"', self.pos + 1)
        if end == -1:
            raise self.error("unterminated quoted name")
        name = self.src[self.pos + 1 : end]
        self.pos = end + 1
        if not name:
            raise self.error("empty quoted name")
        return name

    def parse_name(self) -> str:
        self.skip_ws()
        if self.src.startswith('"', self.pos):
            return self.parse_quoted_name()
        m = _NAME_RE.match(self.src, self.pos)
        if not m:
            raise self.error("expected a vertex name")
        self.pos = m.end()
        return m.group(0)


class EdgeListParser:
    """Parses the line-oriented edge-list format into a Graph."""

    def parse(self, src: str) -> Graph:
        graph = Graph()
        counts: dict[tuple[str, str], int] = {}
        for lineno, line in enumerate(src.splitlines(), start=1):
            cur = _Cursor(line, lineno)
            cur.skip_ws()
            if cur.eof():
                continue

            names = [cur.parse_name()]
            cur.skip_ws()
            while cur.consume(_ARROW):
                names.append(cur.parse_name())
                cur.skip_ws()
            if not cur.eof():
                raise cur.error(f"unexpected text {line[cur.pos:]!r}")

            if len(names) == 1:
                graph.add_vertex(names[0])
            for source, target in zip(names, names[1:]):
                key = counts.get((source, target), 0)
                counts[(source, target)] = key + 1
                graph.add_edge(Edge(source, target, key))
        return graph


def parse_edge_list(src: str) -> Graph:
    """Parse edge-list text into a Graph.

    Raises:
        ValueError: If a line is malformed; the message names the line.
    """
    return EdgeListParser().parse(src)
