"""Graph of references between variables, with cycle detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class DependencyEdge:
    """``source`` refers to ``target``; ``span`` is an optional (line, column)."""

    source: str
    target: str
    span: Optional[tuple] = None


class DependencyGraph:
    """Directed graph of which variable refers to which."""

    def __init__(self) -> None:
        self._edges: list = []
        self._nodes: dict = {}

    def add_edge(self, source: str, target: str, span: Optional[tuple] = None) -> None:
        edge = DependencyEdge(source, target, span)
        self._edges.append(edge)
        self._nodes.setdefault(source, []).append(edge)

    def detect_cycle(self, start: str) -> list:
        """Return the path from ``start`` into a cycle, or an empty list if none is reachable."""
        in_path: dict = {}
        path: list = []

        def enter(node: str) -> Iterator[DependencyEdge]:
            in_path[node] = True
            path.append(node)
            return iter(self._nodes.get(node, ()))

        stack = [enter(start)]
        while stack:
            for edge in stack[-1]:
                state = in_path.get(edge.target)
                if state is True:
                    return list(path)
                if state is None:
                    stack.append(enter(edge.target))
                    break
            else:
                stack.pop()
                in_path[path.pop()] = False
        return []

    def get_dependencies(self, key: str) -> list:
        return [edge.target for edge in self._nodes.get(key, ())]

    def clear(self) -> None:
        self._edges.clear()
        self._nodes.clear()