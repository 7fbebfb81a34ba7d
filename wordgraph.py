"""WordGraph: a directed graph with positive integer edge weights.

The graph keeps two adjacency maps, one keyed by source and one keyed by
target, so that both outgoing and incoming neighbours can be looked up
without scanning every edge.  Every endpoint of an edge is always a vertex.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Generic, Hashable, Set, TypeVar

L = TypeVar("L", bound=Hashable)


class WordGraph(Generic[L]):
    """Mutable weighted directed graph with labeled vertices.

    Edge weights are always >= 1; an edge of weight zero does not exist.
    """

    def __init__(self) -> None:
        """Initialize an empty WordGraph."""
        self._vertices: Set[L] = set()
        # source -> target -> weight
        self._targets: Dict[L, Dict[L, int]] = defaultdict(dict)
        # target -> source -> weight
        self._sources: Dict[L, Dict[L, int]] = defaultdict(dict)

    def add_vertex(self, vertex: L) -> bool:
        """Add *vertex* to the graph.

        Returns:
            True if the vertex was new, False if it was already present.
        """
        if vertex in self._vertices:
            return False
        self._vertices.add(vertex)
        return True

    def weight(self, source: L, target: L) -> int:
        """Return the weight of ``source -> target``, or 0 if there is no edge."""
        outgoing = self._targets.get(source)
        if not outgoing:
            return 0
        return outgoing.get(target, 0)

    def set_edge(self, source: L, target: L, weight: int) -> int:
        """Set the weight of the edge ``source -> target``.

        Both endpoints are added as vertices.  A positive *weight* creates or
        replaces the edge, a zero weight removes it.

        Args:
            source: Label of the source vertex.
            target: Label of the target vertex.
            weight: New non-negative weight.

        Returns:
            The previous weight of the edge, 0 if it did not exist.

        Raises:
            ValueError: If *weight* is negative.
        """
        if weight < 0:
            raise ValueError(f"edge weight must be non-negative, got {weight}")

        self.add_vertex(source)
        self.add_vertex(target)
        previous = self.weight(source, target)

        if weight > 0:
            self._targets[source][target] = weight
            self._sources[target][source] = weight
        elif previous:
            self._drop_edge(source, target)
        return previous

    def increment_edge(self, source: L, target: L, delta: int = 1) -> int:
        """Add *delta* to the weight of ``source -> target``.

        Returns:
            The previous weight of the edge.

        Raises:
            ValueError: If the resulting weight would be negative.
        """
        current = self.weight(source, target)
        if current + delta < 0:
            raise ValueError(
                f"cannot decrement edge {source!r} -> {target!r} of weight {current} by {-delta}"
            )
        return self.set_edge(source, target, current + delta)

    def remove_vertex(self, vertex: L) -> bool:
        """Remove *vertex* together with every edge touching it.

        Returns:
            True if the vertex existed.
        """
        if vertex not in self._vertices:
            return False
        for target in list(self._targets.get(vertex, {})):
            self._drop_edge(vertex, target)
        for source in list(self._sources.get(vertex, {})):
            self._drop_edge(source, vertex)
        self._vertices.discard(vertex)
        return True

    def _drop_edge(self, source: L, target: L) -> None:
        del self._targets[source][target]
        del self._sources[target][source]
        # keep the maps free of empty entries
        if not self._targets[source]:
            del self._targets[source]
        if not self._sources[target]:
            del self._sources[target]

    def vertices(self) -> Set[L]:
        """Return a copy of the vertex set."""
        return set(self._vertices)

    def targets(self, source: L) -> Dict[L, int]:
        """Return ``{target: weight}`` for every edge leaving *source*.

        Unknown vertices and vertices without outgoing edges give ``{}``.
        """
        return dict(self._targets.get(source, {}))

    def sources(self, target: L) -> Dict[L, int]:
        """Return ``{source: weight}`` for every edge entering *target*."""
        return dict(self._sources.get(target, {}))

    def edge_count(self) -> int:
        return sum(len(outgoing) for outgoing in self._targets.values())

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._vertices

    def __str__(self) -> str:
        lines = []
        for source in sorted(self._targets, key=str):
            for target, weight in sorted(self._targets[source].items(), key=lambda kv: str(kv[0])):
                lines.append(f"{source} -> {target} ({weight})")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"WordGraph(vertices={len(self)}, edges={self.edge_count()})"
