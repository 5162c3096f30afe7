"""Shared graph vocabulary: node/edge aliases, pairs and the graph interface.

Concrete graphs (`Graph`, `UnweightedGraph`, `FlowNetwork`) implement
`GraphProtocol`. Traversal algorithms are free functions in
`spellgraph.algorithms.bfs` that only rely on `neighbors`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterable, List, NamedTuple, Set, Union

NodeID = Hashable
Weight = Union[int, float]


class OrderedPair(NamedTuple):
    """Directed edge ``a -> b``."""

    a: Any
    b: Any

    @property
    def swapped(self) -> OrderedPair:
        """The same pair with its direction reversed."""
        return OrderedPair(self.b, self.a)


class UnorderedPair:
    """Undirected edge; ``UnorderedPair(a, b) == UnorderedPair(b, a)``."""

    __slots__ = ("a", "b")

    def __init__(self, a: Any, b: Any) -> None:
        self.a = a
        self.b = b

    @property
    def swapped(self) -> UnorderedPair:
        return UnorderedPair(self.b, self.a)

    def __iter__(self):
        yield self.a
        yield self.b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnorderedPair):
            return NotImplemented
        return (self.a == other.a and self.b == other.b) or (
            self.a == other.b and self.b == other.a
        )

    def __hash__(self) -> int:
        return hash(frozenset((self.a, self.b)))

    def __repr__(self) -> str:
        return f"UnorderedPair({self.a!r}, {self.b!r})"


Edge = Union[OrderedPair, UnorderedPair]


class GraphProtocol(ABC):
    """Interface for graph-like types.

    Implementations expose their node set and outgoing adjacency; everything
    else (containment, traversal) is derived from those.
    """

    @property
    @abstractmethod
    def nodes(self) -> Set[NodeID]:
        """All nodes contained in the graph."""

    @abstractmethod
    def neighbors(self, node: NodeID) -> List[NodeID]:
        """Nodes reachable from ``node`` over a single edge, in a stable order."""

    @abstractmethod
    def edges_containing(self, node: NodeID) -> Set[Edge]:
        """Edges having ``node`` as either endpoint."""

    @abstractmethod
    def remove_edge(self, source: NodeID, destination: NodeID) -> None:
        """Remove the edge from ``source`` to ``destination`` if present."""

    def contains(self, node: NodeID) -> bool:
        return node in self.nodes

    def __contains__(self, node: NodeID) -> bool:
        return self.contains(node)


def pairs(nodes: Iterable[NodeID]) -> List[OrderedPair]:
    """Consecutive pairs of a node sequence: ``[a, b, c] -> [(a, b), (b, c)]``."""
    sequence = list(nodes)
    return [OrderedPair(a, b) for a, b in zip(sequence, sequence[1:])]
