"""Path value type: an immutable sequence of nodes joined by edges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from spellgraph.graph.base import NodeID, OrderedPair, pairs


@dataclass(frozen=True)
class Path:
    """Sequence of nodes where each consecutive pair is an edge.

    ``len(path)`` is the number of edges. A single-node path has no edges.

    Attributes:
        nodes: Visited nodes from source to destination.
    """

    nodes: Tuple[NodeID, ...]

    def __post_init__(self) -> None:
        if not self.nodes:
            raise ValueError("A path must contain at least one node.")

    @property
    def source(self) -> NodeID:
        return self.nodes[0]

    @property
    def destination(self) -> NodeID:
        return self.nodes[-1]

    @property
    def edges(self) -> List[OrderedPair]:
        return pairs(self.nodes)

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes) - 1

    def __str__(self) -> str:
        return " -> ".join(str(node) for node in self.nodes)
