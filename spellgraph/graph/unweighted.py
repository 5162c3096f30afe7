"""Unweighted graph in directed and undirected variants."""

from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from spellgraph.algorithms.bfs import breadth_first_search, shortest_path
from spellgraph.graph.base import (
    Edge,
    GraphProtocol,
    NodeID,
    OrderedPair,
    UnorderedPair,
)
from spellgraph.graph.path import Path


class UnweightedGraph(GraphProtocol):
    """Set-of-edges graph with no weights.

    The ``directed`` flag selects the edge type: `OrderedPair` for directed
    graphs, `UnorderedPair` for undirected ones. In the undirected variant
    every edge is traversable both ways.

    Attributes:
        directed: Whether edges carry a direction.
    """

    def __init__(
        self,
        nodes: Iterable[NodeID] = (),
        edges: Iterable[Tuple[NodeID, NodeID]] = (),
        directed: bool = True,
    ) -> None:
        self.directed = directed
        self._nodes: List[NodeID] = []
        self._node_set: Set[NodeID] = set()
        self._edges: Set[Edge] = set()
        for node in nodes:
            self.insert_node(node)
        for src_node, dst_node in edges:
            self.insert_edge(src_node, dst_node)

    def _edge(self, src_node: NodeID, dst_node: NodeID) -> Edge:
        if self.directed:
            return OrderedPair(src_node, dst_node)
        return UnorderedPair(src_node, dst_node)

    @property
    def nodes(self) -> Set[NodeID]:
        return set(self._node_set)

    @property
    def edges(self) -> Set[Edge]:
        return set(self._edges)

    def insert_node(self, node: NodeID) -> None:
        if node not in self._node_set:
            self._node_set.add(node)
            self._nodes.append(node)

    def insert_edge(self, src_node: NodeID, dst_node: NodeID) -> None:
        self.insert_node(src_node)
        self.insert_node(dst_node)
        self._edges.add(self._edge(src_node, dst_node))

    def remove_edge(self, src_node: NodeID, dst_node: NodeID) -> None:
        self._edges.discard(self._edge(src_node, dst_node))

    def contains_edge(self, src_node: NodeID, dst_node: NodeID) -> bool:
        return self._edge(src_node, dst_node) in self._edges

    def neighbors(self, node: NodeID) -> List[NodeID]:
        """Adjacent nodes, reported in node insertion order."""
        return [other for other in self._nodes if self.contains_edge(node, other)]

    def edges_containing(self, node: NodeID) -> Set[Edge]:
        return {edge for edge in self._edges if node in (edge.a, edge.b)}

    def breadth_first_search(
        self, src_node: NodeID, dst_node: Optional[NodeID] = None
    ) -> List[NodeID]:
        return breadth_first_search(self, src_node, dst_node)

    def shortest_path(self, src_node: NodeID, dst_node: NodeID) -> Optional[Path]:
        return shortest_path(self, src_node, dst_node)
