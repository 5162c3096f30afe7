from __future__ import annotations

from pickle import dumps, loads
from typing import (
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
    TypeVar,
)

from spellgraph.algorithms.bfs import breadth_first_search, shortest_path
from spellgraph.graph.base import GraphProtocol, NodeID, OrderedPair, Weight, pairs
from spellgraph.graph.path import Path

EdgeTuple = Tuple[NodeID, NodeID, Weight]

G = TypeVar("G", bound="Graph")


class Graph(GraphProtocol):
    """
    This class implements a minimal directed graph with weighted (or capacious) edges.
    There is at most one edge per ordered pair of nodes; inserting an edge for a pair
    that is already connected replaces its weight.
    The adjacency structure is implemented with Python nested dictionaries:
        {src_node: {dst_node: weight}}
    Dictionaries keep insertion order, so neighbors are always reported in the order
    their edges were first inserted. Updating the weight of an existing edge keeps its
    position; removing and re-inserting an edge moves it to the end.
    An edge with weight exactly zero is never stored: inserting a zero weight removes
    the edge.
    Attributes:
        _succ: dictionary for outgoing adjacencies (successors)
    """

    def __init__(self, edges: Iterable[EdgeTuple] = ()) -> None:
        self._succ: Dict[NodeID, Dict[NodeID, Weight]] = {}
        for src_node, dst_node, weight in edges:
            self.insert_edge(src_node, dst_node, weight)

    def __iter__(self) -> Iterator[NodeID]:
        """
        Making Graph objects iterable by their nodes
        """
        return iter(self._succ)

    def __len__(self) -> int:
        """
        Return the number of nodes as the length of the graph.
        """
        return len(self._succ)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return type(self) is type(other) and self._succ == other._succ

    def __str__(self) -> str:
        lines = []
        for src_node, adjacency in self._succ.items():
            destinations = ",".join(str(dst_node) for dst_node in adjacency)
            lines.append(f"{src_node} -> [{destinations}]")
        return "\n".join(lines)

    def copy(self: G) -> G:
        """
        Make a deep copy of the graph and return it.
        Pickle is used for performance reasons.

        Returns:
            Graph - copy of the graph.
        """
        return loads(dumps(self))

    @property
    def nodes(self) -> Set[NodeID]:
        return set(self._succ)

    def create_node(self, value: NodeID) -> NodeID:
        """
        Ensure a node is present in the graph. If it is present - do nothing.
        Args:
            value: node identifier. Can be any hashable Python object.
        Returns:
            The node itself, for chaining into edge insertion.
        """
        if value not in self._succ:
            self._succ[value] = {}
        return value

    def insert_edge(self, src_node: NodeID, dst_node: NodeID, weight: Weight) -> None:
        """
        Insert an edge from src_node to dst_node, replacing any existing edge between
        them. A zero weight removes the edge instead.
        Missing source and destination nodes are created.
        Args:
            src_node: source node identifier.
            dst_node: destination node identifier.
            weight: edge weight (capacity).
        """
        self.create_node(src_node)
        self.create_node(dst_node)
        if weight == 0:
            self.remove_edge(src_node, dst_node)
        else:
            self._succ[src_node][dst_node] = weight

    def remove_edge(self, src_node: NodeID, dst_node: NodeID) -> None:
        """
        Remove the edge between src_node and dst_node.
        If it doesn't exist, do nothing.
        """
        self._succ.get(src_node, {}).pop(dst_node, None)

    def remove_node(self, node: NodeID) -> None:
        """
        Remove a node and every edge it participates in.
        If the node doesn't exist, do nothing.
        """
        if node not in self._succ:
            return
        del self._succ[node]
        for adjacency in self._succ.values():
            adjacency.pop(node, None)

    def insert_path(self, path: Path, weight: Weight) -> None:
        """
        Insert every edge of the given path with the same weight.
        """
        for edge in path.edges:
            self.insert_edge(edge.a, edge.b, weight)

    def edge_value(self, src_node: NodeID, dst_node: NodeID) -> Optional[Weight]:
        """
        Returns:
            The weight of the edge from src_node to dst_node, or None if the two
            nodes are not connected in that direction.
        """
        return self._succ.get(src_node, {}).get(dst_node)

    def has_edge(self, src_node: NodeID, dst_node: NodeID) -> bool:
        return dst_node in self._succ.get(src_node, {})

    def edges(self) -> Iterator[EdgeTuple]:
        for src_node, adjacency in self._succ.items():
            for dst_node, weight in adjacency.items():
                yield src_node, dst_node, weight

    def edges_from(self, node: NodeID) -> List[EdgeTuple]:
        return [(node, dst, weight) for dst, weight in self._succ.get(node, {}).items()]

    def edges_containing(self, node: NodeID) -> Set[OrderedPair]:
        return {
            OrderedPair(src_node, dst_node)
            for src_node, dst_node, _ in self.edges()
            if node in (src_node, dst_node)
        }

    def neighbors(self, node: NodeID) -> List[NodeID]:
        """
        Returns the destinations of all outgoing edges of a given node.
        """
        return list(self._succ.get(node, {}))

    def get_adj_out(self) -> Dict[NodeID, Dict[NodeID, Weight]]:
        """
        Get a dictionary with outgoing adjacencies: {src_node: {dst_node: weight}}.
        Do not add or remove adjacencies through this dictionary.
        It will break the invariants of the graph object.
        """
        return self._succ

    def shortest_path(self, src_node: NodeID, dst_node: NodeID) -> Optional[Path]:
        return shortest_path(self, src_node, dst_node)

    def breadth_first_search(
        self, src_node: NodeID, dst_node: Optional[NodeID] = None
    ) -> List[NodeID]:
        return breadth_first_search(self, src_node, dst_node)

    def make_path(self, nodes: Iterable[NodeID]) -> Path:
        """
        Build a path from a sequence of nodes, checking that every hop is an edge.
        Raises:
            ValueError: if two consecutive nodes are not connected.
        """
        sequence = tuple(nodes)
        for edge in pairs(sequence):
            if not self.has_edge(edge.a, edge.b):
                raise ValueError(f"No edge from '{edge.a}' to '{edge.b}'.")
        return Path(sequence)

    def map_nodes(self, transform: Callable[[NodeID], NodeID]) -> Graph:
        """
        Returns a Graph with every node replaced by transform(node).
        Edges whose endpoints collide under transform overwrite one another in
        edge order.
        """
        mapped = Graph()
        for node in self._succ:
            mapped.create_node(transform(node))
        for src_node, dst_node, weight in self.edges():
            mapped.insert_edge(transform(src_node), transform(dst_node), weight)
        return mapped

    def reversed(self) -> Graph:
        """
        Returns a Graph with the direction of every edge flipped.
        """
        flipped = Graph()
        for node in self._succ:
            flipped.create_node(node)
        for src_node, dst_node, weight in self.edges():
            flipped.insert_edge(dst_node, src_node, weight)
        return flipped

    def undirected(self: G) -> G:
        """
        Returns a copy with a reversed copy of every edge inserted, in edge order.
        Where both directions already exist, each ends up with the other's weight.
        """
        both = self.copy()
        for src_node, dst_node, weight in list(self.edges()):
            both.insert_edge(dst_node, src_node, weight)
        return both
