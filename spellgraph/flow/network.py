"""Flow network: a weighted directed graph with a source and a sink.

Edge weights are remaining capacities. Pushing flow along an edge lowers its
weight and raises the weight of the reverse ("back") edge by the same amount,
so the network doubles as its own residual network while max-flow runs.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Set, Tuple, Union

from spellgraph.algorithms import max_flow
from spellgraph.graph.base import NodeID, Weight, pairs
from spellgraph.graph.digraph import EdgeTuple, Graph
from spellgraph.graph.path import Path
from spellgraph.graph.scheme import GraphScheme, WeightedGraphScheme


class FlowNetwork(Graph):
    """Directed graph with capacities, a ``source`` and a ``sink``.

    Source and sink are always part of the node universe. Mutating methods
    act in place; use `copy` (or the copying variants such as `masked`) to
    keep the original.

    Args:
        source: Node that emits flow.
        sink: Node that absorbs flow.
        nodes: Additional nodes.
        edges: Initial ``(src, dst, capacity)`` edges.

    Raises:
        ValueError: If ``source == sink``.
    """

    def __init__(
        self,
        source: NodeID,
        sink: NodeID,
        nodes: Iterable[NodeID] = (),
        edges: Iterable[EdgeTuple] = (),
    ) -> None:
        if source == sink:
            raise ValueError(f"Source and sink must differ, both are '{source}'.")
        super().__init__()
        self.source = source
        self.sink = sink
        self.create_node(source)
        self.create_node(sink)
        for node in nodes:
            self.create_node(node)
        for src_node, dst_node, weight in edges:
            self.insert_edge(src_node, dst_node, weight)

    @classmethod
    def from_graph(cls, graph: Graph, source: NodeID, sink: NodeID) -> FlowNetwork:
        """Create a FlowNetwork with the nodes and edges of ``graph``."""
        return cls(source, sink, nodes=graph, edges=graph.edges())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlowNetwork):
            return NotImplemented
        return (
            self.source == other.source
            and self.sink == other.sink
            and self.get_adj_out() == other.get_adj_out()
        )

    def insert_edge(self, src_node: NodeID, dst_node: NodeID, weight: Weight) -> None:
        """Insert or replace an edge; a zero weight removes it.

        Raises:
            ValueError: If ``weight`` is negative.
        """
        if weight < 0:
            raise ValueError(
                f"Capacity of edge '{src_node}' -> '{dst_node}' must be non-negative, "
                f"got {weight}."
            )
        super().insert_edge(src_node, dst_node, weight)

    @property
    def internal_nodes(self) -> List[NodeID]:
        """Nodes that are neither the source nor the sink, in insertion order."""
        return [node for node in self if node != self.source and node != self.sink]

    def contains(self, node: NodeID) -> bool:
        return node == self.source or node == self.sink or super().contains(node)

    #
    # Masking
    #
    def mask(self, scheme: Union[GraphScheme, WeightedGraphScheme]) -> None:
        """Specialize the network in place with a scheme.

        An unweighted scheme removes every edge it does not contain. A
        weighted scheme multiplies each edge weight by the scheme's weight for
        that edge and removes the edges it has no weight for (or for which the
        product is zero). Every product is checked before any edge changes.

        Raises:
            TypeError: If ``scheme`` is not a graph scheme.
            ValueError: If a product is negative; the network is left unchanged.
        """
        if isinstance(scheme, GraphScheme):
            for src_node, dst_node, _ in list(self.edges()):
                if not scheme.contains(src_node, dst_node):
                    self.remove_edge(src_node, dst_node)
        elif isinstance(scheme, WeightedGraphScheme):
            masked: List[Tuple[NodeID, NodeID, Optional[Weight]]] = []
            for src_node, dst_node, weight in self.edges():
                factor = scheme.weight(src_node, dst_node)
                new_weight = None if factor is None else weight * factor
                if new_weight is not None and new_weight < 0:
                    raise ValueError(
                        f"Masking '{src_node}' -> '{dst_node}' gives negative "
                        f"capacity {new_weight}."
                    )
                masked.append((src_node, dst_node, new_weight))
            for src_node, dst_node, new_weight in masked:
                if new_weight is None:
                    self.remove_edge(src_node, dst_node)
                else:
                    self.insert_edge(src_node, dst_node, new_weight)
        else:
            raise TypeError(f"Cannot mask a FlowNetwork with {type(scheme).__name__}")

    def masked(self, scheme: Union[GraphScheme, WeightedGraphScheme]) -> FlowNetwork:
        """Return a masked copy, leaving this network unchanged."""
        copy = self.copy()
        copy.mask(scheme)
        return copy

    #
    # Flow pushing
    #
    def reduce_flow(self, src_node: NodeID, dst_node: NodeID, amount: Weight) -> None:
        """Lower the remaining capacity of an edge; at zero the edge disappears.

        Raises:
            ValueError: If the edge is absent or ``amount`` exceeds its capacity.
        """
        weight = self.edge_value(src_node, dst_node)
        if weight is None:
            raise ValueError(f"No edge from '{src_node}' to '{dst_node}'.")
        if amount > weight:
            raise ValueError(
                f"Cannot push {amount} through '{src_node}' -> '{dst_node}' "
                f"with capacity {weight}."
            )
        self.insert_edge(src_node, dst_node, weight - amount)

    def update_back_edge(self, src_node: NodeID, dst_node: NodeID, amount: Weight) -> None:
        """Add ``amount`` to the edge opposite to ``src_node -> dst_node``, creating it if absent."""
        current = self.edge_value(dst_node, src_node) or 0
        self.insert_edge(dst_node, src_node, current + amount)

    def push_flow_through_edge(
        self, src_node: NodeID, dst_node: NodeID, amount: Weight
    ) -> None:
        self.reduce_flow(src_node, dst_node, amount)
        self.update_back_edge(src_node, dst_node, amount)

    def push_flow(self, path: Union[Path, Iterable[NodeID]]) -> Weight:
        """Push the bottleneck capacity of ``path`` through every edge of it.

        Args:
            path: A `Path` or a sequence of nodes.

        Returns:
            The amount pushed (the minimum edge weight along the path).

        Raises:
            ValueError: If the path has no edges or uses an absent edge.
        """
        edges = pairs(path)
        if not edges:
            raise ValueError("Cannot push flow through a path without edges.")
        weights = []
        for edge in edges:
            weight = self.edge_value(edge.a, edge.b)
            if weight is None:
                raise ValueError(f"No edge from '{edge.a}' to '{edge.b}'.")
            weights.append(weight)
        bottleneck = min(weights)
        for edge in edges:
            self.push_flow_through_edge(edge.a, edge.b, bottleneck)
        return bottleneck

    def augmenting_path(self) -> Optional[Path]:
        """Path with the fewest edges from source to sink, or None."""
        return self.shortest_path(self.source, self.sink)

    #
    # Max-flow / min-cut
    #
    def maximum_flow_and_residual_network(self) -> Tuple[Weight, FlowNetwork]:
        return max_flow.maximum_flow_and_residual_network(self)

    def maximum_flow(self) -> Weight:
        return max_flow.calc_max_flow(self)

    def minimum_cut(self) -> Tuple[Set[NodeID], Set[NodeID]]:
        """Return ``(source_side, sink_side)``; saturated ties land on the sink side."""
        return max_flow.minimum_cut(self)

    def compress(self, transform: Callable[[NodeID], NodeID]) -> Graph:
        """Aggregate the network along a node map, the inverse of a pullback.

        Each edge is mapped to ``transform(src) -> transform(dst)``; weights of
        edges that collide are summed and edges that collapse onto a single
        node are dropped.
        """
        compressed = Graph()
        for node in self:
            compressed.create_node(transform(node))
        for src_node, dst_node, weight in self.edges():
            a, b = transform(src_node), transform(dst_node)
            if a == b:
                continue
            compressed.insert_edge(a, b, (compressed.edge_value(a, b) or 0) + weight)
        return compressed
