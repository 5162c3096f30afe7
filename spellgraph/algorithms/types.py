"""Types and data structures for algorithm outputs.

Defines immutable summary containers and aliases for algorithm outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Tuple

from spellgraph.graph.base import NodeID, Weight

if TYPE_CHECKING:
    from spellgraph.flow.network import FlowNetwork

# Edge identifier tuple: (source_node, destination_node)
Edge = Tuple[NodeID, NodeID]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of max-flow computation results.

    Captures edge flows, the residual network, the node partition and min-cut.

    Attributes:
        total_flow: Maximum flow value achieved.
        edge_flow: Flow carried by each edge of the original network, indexed
            by ``(src, dst)``. Edges without flow map to zero. Where both
            ``u -> v`` and ``v -> u`` exist, flow pushed one way cancels flow
            pushed the other way: the net amount is reported on the edge it
            runs along and the opposite edge reports zero, so flow is
            conserved at every internal node.
        residual: Residual network left after the last augmentation.
        source_side: Nodes reachable from the source in the residual network.
        sink_side: All other nodes; always contains the sink.
        min_cut: Original edges crossing from ``source_side`` to ``sink_side``.
        cut_capacity: Sum of the original capacities of ``min_cut`` edges.
        augmentations: Number of augmenting paths pushed.
    """

    total_flow: Weight
    edge_flow: Dict[Edge, Weight]
    residual: "FlowNetwork"
    source_side: FrozenSet[NodeID]
    sink_side: FrozenSet[NodeID]
    min_cut: List[Edge]
    cut_capacity: Weight
    augmentations: int
