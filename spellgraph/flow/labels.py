"""Symbolic weight labels and their rendering into concrete edge weights.

A `WeightLabel` attached to an edge names the edges whose combined weight the
labelled edge has to outweigh (``minus``), and optionally the edges that
support it (``plus``, kept for tracing only). Rendering resolves these
dependencies bottom-up: an edge weighs one more than the heaviest of its
labels, where a label weighs the sum of its ``minus`` edges. Unlabelled edges
weigh 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Sequence, Set

from spellgraph.graph.base import NodeID, OrderedPair
from spellgraph.graph.digraph import Graph

Labels = Mapping[OrderedPair, Sequence["WeightLabel"]]


@dataclass(frozen=True)
class WeightLabel:
    """Dependencies of an edge's weight on other edges.

    Attributes:
        edge: The labelled edge.
        plus: Edges whose weight counts in favour of ``edge``.
        minus: Edges whose combined weight ``edge`` must exceed.
    """

    edge: OrderedPair
    plus: FrozenSet[OrderedPair] = frozenset()
    minus: FrozenSet[OrderedPair] = frozenset()

    def map_nodes(self, transform: Callable[[NodeID], NodeID]) -> WeightLabel:
        def mapped(edges: Iterable[OrderedPair]) -> FrozenSet[OrderedPair]:
            return frozenset(OrderedPair(transform(e.a), transform(e.b)) for e in edges)

        return WeightLabel(
            edge=OrderedPair(transform(self.edge.a), transform(self.edge.b)),
            plus=mapped(self.plus),
            minus=mapped(self.minus),
        )


def compress_labels(
    labels: Iterable[WeightLabel], transform: Callable[[NodeID], NodeID]
) -> Dict[OrderedPair, List[WeightLabel]]:
    """Map labels through ``transform`` and group them by their mapped edge."""
    grouped: Dict[OrderedPair, List[WeightLabel]] = {}
    for label in labels:
        mapped = label.map_nodes(transform)
        grouped.setdefault(mapped.edge, []).append(mapped)
    return grouped


def render_weights(labels: Labels) -> Dict[OrderedPair, int]:
    """Resolve every labelled edge (and every edge it depends on) to a weight.

    Raises:
        ValueError: If the ``minus`` dependencies form a cycle.
    """
    weights: Dict[OrderedPair, int] = {}
    in_progress: Set[OrderedPair] = set()

    def concrete_weight(edge: OrderedPair) -> int:
        if edge in weights:
            return weights[edge]
        if edge in in_progress:
            raise ValueError(f"Cyclic weight labels through edge {tuple(edge)}.")
        in_progress.add(edge)
        heaviest = max(
            (sum(concrete_weight(m) for m in label.minus) for label in labels.get(edge, ())),
            default=0,
        )
        in_progress.discard(edge)
        weights[edge] = heaviest + 1
        return weights[edge]

    for edge in labels:
        concrete_weight(edge)
    return weights


def render_graph(labels: Labels) -> Graph:
    """Graph whose edges carry the rendered weights of ``labels``."""
    return Graph((edge.a, edge.b, weight) for edge, weight in render_weights(labels).items())
