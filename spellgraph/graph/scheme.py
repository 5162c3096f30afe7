"""Lazily evaluated graph schemes and their composition algebra.

A scheme describes connectivity (`GraphScheme`, edge -> bool) or weighting
(`WeightedGraphScheme`, edge -> weight or None) as a pure function of an
edge. Nothing is materialized: combinators wrap the operand functions in new
closures, and evaluation happens only when an edge is queried.

Operators map onto the named combinators:

- ``a * b`` (two `GraphScheme`) -> `conjunction`
- ``a + b`` (two `GraphScheme`) -> `disjunction`
- ``k * a`` (scalar, `GraphScheme`) -> `scale`
- ``w * a`` (`WeightedGraphScheme`, `GraphScheme`) -> `restrict`
- ``w + v`` (two `WeightedGraphScheme`) -> `weight_sum`
"""

from __future__ import annotations

from numbers import Number
from typing import Callable, Optional

from spellgraph.graph.base import GraphProtocol, NodeID, OrderedPair, Weight

EdgePredicate = Callable[[OrderedPair], bool]
EdgeWeighting = Callable[[OrderedPair], Optional[Weight]]
NodeMap = Callable[[NodeID], NodeID]


class GraphScheme:
    """Unweighted scheme: whether an edge is present.

    Args:
        contains: Predicate over `OrderedPair` edges. Must be pure.
        directed: When False, an edge is present iff the predicate holds for
            it or for its reverse.
    """

    __slots__ = ("_contains", "directed")

    def __init__(self, contains: EdgePredicate, directed: bool = True) -> None:
        self._contains = contains
        self.directed = directed

    def __call__(self, edge: OrderedPair) -> bool:
        if self._contains(edge):
            return True
        return not self.directed and bool(self._contains(edge.swapped))

    def contains(self, src_node: NodeID, dst_node: NodeID) -> bool:
        return self(OrderedPair(src_node, dst_node))

    def pullback(self, transform: NodeMap) -> GraphScheme:
        return pullback(self, transform)

    def __mul__(self, other: object):
        if isinstance(other, GraphScheme):
            return conjunction(self, other)
        return NotImplemented

    def __rmul__(self, other: object):
        if isinstance(other, Number) and not isinstance(other, bool):
            return scale(other, self)  # type: ignore[arg-type]
        return NotImplemented

    def __add__(self, other: object):
        if isinstance(other, GraphScheme):
            return disjunction(self, other)
        return NotImplemented

    @classmethod
    def complete(cls, loops: bool = False) -> GraphScheme:
        """Scheme containing every edge (self-loops only if ``loops``)."""
        if loops:
            return cls(lambda edge: True)
        return cls(lambda edge: edge.a != edge.b)

    @classmethod
    def from_graph(cls, graph: GraphProtocol) -> GraphScheme:
        """Lazy view over the current edges of ``graph``.

        The graph is consulted on every evaluation, so later mutations of the
        graph are visible through the scheme.
        """
        return cls(lambda edge: edge.b in graph.neighbors(edge.a))


class WeightedGraphScheme:
    """Weighted scheme: the weight of an edge, or None when absent.

    Args:
        weight: Function from `OrderedPair` edges to a weight or None. Must be pure.
        directed: When False, an edge absent in its own direction takes the
            weight of its reverse.
    """

    __slots__ = ("_weight", "directed")

    def __init__(self, weight: EdgeWeighting, directed: bool = True) -> None:
        self._weight = weight
        self.directed = directed

    def __call__(self, edge: OrderedPair) -> Optional[Weight]:
        value = self._weight(edge)
        if value is None and not self.directed:
            value = self._weight(edge.swapped)
        return value

    def weight(self, src_node: NodeID, dst_node: NodeID) -> Optional[Weight]:
        return self(OrderedPair(src_node, dst_node))

    def pullback(self, transform: NodeMap) -> WeightedGraphScheme:
        return pullback(self, transform)

    def __mul__(self, other: object):
        if isinstance(other, GraphScheme):
            return restrict(self, other)
        if isinstance(other, Number) and not isinstance(other, bool):
            return WeightedGraphScheme(
                lambda edge: _times(self(edge), other), directed=self.directed
            )
        return NotImplemented

    def __rmul__(self, other: object):
        if isinstance(other, GraphScheme):
            return restrict(self, other)
        if isinstance(other, Number) and not isinstance(other, bool):
            return self * other
        return NotImplemented

    def __add__(self, other: object):
        if isinstance(other, WeightedGraphScheme):
            return weight_sum(self, other)
        return NotImplemented


def _times(value: Optional[Weight], factor) -> Optional[Weight]:
    return None if value is None else value * factor


def pullback(scheme, transform: NodeMap):
    """Scheme over a new node type, evaluated by mapping edges through ``transform``.

    Works for both scheme kinds; the result keeps the kind and directedness
    of ``scheme``. ``transform`` is applied lazily at evaluation time.
    """
    if isinstance(scheme, GraphScheme):
        return GraphScheme(
            lambda edge: scheme(OrderedPair(transform(edge.a), transform(edge.b))),
            directed=scheme.directed,
        )
    if isinstance(scheme, WeightedGraphScheme):
        return WeightedGraphScheme(
            lambda edge: scheme(OrderedPair(transform(edge.a), transform(edge.b))),
            directed=scheme.directed,
        )
    raise TypeError(f"Cannot pull back {type(scheme).__name__}")


def conjunction(lhs: GraphScheme, rhs: GraphScheme) -> GraphScheme:
    """Edge present iff present in both; ``rhs`` is skipped when ``lhs`` rejects."""
    return GraphScheme(
        lambda edge: lhs(edge) and rhs(edge), directed=lhs.directed or rhs.directed
    )


def disjunction(lhs: GraphScheme, rhs: GraphScheme) -> GraphScheme:
    """Edge present iff present in either; ``rhs`` is skipped when ``lhs`` accepts."""
    return GraphScheme(
        lambda edge: lhs(edge) or rhs(edge), directed=lhs.directed or rhs.directed
    )


def scale(scalar: Weight, scheme: GraphScheme) -> WeightedGraphScheme:
    """Weighted scheme yielding ``scalar`` wherever ``scheme`` holds."""
    return WeightedGraphScheme(lambda edge: scalar if scheme(edge) else None)


def restrict(weights: WeightedGraphScheme, mask: GraphScheme) -> WeightedGraphScheme:
    """Weights of ``weights`` on edges ``mask`` contains; None elsewhere."""
    return WeightedGraphScheme(lambda edge: weights(edge) if mask(edge) else None)


def weight_sum(
    lhs: WeightedGraphScheme, rhs: WeightedGraphScheme
) -> WeightedGraphScheme:
    """Sum of the weights present; None only where both are absent."""

    def weight(edge: OrderedPair) -> Optional[Weight]:
        left, right = lhs(edge), rhs(edge)
        if left is None:
            return right
        if right is None:
            return left
        return left + right

    return WeightedGraphScheme(weight, directed=lhs.directed or rhs.directed)
