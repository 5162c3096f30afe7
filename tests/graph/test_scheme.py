import pytest

from spellgraph.graph.base import OrderedPair
from spellgraph.graph.digraph import Graph
from spellgraph.graph.scheme import (
    GraphScheme,
    WeightedGraphScheme,
    conjunction,
    disjunction,
    pullback,
    restrict,
    scale,
    weight_sum,
)


def edge(a, b):
    return OrderedPair(a, b)


ASCENDING = GraphScheme(lambda e: e.a < e.b)
EVEN_TARGET = GraphScheme(lambda e: e.b % 2 == 0)


class TestGraphScheme:
    def test_contains(self):
        assert ASCENDING(edge(1, 2))
        assert not ASCENDING(edge(2, 1))
        assert ASCENDING.contains(1, 2)

    def test_undirected_accepts_either_direction(self):
        undirected = GraphScheme(lambda e: e.a < e.b, directed=False)
        assert undirected.contains(1, 2)
        assert undirected.contains(2, 1)
        assert not undirected.contains(1, 1)

    def test_conjunction_and_disjunction(self):
        both = ASCENDING * EVEN_TARGET
        either = ASCENDING + EVEN_TARGET
        assert both.contains(1, 2)
        assert not both.contains(1, 3)
        assert not both.contains(4, 2)
        assert either.contains(1, 3)
        assert either.contains(4, 2)
        assert not either.contains(4, 3)
        assert conjunction(ASCENDING, EVEN_TARGET).contains(1, 2)
        assert disjunction(ASCENDING, EVEN_TARGET).contains(4, 2)

    def test_combinators_short_circuit(self):
        calls = []

        def recording(e):
            calls.append(e)
            return True

        rhs = GraphScheme(recording)
        (GraphScheme(lambda e: False) * rhs).contains(1, 2)
        (GraphScheme(lambda e: True) + rhs).contains(1, 2)
        assert calls == []

        (GraphScheme(lambda e: True) * rhs).contains(1, 2)
        assert calls == [edge(1, 2)]

    def test_pullback_is_lazy(self):
        calls = []

        def length(node):
            calls.append(node)
            return len(node)

        shorter_first = ASCENDING.pullback(length)
        assert calls == []
        assert shorter_first.contains("ab", "abc")
        assert not shorter_first.contains("abc", "ab")
        assert calls == ["ab", "abc", "abc", "ab"]

    def test_pullback_keeps_directedness(self):
        undirected = GraphScheme(lambda e: e.a < e.b, directed=False)
        pulled = pullback(undirected, abs)
        assert pulled.directed is False
        assert pulled.contains(-3, 1)

    def test_pullback_rejects_non_schemes(self):
        with pytest.raises(TypeError):
            pullback(lambda e: True, abs)

    def test_complete(self):
        assert GraphScheme.complete().contains("a", "b")
        assert not GraphScheme.complete().contains("a", "a")
        assert GraphScheme.complete(loops=True).contains("a", "a")

    def test_from_graph_sees_later_mutations(self):
        g = Graph([("A", "B", 1)])
        scheme = GraphScheme.from_graph(g)
        assert scheme.contains("A", "B")
        assert not scheme.contains("B", "C")
        g.insert_edge("B", "C", 2)
        assert scheme.contains("B", "C")

    def test_operators_reject_other_types(self):
        with pytest.raises(TypeError):
            ASCENDING * object()
        with pytest.raises(TypeError):
            ASCENDING + 1
        with pytest.raises(TypeError):
            True * ASCENDING


class TestWeightedGraphScheme:
    def test_scale(self):
        weighted = 3 * ASCENDING
        assert isinstance(weighted, WeightedGraphScheme)
        assert weighted.weight(1, 2) == 3
        assert weighted.weight(2, 1) is None
        assert scale(0.5, ASCENDING)(edge(1, 2)) == 0.5

    def test_restrict(self):
        weights = WeightedGraphScheme(lambda e: e.a + e.b)
        restricted = weights * EVEN_TARGET
        assert restricted.weight(1, 2) == 3
        assert restricted.weight(1, 3) is None
        assert (EVEN_TARGET * weights).weight(5, 4) == 9
        assert restrict(weights, EVEN_TARGET).weight(5, 3) is None

    def test_weight_sum_treats_absent_as_missing(self):
        left = 2 * ASCENDING
        right = 5 * EVEN_TARGET
        total = left + right
        assert total.weight(1, 2) == 7
        assert total.weight(1, 3) == 2
        assert total.weight(4, 2) == 5
        assert total.weight(4, 3) is None
        assert weight_sum(left, right).weight(1, 2) == 7

    def test_multiply_by_scalar(self):
        weights = 2 * ASCENDING
        assert (weights * 3).weight(1, 2) == 6
        assert (3 * weights).weight(1, 2) == 6
        assert (weights * 3).weight(2, 1) is None

    def test_undirected_weight_falls_back_to_reverse(self):
        weights = WeightedGraphScheme({edge("a", "b"): 4}.get, directed=False)
        assert weights.weight("a", "b") == 4
        assert weights.weight("b", "a") == 4
        assert weights.weight("a", "c") is None

    def test_pullback(self):
        weights = WeightedGraphScheme({edge(0, 1): 10}.get)
        pulled = weights.pullback(lambda node: node % 2)
        assert pulled.weight(4, 7) == 10
        assert pulled.weight(7, 4) is None
