"""Pitch spelling by minimum cut.

Every voice contributes two binary choice nodes, ``Cross(index, UP)`` and
``Cross(index, DOWN)``. After the cut, a node on the sink side is assigned
UP and a node on the source side DOWN; the pair of assignments (UP node,
DOWN node) is the voice's tendency pair, which selects the spelling:

    (UP, UP)      sharp-wise: the letter below, raised (C♯, B♯, D𝄪)
    (DOWN, DOWN)  flat-wise: the letter above, lowered (D♭, F♭, E𝄫)
    (UP, DOWN)    natural (white keys only)
    (DOWN, UP)    never a spelling

The cost of each tendency pair is a function of two binary variables and is
encoded exactly by terminal edges plus one UP -> DOWN edge per voice.

Valid tendency pairs form a ladder, flat-wise < natural < sharp-wise, read off
the nodes as thresholds: the UP node is on the sink side from natural upwards,
the DOWN node only for sharp-wise. Every two co-sounding voices pay the
interval cost of the interval their spellings form, scaled by
``neighbor_weight``. That cost is a function of two ladder positions; it is
split into terminal edges plus edges between the voices' nodes, one per pair
of thresholds.

Weights are not assembled edge by edge: a complete template network is
masked by a connectivity scheme and then by a weighting scheme, both built
with the scheme algebra in `spellgraph.graph.scheme`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from fractions import Fraction
from typing import (
    Dict,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from spellgraph.config import SPELLER_CONFIG, SpellerConfig
from spellgraph.flow.network import FlowNetwork
from spellgraph.graph.base import NodeID, OrderedPair, Weight
from spellgraph.graph.scheme import GraphScheme, WeightedGraphScheme
from spellgraph.logging import get_logger
from spellgraph.spelling.interval import NamedUnorderedInterval
from spellgraph.spelling.pitch import LetterName, Modifier, SpelledPitch, Spelling, mod

logger = get_logger(__name__)


class Direction(IntEnum):
    """Enharmonic tendency; DOWN sorts before UP."""

    DOWN = 0
    UP = 1


class Terminal(Enum):
    """Flow network terminals: the source biases DOWN, the sink biases UP."""

    SOURCE = "source"
    SINK = "sink"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class Cross:
    """Choice node: a voice index paired with a direction."""

    index: int
    direction: Direction

    def __str__(self) -> str:
        return f"{self.index}{'+' if self.direction == Direction.UP else '-'}"


@dataclass(frozen=True, order=True)
class AssignedNode:
    """A choice node with the direction the cut assigned to it.

    Ordered by node (index, then direction), then by assignment.
    """

    node: Cross
    assignment: Direction


TendencyPair = Tuple[Direction, Direction]

SHARPWISE: TendencyPair = (Direction.UP, Direction.UP)
FLATWISE: TendencyPair = (Direction.DOWN, Direction.DOWN)
NEUTRAL: TendencyPair = (Direction.UP, Direction.DOWN)
TENDENCY_PAIRS: Tuple[TendencyPair, ...] = (
    FLATWISE,
    (Direction.DOWN, Direction.UP),
    NEUTRAL,
    SHARPWISE,
)

#: Valid tendency pairs from flat-wise to sharp-wise.
LADDER: Tuple[TendencyPair, ...] = (FLATWISE, NEUTRAL, SHARPWISE)

# Node on the sink side iff the ladder position is at least 1, resp. 2
_THRESHOLDS: Tuple[Direction, ...] = (Direction.UP, Direction.DOWN)


def candidate_spellings(pitch_class: int) -> Dict[TendencyPair, Spelling]:
    """Spellings available to a pitch class, keyed by tendency pair."""
    pitch_class = mod(pitch_class, 12)
    candidates: Dict[TendencyPair, Spelling] = {}
    try:
        natural = LetterName.from_pitch_class(pitch_class)
    except ValueError:
        below = LetterName.from_pitch_class(pitch_class - 1)
        above = LetterName.from_pitch_class(pitch_class + 1)
    else:
        candidates[NEUTRAL] = Spelling(natural)
        below, above = natural.shifted(-1), natural.shifted(1)
    raise_by = mod(pitch_class - below.pitch_class, 12)
    lower_by = mod(above.pitch_class - pitch_class, 12)
    candidates[SHARPWISE] = Spelling(below, Modifier(raise_by))
    candidates[FLATWISE] = Spelling(above, Modifier(-lower_by))
    return candidates


def spelling_cost(
    spelling: Spelling,
    parsimony_pivot: Optional[Spelling] = None,
    config: SpellerConfig = SPELLER_CONFIG,
) -> int:
    """Accidental cost plus, with a pivot, the augmented/diminished penalty of
    the interval between the pivot and ``spelling``."""
    cost = config.modifier_cost(spelling.modifier)
    if parsimony_pivot is not None:
        cost += config.interval_cost(
            NamedUnorderedInterval.between(parsimony_pivot, spelling)
        )
    return cost


def convex_envelope(points: Mapping[int, Weight]) -> Dict[int, Weight]:
    """Greatest convex function below ``points``, evaluated at each of their keys.

    Points on the lower hull keep their value; the others are interpolated
    exactly between their hull neighbours.
    """
    hull: List[Tuple[int, Weight]] = []
    for point in sorted(points.items()):
        while len(hull) >= 2 and _turn(hull[-2], hull[-1], point) <= 0:
            hull.pop()
        hull.append(point)

    envelope: Dict[int, Weight] = {}
    for (x0, y0), (x1, y1) in zip(hull, hull[1:]):
        for x in range(x0, x1):
            envelope[x] = _exact(y0 + (y1 - y0) * Fraction(x - x0, x1 - x0))
    x_last, y_last = hull[-1]
    envelope[x_last] = y_last
    return {x: envelope[x] for x in points}


def _turn(o: Tuple[int, Weight], a: Tuple[int, Weight], b: Tuple[int, Weight]):
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _exact(value: Fraction) -> Weight:
    return int(value) if value.denominator == 1 else value


#
# Connectivity shared by every chord
#
def _voice(node: NodeID) -> Optional[int]:
    return node.index if isinstance(node, Cross) else None


def _direction(node: NodeID) -> Optional[Direction]:
    return node.direction if isinstance(node, Cross) else None


_SAME = GraphScheme(lambda edge: edge.a is not None and edge.a == edge.b)
_DIFFERENT = GraphScheme(
    lambda edge: edge.a is not None and edge.b is not None and edge.a != edge.b
)
_UP_TO_DOWN = GraphScheme(
    lambda edge: edge.a == Direction.UP and edge.b == Direction.DOWN
)
_TERMINAL = GraphScheme(
    lambda edge: (edge.a == Terminal.SOURCE and isinstance(edge.b, Cross))
    or (isinstance(edge.a, Cross) and edge.b == Terminal.SINK)
)

#: Edges between nodes of different voices.
COUPLING = _DIFFERENT.pullback(_voice)

#: The UP -> DOWN edge inside each voice.
WITHIN_VOICE = _SAME.pullback(_voice) * _UP_TO_DOWN.pullback(_direction)

#: Every edge the speller may weight.
CONNECTIVITY = _TERMINAL + WITHIN_VOICE + COUPLING


def complete_network(nodes: Iterable[NodeID]) -> FlowNetwork:
    """Template network with unit weight on every edge compatible with the terminals."""
    network = FlowNetwork(Terminal.SOURCE, Terminal.SINK, nodes)
    universe = list(network)
    for src_node in universe:
        if src_node == Terminal.SINK:
            continue
        for dst_node in universe:
            if dst_node != src_node and dst_node != Terminal.SOURCE:
                network.insert_edge(src_node, dst_node, 1)
    return network


class PitchSpeller:
    """Spell a set of simultaneous pitches.

    Args:
        pitches: Mapping from an opaque voice key to a MIDI note number.
        parsimony_pivot: Optional reference spelling (or its string form,
            e.g. ``"D"``) that candidate spellings are measured against.
        config: Cost tables; defaults to `SPELLER_CONFIG`.

    Raises:
        ValueError: If a pitch is not an integer note number, or if the
            configuration makes a voice's costs unrepresentable by a cut.
    """

    def __init__(
        self,
        pitches: Mapping[Hashable, int],
        parsimony_pivot: Union[Spelling, str, None] = None,
        config: Optional[SpellerConfig] = None,
    ) -> None:
        if isinstance(parsimony_pivot, str):
            parsimony_pivot = Spelling.from_string(parsimony_pivot)
        self.parsimony_pivot: Optional[Spelling] = parsimony_pivot
        self.config = config if config is not None else SPELLER_CONFIG

        self.keys: List[Hashable] = _ordered_keys(pitches)
        self.pitches: Dict[int, int] = {}
        for index, key in enumerate(self.keys):
            note_number = pitches[key]
            if isinstance(note_number, bool) or int(note_number) != note_number:
                raise ValueError(f"Pitch for voice {key!r} must be an integer, got {note_number!r}")
            self.pitches[index] = int(note_number)

        self.candidates: Dict[int, Dict[TendencyPair, Spelling]] = {
            index: candidate_spellings(note_number)
            for index, note_number in self.pitches.items()
        }
        # Cost paid when a node ends on the sink side; the sign picks its terminal
        self._unary: Dict[Cross, Weight] = {node: 0 for node in self.nodes}
        self._within: Dict[OrderedPair, Weight] = {}
        self._coupling: Dict[OrderedPair, Weight] = {}
        for index in self.pitches:
            self._decompose(index)
        for i in self.pitches:
            for j in self.pitches:
                if i < j:
                    self._decompose_pair(i, j)

    @property
    def nodes(self) -> List[Cross]:
        return [
            Cross(index, direction)
            for index in self.pitches
            for direction in (Direction.UP, Direction.DOWN)
        ]

    def tendency_costs(self, index: int) -> Dict[TendencyPair, int]:
        """Cost of each tendency pair for a voice; pairs without a spelling are forbidden."""
        costs = {pair: self.config.forbidden_cost for pair in TENDENCY_PAIRS}
        for pair, spelling in self.candidates[index].items():
            costs[pair] = spelling_cost(spelling, self.parsimony_pivot, self.config)
        return costs

    def _decompose(self, index: int) -> None:
        # E(x_up, x_down) = A + (C - A) x_up + (D - C) x_down + (B + C - A - D)(1 - x_up) x_down
        # with x = 1 on the sink (UP) side. Unary terms become terminal edges,
        # the last term the UP -> DOWN edge.
        costs = self.tendency_costs(index)
        a = costs[FLATWISE]
        b = costs[(Direction.DOWN, Direction.UP)]
        c = costs[NEUTRAL]
        d = costs[SHARPWISE]
        up, down = Cross(index, Direction.UP), Cross(index, Direction.DOWN)

        pairwise = b + c - a - d
        if pairwise < 0:
            raise ValueError(
                f"Costs for voice {self.keys[index]!r} cannot be represented by a cut; "
                f"raise 'forbidden_cost' above {a + d - c}."
            )
        self._unary[up] += c - a
        self._unary[down] += d - c
        if pairwise > 0:
            self._within[OrderedPair(up, down)] = pairwise

    def _ladder(self, index: int) -> List[Spelling]:
        # Black keys have no natural; their flat-wise spelling stands in for it
        candidates = self.candidates[index]
        return [candidates.get(pair, candidates[FLATWISE]) for pair in LADDER]

    def _letter_position(self, index: int, spelling: Spelling) -> int:
        return 7 * SpelledPitch(self.pitches[index], spelling).octave + spelling.letter.steps

    def pair_costs(self, i: int, j: int) -> List[List[Weight]]:
        """Interval cost between voices ``i`` and ``j`` by ladder position.

        ``pair_costs(i, j)[a][b]`` is the cost of voice ``i`` at ``LADDER[a]``
        together with voice ``j`` at ``LADDER[b]``. The interval cost is a
        function of the letter distance between the two spellings; it is
        replaced by its convex envelope over that distance, which leaves every
        combination on the envelope at its interval cost and only lowers the
        combinations above it, such as C against C𝄪.
        """
        distances: List[List[int]] = []
        by_distance: Dict[int, Weight] = {}
        for spelling_i in self._ladder(i):
            row = []
            for spelling_j in self._ladder(j):
                distance = self._letter_position(j, spelling_j) - self._letter_position(
                    i, spelling_i
                )
                by_distance[distance] = self.config.neighbor_weight * self.config.interval_cost(
                    NamedUnorderedInterval.between(spelling_i, spelling_j)
                )
                row.append(distance)
            distances.append(row)
        envelope = convex_envelope(by_distance)
        return [[envelope[distance] for distance in row] for row in distances]

    def _decompose_pair(self, i: int, j: int) -> None:
        # With thresholds x_k = [a >= k] and y_l = [b >= l],
        # f(a, b) = f(0, 0) + sum alpha_k x_k + sum beta_l y_l + sum gamma_kl x_k y_l.
        # gamma x y = gamma x + |gamma| x (1 - y) for gamma <= 0, the last term
        # being an edge y -> x.
        f = self.pair_costs(i, j)
        nodes_i = [Cross(i, direction) for direction in _THRESHOLDS]
        nodes_j = [Cross(j, direction) for direction in _THRESHOLDS]
        for k in (1, 2):
            self._unary[nodes_i[k - 1]] += f[k][0] - f[k - 1][0]
            self._unary[nodes_j[k - 1]] += f[0][k] - f[0][k - 1]
        for k in (1, 2):
            for l in (1, 2):
                gamma = f[k][l] - f[k - 1][l] - f[k][l - 1] + f[k - 1][l - 1]
                if gamma > 0:
                    raise ValueError(
                        f"Interval costs between voices {self.keys[i]!r} and "
                        f"{self.keys[j]!r} cannot be represented by a cut."
                    )
                if gamma < 0:
                    x, y = nodes_i[k - 1], nodes_j[l - 1]
                    self._unary[x] += gamma
                    edge = OrderedPair(y, x)
                    self._coupling[edge] = self._coupling.get(edge, 0) - gamma

    def _terminal_weights(self) -> Dict[OrderedPair, Weight]:
        weights: Dict[OrderedPair, Weight] = {}
        for node, unary in self._unary.items():
            if unary > 0:
                weights[OrderedPair(Terminal.SOURCE, node)] = unary
            elif unary < 0:
                weights[OrderedPair(node, Terminal.SINK)] = -unary
        return weights

    @property
    def weights(self) -> WeightedGraphScheme:
        terminal = WeightedGraphScheme(self._terminal_weights().get)
        within = WeightedGraphScheme(self._within.get)
        coupling = WeightedGraphScheme(self._coupling.get)
        return terminal * _TERMINAL + within * WITHIN_VOICE + coupling * COUPLING

    def build_network(self) -> FlowNetwork:
        """Mask the complete template by connectivity, then by weights."""
        network = complete_network(self.nodes).masked(CONNECTIVITY)
        network.mask(self.weights)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Spelling network: %d voices, %d nodes, %d edges",
                len(self.pitches),
                len(network),
                sum(1 for _ in network.edges()),
            )
        return network

    def assign(self) -> List[AssignedNode]:
        """Run the minimum cut and assign every choice node a direction."""
        if not self.pitches:
            return []
        network = self.build_network()
        source_side, _ = network.minimum_cut()
        return sorted(
            AssignedNode(node, Direction.DOWN if node in source_side else Direction.UP)
            for node in network.internal_nodes
        )

    def spell(self) -> Dict[Hashable, SpelledPitch]:
        """Return the spelled pitch of every voice, keyed like the input."""
        tendencies: Dict[int, Dict[Direction, Direction]] = {}
        for assigned in self.assign():
            tendencies.setdefault(assigned.node.index, {})[
                assigned.node.direction
            ] = assigned.assignment

        result: Dict[Hashable, SpelledPitch] = {}
        for index, key in enumerate(self.keys):
            pair = (tendencies[index][Direction.UP], tendencies[index][Direction.DOWN])
            spelling = self.candidates[index].get(pair)
            if spelling is None:
                spelling = self._cheapest(index)
                logger.warning(
                    "Voice %r landed on tendency pair %s with no spelling; using %s",
                    key,
                    tuple(d.name for d in pair),
                    spelling,
                )
            logger.debug("Voice %r: %s -> %s", key, tuple(d.name for d in pair), spelling)
            result[key] = SpelledPitch(self.pitches[index], spelling)
        return result

    def _cheapest(self, index: int) -> Spelling:
        costs = self.tendency_costs(index)
        pair = min(self.candidates[index], key=lambda p: (costs[p], TENDENCY_PAIRS.index(p)))
        return self.candidates[index][pair]


def spell_chords(
    chords: Sequence[Mapping[Hashable, int]],
    parsimony_pivot: Union[Spelling, str, None] = None,
    config: Optional[SpellerConfig] = None,
) -> List[Dict[Hashable, SpelledPitch]]:
    """Spell independent chords, building one network per chord."""
    return [PitchSpeller(chord, parsimony_pivot, config).spell() for chord in chords]


def _ordered_keys(pitches: Mapping[Hashable, int]) -> List[Hashable]:
    try:
        return sorted(pitches)
    except TypeError:
        # Mixed or unorderable keys
        return sorted(pitches, key=repr)
