"""spellgraph: flow-network engine and minimum-cut pitch speller.

spellgraph provides a small directed flow-network engine (graphs, lazily
composed graph schemes, max-flow and minimum cut) and uses it to choose
enharmonic spellings for simultaneous pitches.

Primary API:
    PitchSpeller - Spell a mapping of voices to MIDI note numbers
    spell_chords() - Spell a sequence of independent chords
    FlowNetwork - Capacitated network with source and sink
    Graph, GraphScheme, WeightedGraphScheme - Graph building blocks
    calc_max_flow() - Max-flow with optional FlowSummary

Example:
    from spellgraph import PitchSpeller

    spelled = PitchSpeller({0: 61, 1: 66}, parsimony_pivot="D").spell()
    str(spelled[0])  # "C♯4"
"""

from __future__ import annotations

from spellgraph import logging
from spellgraph.logging import set_log_level
from spellgraph.algorithms.max_flow import calc_max_flow
from spellgraph.algorithms.types import FlowSummary
from spellgraph.config import SPELLER_CONFIG, SpellerConfig, load_config_yaml
from spellgraph.flow.network import FlowNetwork
from spellgraph.graph.base import OrderedPair, UnorderedPair
from spellgraph.graph.digraph import Graph
from spellgraph.graph.path import Path
from spellgraph.graph.scheme import GraphScheme, WeightedGraphScheme
from spellgraph.graph.unweighted import UnweightedGraph
from spellgraph.spelling.interval import NamedUnorderedInterval
from spellgraph.spelling.pitch import LetterName, Modifier, SpelledPitch, Spelling
from spellgraph.spelling.speller import (
    AssignedNode,
    Cross,
    Direction,
    PitchSpeller,
    spell_chords,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Speller
    "PitchSpeller",
    "spell_chords",
    "AssignedNode",
    "Cross",
    "Direction",
    # Pitch values
    "LetterName",
    "Modifier",
    "Spelling",
    "SpelledPitch",
    "NamedUnorderedInterval",
    # Engine
    "Graph",
    "UnweightedGraph",
    "Path",
    "OrderedPair",
    "UnorderedPair",
    "GraphScheme",
    "WeightedGraphScheme",
    "FlowNetwork",
    "FlowSummary",
    "calc_max_flow",
    # Configuration
    "SpellerConfig",
    "SPELLER_CONFIG",
    "load_config_yaml",
    # Utilities
    "logging",
    "set_log_level",
]
