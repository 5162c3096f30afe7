"""Shared flow-network fixtures."""

from __future__ import annotations

import pytest

from spellgraph.flow.network import FlowNetwork


@pytest.fixture
def line1():
    # Capacity:
    #      [5]      [3]
    #  S────────►A────────►T
    return FlowNetwork("S", "T", edges=[("S", "A", 5), ("A", "T", 3)])


@pytest.fixture
def diamond():
    # Capacity:
    #       [4]        [2]
    #   ┌────────►A─────────┐
    #   │         │         ▼
    #   S         │[3]      T
    #   │         ▼         ▲
    #   └────────►B─────────┘
    #       [2]        [5]
    return FlowNetwork(
        "S",
        "T",
        edges=[
            ("S", "A", 4),
            ("S", "B", 2),
            ("A", "T", 2),
            ("A", "B", 3),
            ("B", "T", 5),
        ],
    )


@pytest.fixture
def clrs():
    # Classic textbook network; max flow 23.
    return FlowNetwork(
        "s",
        "t",
        edges=[
            ("s", "v1", 16),
            ("s", "v2", 13),
            ("v2", "v1", 4),
            ("v1", "v3", 12),
            ("v3", "v2", 9),
            ("v2", "v4", 14),
            ("v4", "v3", 7),
            ("v3", "t", 20),
            ("v4", "t", 4),
        ],
    )


@pytest.fixture
def disconnected():
    # S──►A──►B        T
    return FlowNetwork("S", "T", edges=[("S", "A", 2), ("A", "B", 1)])
