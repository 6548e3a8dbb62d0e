"""
conftest.py — Shared pytest fixtures for the valve release tests.
"""

import pytest

from valve_release.graph_reducer import reduce_graph
from valve_release.parsing import parse_valves
from valve_release.schemas import RawValve

SAMPLE_INPUT = """\
Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
Valve BB has flow rate=13; tunnels lead to valves CC, AA
Valve CC has flow rate=2; tunnels lead to valves DD, BB
Valve DD has flow rate=20; tunnels lead to valves CC, AA, EE
Valve EE has flow rate=3; tunnels lead to valves FF, DD
Valve FF has flow rate=0; tunnels lead to valves EE, GG
Valve GG has flow rate=0; tunnels lead to valves FF, HH
Valve HH has flow rate=22; tunnel leads to valve GG
Valve II has flow rate=0; tunnels lead to valves AA, JJ
Valve JJ has flow rate=21; tunnel leads to valve II
"""


def valve(name, flow_rate, *tunnels):
    return RawValve(valve=name, flow_rate=flow_rate, tunnels=tunnels)


@pytest.fixture
def sample_text():
    return SAMPLE_INPUT


@pytest.fixture
def sample_valves():
    return parse_valves(SAMPLE_INPUT)


@pytest.fixture
def sample_graph(sample_valves):
    return reduce_graph(sample_valves, start="AA")


@pytest.fixture
def chain_valves():
    """S(0) - A(5) - B(3): A is 1 minute from S, B is 2."""
    return [
        valve("S", 0, "A"),
        valve("A", 5, "S", "B"),
        valve("B", 3, "A"),
    ]


@pytest.fixture
def fork_valves():
    """Two 10-rate valves, each 1 minute from S in opposite directions."""
    return [
        valve("S", 0, "A", "B"),
        valve("A", 10, "S"),
        valve("B", 10, "S"),
    ]


@pytest.fixture
def lone_valve():
    """A single flow valve two minutes from S through a zero-flow corridor."""
    return [
        valve("S", 0, "X"),
        valve("X", 0, "S", "A"),
        valve("A", 7, "X"),
    ]


@pytest.fixture
def dry_valves():
    return [
        valve("S", 0, "X"),
        valve("X", 0, "S"),
    ]
