"""
test_schemas.py — Unit tests for schema models and reducer functions.
"""

from typing import Literal, get_args, get_type_hints

import pytest
from pydantic import ValidationError

from valve_release.engine import SearchState
from valve_release.schemas import (
    BranchState,
    RawValve,
    ReducedGraph,
    ReducedValve,
    ReleaseState,
    keep_max,
)


def test_keep_max_picks_larger():
    assert keep_max(3, 7) == 7
    assert keep_max(7, 3) == 7


def test_keep_max_is_order_independent():
    values = [12, 40, 7, 40, 0]
    forward = 0
    for v in values:
        forward = keep_max(forward, v)
    backward = 0
    for v in reversed(values):
        backward = keep_max(backward, v)
    assert forward == backward == 40


def test_raw_valve_defaults():
    raw = RawValve(valve="AA", flow_rate=0)
    assert raw.tunnels == ()


def test_raw_valve_rejects_negative_flow():
    with pytest.raises(ValidationError):
        RawValve(valve="AA", flow_rate=-1, tunnels=("BB",))


def test_raw_valve_accepts_list_tunnels():
    raw = RawValve.model_validate({"valve": "BB", "flow_rate": 13, "tunnels": ["CC", "AA"]})
    assert raw.tunnels == ("CC", "AA")


def test_reduced_graph_bit_layout(sample_graph):
    assert sample_graph.flow_valves == ("BB", "CC", "DD", "EE", "HH", "JJ")
    assert sample_graph.bit_of["BB"] == 1
    assert sample_graph.bit_of["JJ"] == 1 << 5
    assert "AA" not in sample_graph.bit_of
    assert sample_graph.all_mask == 0b111111


def test_reduced_graph_release_rate(sample_graph):
    assert sample_graph.release_rate(0) == 0
    assert sample_graph.release_rate(sample_graph.all_mask) == 81
    mask = sample_graph.bit_of["DD"] | sample_graph.bit_of["BB"]
    assert sample_graph.release_rate(mask) == 33
    assert sample_graph.opened_valves(mask) == ["BB", "DD"]


def test_reduced_graph_distance_missing_is_none():
    graph = ReducedGraph(
        start="S",
        valves={
            "S": ReducedValve(valve="S", flow_rate=0, tunnels={}),
            "A": ReducedValve(valve="A", flow_rate=4, tunnels={}),
        },
    )
    assert graph.distance("S", "A") is None
    assert graph.total_flow_rate == 4


def test_phases_are_the_ones_nodes_set():
    phase = get_type_hints(ReleaseState)["current_phase"]
    assert phase == Literal["init", "search", "end"]
    assert set(get_args(phase)) == {"init", "search", "end"}


def test_branch_payload_carries_a_search_state():
    hints = get_type_hints(BranchState, localns={"SearchState": SearchState})
    assert hints["search_state"] is SearchState
