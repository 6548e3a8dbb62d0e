"""
graph_reducer.py — Collapse the raw tunnel network into the reduced graph.

For every kept valve (positive flow, or the start valve) a breadth-first
sweep runs over the full raw adjacency, zero-flow valves included as
pass-through. The resulting distances are filtered down to the kept valves.
Unreachable valves are left out of the distance map rather than given a
sentinel.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Mapping

from valve_release.errors import GraphStructureError
from valve_release.logging import get_logger
from valve_release.schemas import RawValve, ReducedGraph, ReducedValve

logger = get_logger(__name__)


def index_valves(valves: Iterable[RawValve]) -> dict[str, RawValve]:
    """
    Key raw valves by id and check referential integrity.

    Raises:
        GraphStructureError: on a duplicate id or a tunnel to an unknown valve.
    """
    table: dict[str, RawValve] = {}
    for raw in valves:
        if raw.valve in table:
            raise GraphStructureError(f"duplicate valve {raw.valve!r}")
        table[raw.valve] = raw

    for raw in table.values():
        missing = [t for t in raw.tunnels if t not in table]
        if missing:
            raise GraphStructureError(
                f"valve {raw.valve!r} has tunnels to unknown valve(s): {', '.join(missing)}"
            )
    return table


def shortest_paths(table: Mapping[str, RawValve], source: str) -> dict[str, int]:
    """Unit-weight single-source shortest paths from `source` (BFS)."""
    distances = {source: 0}
    frontier = deque([source])
    while frontier:
        current = frontier.popleft()
        for neighbour in table[current].tunnels:
            if neighbour not in distances:
                distances[neighbour] = distances[current] + 1
                frontier.append(neighbour)
    return distances


def reduce_graph(valves: Iterable[RawValve], start: str = "AA") -> ReducedGraph:
    """
    Build the reduced graph consumed by the search engine.

    Args:
        valves: raw valve records; must be referentially complete.
        start:  id of the valve both agents start at. It is kept even with
                zero flow.

    Returns:
        ReducedGraph containing exactly the positive-flow valves plus `start`.
    """
    table = index_valves(valves)
    if start not in table:
        raise GraphStructureError(f"start valve {start!r} is not in the valve table")

    kept = sorted(v for v, raw in table.items() if v == start or raw.flow_rate > 0)
    kept_set = set(kept)

    reduced: dict[str, ReducedValve] = {}
    for valve in kept:
        distances = shortest_paths(table, valve)
        reduced[valve] = ReducedValve(
            valve=valve,
            flow_rate=table[valve].flow_rate,
            tunnels={
                target: distances[target]
                for target in kept
                if target != valve and target in distances
            },
        )

    graph = ReducedGraph(start=start, valves=reduced)
    check_structure(graph)

    logger.info(
        "graph_reduced",
        raw_valves=len(table),
        kept_valves=len(kept_set),
        flow_valves=len(graph.flow_valves),
        start=start,
    )
    return graph


def check_structure(graph: ReducedGraph) -> None:
    """
    Assert the reduced-graph invariants the search relies on.

    Raises:
        GraphStructureError: when the start valve is missing, or a non-start
            valve has no positive flow.
    """
    if graph.start not in graph.valves:
        raise GraphStructureError(f"start valve {graph.start!r} missing from reduced graph")
    for valve, node in graph.valves.items():
        if valve != graph.start and node.flow_rate <= 0:
            raise GraphStructureError(
                f"reduced valve {valve!r} has non-positive flow rate {node.flow_rate}"
            )
        if valve in node.tunnels:
            raise GraphStructureError(f"reduced valve {valve!r} lists itself as a destination")
