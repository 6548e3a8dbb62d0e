"""
graph_loader.py — Initialisation node.

Turns the caller's input (puzzle text or valve records) into the reduced
graph. Does no searching; a structural problem aborts the run here, before
any branch is dispatched.
"""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from valve_release.configuration import SearchConfiguration
from valve_release.graph_reducer import reduce_graph
from valve_release.parsing import parse_valves
from valve_release.schemas import RawValve, ReleaseState


def _coerce_valves(records: list) -> list[RawValve]:
    return [
        record if isinstance(record, RawValve) else RawValve.model_validate(record)
        for record in records
    ]


async def graph_loader(state: ReleaseState, config: RunnableConfig) -> dict:
    """
    Parse (if needed) and reduce the valve network.

    Valve records in state take precedence over puzzle_text.

    Raises:
        ValueError: neither valves nor puzzle_text was supplied.
        ValveParseError / GraphStructureError: malformed input.
    """
    cfg = SearchConfiguration.from_runnable_config(config)

    records = state.get("valves")
    if records:
        valves = _coerce_valves(records)
    elif state.get("puzzle_text", "").strip():
        valves = parse_valves(state["puzzle_text"])
    else:
        raise ValueError("graph input needs either 'valves' or 'puzzle_text'")

    return {
        "reduced_graph": reduce_graph(valves, start=cfg.start_valve),
        "current_phase": "init",
    }
