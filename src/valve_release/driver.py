"""
driver.py — Entry points for running a release search.

run_release_search builds the initial graph input, invokes the compiled
graph and returns the maximum release. maximize_release is its synchronous
wrapper for callers without an event loop. Errors propagate unchanged; there
is no partial result.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Optional

from valve_release.main_graph import build_graph
from valve_release.schemas import RawValve


def _configurable(
    time_budget: Optional[int],
    agent_count: Optional[int],
    start_valve: Optional[str],
    use_upper_bound: Optional[bool],
    max_search_depth: Optional[int],
) -> dict:
    values = {
        "time_budget": time_budget,
        "agent_count": agent_count,
        "start_valve": start_valve,
        "use_upper_bound": use_upper_bound,
        "max_search_depth": max_search_depth,
    }
    return {k: v for k, v in values.items() if v is not None}


async def run_release_search(
    valves: Optional[Iterable[RawValve | dict]] = None,
    *,
    puzzle_text: Optional[str] = None,
    time_budget: Optional[int] = None,
    agent_count: Optional[int] = None,
    start_valve: Optional[str] = None,
    use_upper_bound: Optional[bool] = None,
    max_search_depth: Optional[int] = None,
) -> dict[str, Any]:
    """
    Run the full graph and return the report summary.

    Args:
        valves:       valve records (RawValve or dicts with valve/flow_rate/tunnels).
        puzzle_text:  raw puzzle lines, used when `valves` is not given.
        others:       override the matching SearchConfiguration field; None
                      keeps the configured default.

    Returns:
        The summary dict produced by report_node; "max_release" holds the answer.
    """
    graph_input: dict[str, Any] = {}
    if valves is not None:
        graph_input["valves"] = list(valves)
    if puzzle_text is not None:
        graph_input["puzzle_text"] = puzzle_text

    config = {
        "configurable": _configurable(
            time_budget, agent_count, start_valve, use_upper_bound, max_search_depth
        )
    }
    final_state = await build_graph().ainvoke(graph_input, config=config)
    return final_state["summary"]


def maximize_release(
    valves: Optional[Iterable[RawValve | dict]] = None,
    **kwargs: Any,
) -> int:
    """Synchronous wrapper: the maximum cumulative release."""
    summary = asyncio.run(run_release_search(valves, **kwargs))
    return summary["max_release"]
