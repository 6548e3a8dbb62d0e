"""
reporter.py — Final node: summarise the search.
"""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from valve_release.configuration import SearchConfiguration
from valve_release.logging import get_logger
from valve_release.schemas import ReleaseState

logger = get_logger(__name__)


async def report_node(state: ReleaseState, config: RunnableConfig) -> dict:
    cfg = SearchConfiguration.from_runnable_config(config)
    graph = state["reduced_graph"]

    summary = {
        "max_release": state.get("best_release", 0),
        "time_budget": cfg.time_budget,
        "agent_count": cfg.agent_count,
        "flow_valves": len(graph.flow_valves),
        "total_flow_rate": graph.total_flow_rate,
        "root_branches": state.get("branch_count", 0),
        "leaves_evaluated": state.get("leaves_evaluated", 0),
        "branches_pruned": state.get("branches_pruned", 0),
    }
    logger.info("search_reported", **summary)

    return {"summary": summary, "current_phase": "end"}
