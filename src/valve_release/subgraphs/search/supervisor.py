"""
supervisor.py — Search subgraph entry node.

search_supervisor seeds the root SearchState and fans the root decision out
via Send(), one branch_explorer per assignment of targets to the agents. The
workers' totals are joined by the keep_max reducer on best_release.
"""

from __future__ import annotations

from typing import Literal

from langchain_core.runnables import RunnableConfig
from langgraph.types import Command, Send

from valve_release.configuration import SearchConfiguration
from valve_release.engine import SearchState, expand_branches
from valve_release.logging import get_logger
from valve_release.schemas import BranchState, ReleaseState

logger = get_logger(__name__)


async def search_supervisor(
    state: ReleaseState,
    config: RunnableConfig,
) -> Command[Literal["branch_explorer"]]:
    """
    Dispatch the root branches in parallel.

    If the root has nothing to decide (no reachable valve, or no flow valve
    at all) a single worker receives the root state itself.
    """
    cfg = SearchConfiguration.from_runnable_config(config)
    graph = state["reduced_graph"]

    root = SearchState.root(graph, cfg.time_budget, cfg.agent_count)
    children = expand_branches(root)

    if children:
        sends = [
            Send(
                "branch_explorer",
                BranchState(branch_id=i, search_state=child, assigned=True),
            )
            for i, child in enumerate(children)
        ]
    else:
        sends = [
            Send(
                "branch_explorer",
                BranchState(branch_id=0, search_state=root, assigned=False),
            )
        ]

    logger.info(
        "search_dispatched",
        branches=len(sends),
        time_budget=cfg.time_budget,
        agent_count=cfg.agent_count,
        flow_valves=len(graph.flow_valves),
    )

    return Command(
        goto=sends,
        update={"branch_count": len(sends), "current_phase": "search"},
    )
