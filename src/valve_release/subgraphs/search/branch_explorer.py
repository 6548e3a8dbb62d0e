"""
branch_explorer.py — Parallel branch worker node.

Receives a BranchState via Send() from the search supervisor and runs the
synchronous branch-and-bound search for that subtree in a worker thread.
Returns {"best_release": value, ...}; best_release is merged into the
graph state through the keep_max reducer.
"""

from __future__ import annotations

import asyncio

from langchain_core.runnables import RunnableConfig

from valve_release.configuration import SearchConfiguration
from valve_release.engine import SearchStats, search, search_branch
from valve_release.logging import get_logger

logger = get_logger(__name__)


async def branch_explorer(state: dict, config: RunnableConfig) -> dict:
    """
    Branch worker node. Called via Send() with a BranchState dict.

    Returns:
        {"best_release": <branch value>, "leaves_evaluated": n, "branches_pruned": n}
    """
    cfg = SearchConfiguration.from_runnable_config(config)
    stats = SearchStats()
    explore = search_branch if state.get("assigned", True) else search

    best = await asyncio.to_thread(
        explore,
        state["search_state"],
        use_upper_bound=cfg.use_upper_bound,
        max_depth=cfg.max_search_depth,
        stats=stats,
    )

    logger.debug(
        "branch_explored",
        branch_id=state.get("branch_id"),
        best_release=best,
        leaves=stats.leaves,
        pruned=stats.pruned,
    )

    return {
        "best_release": best,
        "leaves_evaluated": stats.leaves,
        "branches_pruned": stats.pruned,
    }
