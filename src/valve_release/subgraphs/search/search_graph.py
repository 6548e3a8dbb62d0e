"""
search_graph.py — Compiled search subgraph.

Graph flow:
  START
    → search_supervisor     (seeds the root state, fans out via Send())
    → [branch_explorer × N] (parallel branch-and-bound workers)
    → END                   (best_release already joined by keep_max)

Exported as `search_graph` for import by main_graph.py.
"""

from langgraph.graph import END, START, StateGraph

from valve_release.schemas import ReleaseState

from .branch_explorer import branch_explorer
from .supervisor import search_supervisor

_builder = StateGraph(ReleaseState)

_builder.add_node("search_supervisor", search_supervisor)
_builder.add_node("branch_explorer", branch_explorer)

_builder.add_edge(START, "search_supervisor")
# search_supervisor uses Command(goto=[Send(...)]) — no static edge needed to branch_explorer

_builder.add_edge("branch_explorer", END)

search_graph = _builder.compile()
