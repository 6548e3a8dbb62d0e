"""
main_graph.py — Top-level compiled graph for the valve release engine.

Graph flow:
  START
    → graph_loader      (parse + reduce the valve network)
    → search_subgraph   (compiled search subgraph; parallel branch fan-out)
    → report_node       (summary of the best release found)
    → END

Exported `graph` at module level.
"""

from __future__ import annotations

from dotenv import load_dotenv
from langgraph.graph import END, START, StateGraph

from valve_release.nodes.graph_loader import graph_loader
from valve_release.nodes.reporter import report_node
from valve_release.schemas import ReleaseInput, ReleaseState
from valve_release.subgraphs.search.search_graph import search_graph

load_dotenv()


def build_graph(checkpointer=None):
    """
    Build and compile the main graph.

    Args:
        checkpointer: optional LangGraph checkpointer. The search is a single
                      pass with no interrupts, so none is needed by default.

    Returns:
        CompiledStateGraph ready for invocation.
    """
    builder = StateGraph(ReleaseState, input_schema=ReleaseInput)

    builder.add_node("graph_loader", graph_loader)
    builder.add_node("search_subgraph", search_graph)   # compiled subgraph
    builder.add_node("report_node", report_node)

    builder.add_edge(START, "graph_loader")
    builder.add_edge("graph_loader", "search_subgraph")
    builder.add_edge("search_subgraph", "report_node")
    builder.add_edge("report_node", END)

    return builder.compile(checkpointer=checkpointer)


graph = build_graph()
