import logging
from typing import List
from langgraph.graph import StateGraph, START, END
from .state import State
from .nodes import (
    decompile_node,
    analyze_binary_node,
)

log = logging.getLogger("flows.graph")

def route_branches(state: State) -> List[str]:
    """Fan out to every branch whose input is present; both run in the same step."""
    branches = []
    if state.get("obfuscated_code"):
        branches.append("decompile")
    if state.get("binary_data_uri"):
        branches.append("analyze_binary")
    log.debug("route_branches -> %s", branches)
    return branches

def build_graph():
    """Builds the combined-analysis graph"""
    g = StateGraph(State)

    # Nodes
    g.add_node("decompile", decompile_node)
    g.add_node("analyze_binary", analyze_binary_node)

    # Entry
    g.add_conditional_edges(START, route_branches, ["decompile", "analyze_binary"])

    # Edges
    g.add_edge("decompile", END)
    g.add_edge("analyze_binary", END)

    return g.compile()
