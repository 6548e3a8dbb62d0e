"""
agents.py — Per-agent movement state.

An agent is either standing at a valve (AtValve) or walking to one
(InTunnel). advance_agent moves it by exactly one minute; arrival opens the
destination in that same minute unless it is the start valve or already open.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from valve_release.schemas import ReducedGraph


@dataclass(frozen=True, slots=True)
class AtValve:
    valve: str


@dataclass(frozen=True, slots=True)
class InTunnel:
    destination: str
    minutes_remaining: int

    def __post_init__(self) -> None:
        if self.minutes_remaining < 0:
            raise ValueError(f"minutes_remaining must be >= 0, got {self.minutes_remaining}")


Agent = Union[AtValve, InTunnel]


def advance_agent(agent: Agent, graph: ReducedGraph, opened: int) -> tuple[Agent, int]:
    """
    Move `agent` forward one minute.

    Args:
        agent:  current position or transit.
        graph:  shared reduced graph (for the valve bit).
        opened: bitmask of opened valves before this move.

    Returns:
        (new agent, new opened bitmask). The mask only changes when the agent
        arrives at an unopened flow valve.
    """
    if isinstance(agent, AtValve):
        return agent, opened

    if agent.minutes_remaining > 0:
        return InTunnel(agent.destination, agent.minutes_remaining - 1), opened

    bit = graph.bit_of.get(agent.destination, 0)  # start valve has no bit
    return AtValve(agent.destination), opened | bit


def position(agent: Agent) -> str:
    """The valve the agent stands at or is walking to."""
    if isinstance(agent, AtValve):
        return agent.valve
    return agent.destination
