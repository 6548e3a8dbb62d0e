"""
engine.py — Branch-and-bound search over valve-opening orders.

The search alternates decision points and one-minute steps:

  decision  — stationary agents are handed targets; one child per assignment
  step      — agents advance (arrivals open valves), the minute's release is
              credited, remaining time drops by one

A branch ends when time runs out, or drains once no further valve can be
opened (every remaining minute simply accrues the current release rate).

SearchState is a frozen value: every transition returns a new state, so
sibling branches never see each other's changes. The reduced graph is carried
by reference and never copied.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from itertools import permutations, product
from typing import Optional

from valve_release.agents import Agent, AtValve, InTunnel, advance_agent, position
from valve_release.errors import SearchDepthError
from valve_release.graph_reducer import check_structure
from valve_release.schemas import ReducedGraph


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchState:
    agents: tuple[Agent, ...]
    time_left: int
    opened: int = 0             # bitmask over graph.flow_valves
    release_rate: int = 0       # sum of flow rates in `opened`
    released: int = 0
    graph: ReducedGraph = field(compare=False, repr=False)

    @classmethod
    def root(
        cls, graph: ReducedGraph, time_budget: int, agent_count: int = 2
    ) -> "SearchState":
        """All agents at the start valve, nothing opened, nothing released."""
        check_structure(graph)
        return cls(
            agents=tuple(AtValve(graph.start) for _ in range(agent_count)),
            time_left=time_budget,
            graph=graph,
        )

    @property
    def opened_count(self) -> int:
        return bin(self.opened).count("1")

    def is_opened(self, valve: str) -> bool:
        return bool(self.opened & self.graph.bit_of.get(valve, 0))


@dataclass
class SearchStats:
    """Per-worker counters and the best total seen so far (the incumbent)."""
    best: int = 0
    leaves: int = 0
    pruned: int = 0

    def record_leaf(self, value: int) -> int:
        self.leaves += 1
        if value > self.best:
            self.best = value
        return value


# ── Transitions ───────────────────────────────────────────────────────────────

def step_minute(state: SearchState) -> SearchState:
    """Advance every agent, then credit the minute's release."""
    graph = state.graph
    opened = state.opened
    agents = []
    for agent in state.agents:
        agent, opened = advance_agent(agent, graph, opened)
        agents.append(agent)

    rate = state.release_rate if opened == state.opened else graph.release_rate(opened)
    return replace(
        state,
        agents=tuple(agents),
        opened=opened,
        release_rate=rate,
        released=state.released + rate,
        time_left=state.time_left - 1,
    )


def drain(state: SearchState) -> SearchState:
    """Fast-forward to the end: no more valves can open, so every minute releases the same."""
    return replace(
        state,
        released=state.released + state.time_left * state.release_rate,
        time_left=0,
    )


# ── Decision points ───────────────────────────────────────────────────────────

def _eta(state: SearchState, agent: Agent, valve: str) -> Optional[int]:
    """Minutes until `agent` could start walking towards `valve`, plus the walk."""
    graph = state.graph
    if isinstance(agent, AtValve):
        return graph.distance(agent.valve, valve)
    leg = graph.distance(agent.destination, valve)
    if leg is None:
        return None
    return agent.minutes_remaining + leg


def candidate_targets(state: SearchState) -> list[str]:
    """
    Unopened flow valves no agent occupies or is walking to, and that at
    least one agent can reach within the remaining time.
    """
    claimed = {position(agent) for agent in state.agents}
    candidates = []
    for valve in state.graph.flow_valves:
        if state.is_opened(valve) or valve in claimed:
            continue
        for agent in state.agents:
            eta = _eta(state, agent, valve)
            if eta is not None and eta <= state.time_left:
                candidates.append(valve)
                break
    return candidates


def _has_pending_opening(state: SearchState) -> bool:
    return any(
        isinstance(agent, InTunnel)
        and agent.destination in state.graph.bit_of
        and not state.is_opened(agent.destination)
        for agent in state.agents
    )


def expand_branches(
    state: SearchState, candidates: Optional[list[str]] = None
) -> list[SearchState]:
    """
    One child per way of handing targets to the stationary agents.

    Stationary agents draw ordered, pairwise distinct targets from the shared
    candidate list. A candidate only has to be reachable by some agent, so an
    agent may be sent on a trip it cannot finish in time; that valve then
    never opens. With fewer candidates than stationary agents the targets are
    shared (one candidate, two agents: both head for it).
    Returns [] when nobody is stationary or nothing is left to open.
    """
    if candidates is None:
        candidates = candidate_targets(state)
    movers = [i for i, agent in enumerate(state.agents) if isinstance(agent, AtValve)]
    if not candidates or not movers:
        return []

    if len(candidates) >= len(movers):
        assignments = permutations(candidates, len(movers))
    else:
        assignments = product(candidates, repeat=len(movers))

    children = []
    for targets in assignments:
        agents = list(state.agents)
        for index, valve in zip(movers, targets):
            agents[index] = InTunnel(valve, _trip_length(state, agents[index], valve))
        children.append(replace(state, agents=tuple(agents)))
    return children


def _trip_length(state: SearchState, agent: AtValve, valve: str) -> int:
    distance = state.graph.distance(agent.valve, valve)
    if distance is None:
        # no path: walk out the clock without arriving
        return state.time_left
    return distance


def release_upper_bound(state: SearchState) -> int:
    """
    Optimistic bound on any completion of `state`.

    Every unopened valve is assumed to open at the earliest time any agent
    could get there, with all agents serving all valves at once. Never
    below the true best completion.
    """
    graph = state.graph
    time_left = state.time_left
    bound = state.released + state.release_rate * time_left

    earliest: dict[str, int] = {}
    for agent in state.agents:
        if isinstance(agent, AtValve):
            origin, delay = agent.valve, 0
        else:
            origin, delay = agent.destination, agent.minutes_remaining + 1
            if agent.destination in graph.bit_of and not state.is_opened(agent.destination):
                earliest[origin] = min(
                    earliest.get(origin, time_left), agent.minutes_remaining
                )
        for valve, distance in graph.valves[origin].tunnels.items():
            if valve not in graph.bit_of or state.is_opened(valve):
                continue
            earliest[valve] = min(earliest.get(valve, time_left), delay + distance)

    for valve, minutes in earliest.items():
        bound += graph.valves[valve].flow_rate * max(0, time_left - minutes)
    return bound


# ── Search ────────────────────────────────────────────────────────────────────

def _explore(
    state: SearchState,
    stats: SearchStats,
    use_upper_bound: bool,
    max_depth: Optional[int],
    depth: int,
) -> int:
    if max_depth is not None and depth > max_depth:
        raise SearchDepthError(
            f"search exceeded {max_depth} decision levels with {state.time_left} minutes left"
        )

    graph = state.graph
    while True:
        if state.time_left == 0:
            return stats.record_leaf(state.released)
        if state.opened == graph.all_mask:
            return stats.record_leaf(drain(state).released)

        candidates = candidate_targets(state)
        if not candidates and not _has_pending_opening(state):
            return stats.record_leaf(drain(state).released)

        children = expand_branches(state, candidates)
        if not children:
            state = step_minute(state)
            continue

        if use_upper_bound and release_upper_bound(state) <= stats.best:
            stats.pruned += 1
            # reachable by any completion, and no better than the incumbent
            return state.released + state.release_rate * state.time_left

        return max(
            _explore(step_minute(child), stats, use_upper_bound, max_depth, depth + 1)
            for child in children
        )


def search(
    state: SearchState,
    *,
    use_upper_bound: bool = True,
    max_depth: Optional[int] = None,
    stats: Optional[SearchStats] = None,
) -> int:
    """
    Best total release reachable from a decision point.

    Args:
        state:           state whose stationary agents still need targets
                         (e.g. SearchState.root(...)).
        use_upper_bound: cut decision points whose optimistic bound cannot
                         beat the best total found so far.
        max_depth:       decision-level safety net; SearchDepthError past it.
        stats:           optional counters, updated in place.
    """
    return _explore(state, stats or SearchStats(), use_upper_bound, max_depth, 0)


def search_branch(
    branch: SearchState,
    *,
    use_upper_bound: bool = True,
    max_depth: Optional[int] = None,
    stats: Optional[SearchStats] = None,
) -> int:
    """Best total release of a child returned by expand_branches (its minute not yet stepped)."""
    return _explore(
        step_minute(branch), stats or SearchStats(), use_upper_bound, max_depth, 1
    )
