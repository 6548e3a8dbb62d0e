from __future__ import annotations

import operator
from functools import cached_property
from typing import TYPE_CHECKING, Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict

if TYPE_CHECKING:
    from valve_release.engine import SearchState


# ── Reducers ──────────────────────────────────────────────────────────────────

def keep_max(a: int, b: int) -> int:
    """Reducer: keep the larger of two release totals.
    Used for best_release so parallel Send() branch workers join with a
    maximum regardless of the order they finish in."""
    return max(a, b)


# ── Graph Model ───────────────────────────────────────────────────────────────

class RawValve(BaseModel):
    """One parsed valve record: id, flow rate and direct tunnels."""
    model_config = ConfigDict(frozen=True)

    valve: str = Field(min_length=1)
    flow_rate: int = Field(ge=0)
    tunnels: tuple[str, ...] = Field(default=())


class ReducedValve(BaseModel):
    """
    A valve kept by the reducer (positive flow, or the start valve).

    `tunnels` maps every other kept valve to the shortest travel time in
    minutes. A valve missing from the map is unreachable from here.
    """
    model_config = ConfigDict(frozen=True)

    valve: str
    flow_rate: int = Field(ge=0)
    tunnels: dict[str, int] = Field(default_factory=dict)


class ReducedGraph(BaseModel):
    """
    Flow-producing valves plus the start valve, with all-pairs travel times.

    Built once by graph_reducer.reduce_graph and shared read-only by every
    search branch. Flow valves are numbered in sorted order so the opened set
    can be held as an int bitmask.
    """
    model_config = ConfigDict(frozen=True)

    start: str
    valves: dict[str, ReducedValve]

    @cached_property
    def flow_valves(self) -> tuple[str, ...]:
        return tuple(sorted(v for v in self.valves if v != self.start))

    @cached_property
    def bit_of(self) -> dict[str, int]:
        return {valve: 1 << i for i, valve in enumerate(self.flow_valves)}

    @cached_property
    def all_mask(self) -> int:
        return (1 << len(self.flow_valves)) - 1

    @cached_property
    def total_flow_rate(self) -> int:
        return sum(self.valves[v].flow_rate for v in self.flow_valves)

    def distance(self, origin: str, target: str) -> Optional[int]:
        """Travel time from origin to target, or None when unreachable."""
        return self.valves[origin].tunnels.get(target)

    def release_rate(self, opened: int) -> int:
        """Per-minute release of every valve in the `opened` bitmask."""
        return sum(
            self.valves[valve].flow_rate
            for valve in self.flow_valves
            if opened & self.bit_of[valve]
        )

    def opened_valves(self, opened: int) -> list[str]:
        return [v for v in self.flow_valves if opened & self.bit_of[v]]


# ── Graph State ───────────────────────────────────────────────────────────────

class ReleaseState(TypedDict, total=False):
    """
    Full state for the release-maximisation graph.

    best_release is Annotated with keep_max so parallel branch workers each
    report their own branch value and the channel holds the maximum.
    """

    # ── Input ──────────────────────────────────────────────────────────────────
    puzzle_text: str
    valves: list[Any]                               # RawValve or plain dicts

    # ── Graph reduction ────────────────────────────────────────────────────────
    reduced_graph: ReducedGraph

    # ── Search (fan-in) ────────────────────────────────────────────────────────
    branch_count: int                               # root branches dispatched
    best_release: Annotated[int, keep_max]
    leaves_evaluated: Annotated[int, operator.add]
    branches_pruned: Annotated[int, operator.add]

    # ── Output ─────────────────────────────────────────────────────────────────
    summary: dict

    # ── Routing ────────────────────────────────────────────────────────────────
    current_phase: Literal["init", "search", "end"]


class ReleaseInput(TypedDict, total=False):
    """What the graph caller passes in: either raw puzzle text or valve records."""
    puzzle_text: str
    valves: list[Any]


class BranchState(TypedDict):
    """Payload of a Send() to branch_explorer — not graph state."""
    branch_id: int
    search_state: SearchState
    assigned: bool              # True when the branch's targets were already assigned


__all__ = [
    "keep_max",
    "RawValve",
    "ReducedValve",
    "ReducedGraph",
    "ReleaseState",
    "ReleaseInput",
    "BranchState",
]
