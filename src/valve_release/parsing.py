"""
parsing.py — Puzzle-text parser for valve records.

Accepts lines of the form

    Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
    Valve HH has flow rate=22; tunnel leads to valve GG

and produces RawValve records in input order. Referential integrity is not
checked here; graph_reducer.reduce_graph rejects dangling tunnels.
"""

from __future__ import annotations

import re

from valve_release.errors import ValveParseError
from valve_release.schemas import RawValve

LINE_REGEX = re.compile(
    r"^Valve (\w+) has flow rate=(\d+); "
    r"tunnels? leads? to valves? (\w+(?:, \w+)*)$"
)


def parse_valve_line(line: str, line_number: int | None = None) -> RawValve:
    match = LINE_REGEX.match(line.strip())
    if match is None:
        where = f"line {line_number}: " if line_number is not None else ""
        raise ValveParseError(f"{where}not a valve record: {line.strip()!r}")
    valve, flow_rate, tunnels = match.groups()
    return RawValve(
        valve=valve,
        flow_rate=int(flow_rate),
        tunnels=tuple(tunnels.split(", ")),
    )


def parse_valves(text: str) -> list[RawValve]:
    """Parse every non-blank line of `text`."""
    return [
        parse_valve_line(line, line_number)
        for line_number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
