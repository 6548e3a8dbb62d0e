"""
test_parsing.py — Unit tests for the puzzle-line parser.
"""

import pytest

from valve_release.errors import ValveParseError
from valve_release.parsing import parse_valve_line, parse_valves


def test_parses_plural_line():
    raw = parse_valve_line("Valve AA has flow rate=0; tunnels lead to valves DD, II, BB")
    assert raw.valve == "AA"
    assert raw.flow_rate == 0
    assert raw.tunnels == ("DD", "II", "BB")


def test_parses_singular_line():
    raw = parse_valve_line("Valve HH has flow rate=22; tunnel leads to valve GG")
    assert raw.valve == "HH"
    assert raw.flow_rate == 22
    assert raw.tunnels == ("GG",)


def test_parse_valves_keeps_order_and_skips_blanks(sample_text):
    valves = parse_valves("\n" + sample_text + "\n\n")
    assert [v.valve for v in valves] == [
        "AA", "BB", "CC", "DD", "EE", "FF", "GG", "HH", "II", "JJ",
    ]
    assert sum(v.flow_rate for v in valves) == 81


def test_bad_line_reports_line_number():
    text = (
        "Valve AA has flow rate=0; tunnels lead to valves BB\n"
        "Valve BB has a flow rate of 3\n"
    )
    with pytest.raises(ValveParseError, match="line 2"):
        parse_valves(text)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_valve_line("nonsense")
