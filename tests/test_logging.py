"""
test_logging.py — Tests for the structlog setup.
"""

import io
import json

import pytest

from valve_release.logging import configure_logging, get_logger


@pytest.fixture
def log_stream(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    stream = io.StringIO()
    yield stream
    configure_logging()


def test_json_event_carries_component(log_stream):
    configure_logging(stream=log_stream)
    get_logger("valve_release.engine").info("graph_reduced", flow_valves=6)

    record = json.loads(log_stream.getvalue().strip())
    assert record["event"] == "graph_reduced"
    assert record["level"] == "info"
    assert record["logger"] == "valve_release.engine"
    assert record["component"] == "engine"
    assert record["flow_valves"] == 6
    assert "timestamp" in record


def test_level_threshold_filters(log_stream):
    configure_logging(level="WARNING", stream=log_stream)
    logger = get_logger("valve_release.subgraphs.search.branch_explorer")
    logger.info("branch_explored")
    assert log_stream.getvalue() == ""
    logger.warning("branch_explored")
    assert "branch_explored" in log_stream.getvalue()


def test_module_logger_follows_reconfiguration(log_stream):
    logger = get_logger("valve_release.nodes.reporter")
    configure_logging(stream=log_stream)
    logger.info("search_reported", max_release=1707)
    assert json.loads(log_stream.getvalue())["max_release"] == 1707


def test_console_format_from_environment(log_stream, monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "console")
    configure_logging(stream=log_stream)
    get_logger("valve_release.main").error("structural_error", error="boom")

    line = log_stream.getvalue()
    assert "structural_error" in line
    assert "error=boom" in line
    with pytest.raises(json.JSONDecodeError):
        json.loads(line)
