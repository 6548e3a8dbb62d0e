"""
structlog setup for the valve release engine.

Events go to stderr so the CLI's answer on stdout stays machine-readable.
LOG_FORMAT picks the renderer ("json", the default, or "console") and
LOG_LEVEL the threshold. configure_logging() runs once at import and may be
called again (the CLI does) to switch either setting.
"""
import logging
import os
import sys
from typing import IO, Optional

import structlog

_PACKAGE = "valve_release."


def _add_component(_, __, event_dict: dict) -> dict:
    """Short component name ("engine", "subgraphs.search.supervisor") from the bound logger name."""
    name = event_dict.get("logger", "")
    if name.startswith(_PACKAGE):
        event_dict["component"] = name[len(_PACKAGE):]
    return event_dict


def configure_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    (Re)configure structlog.

    Args:
        level:  threshold name such as "DEBUG"; falls back to LOG_LEVEL, then INFO.
        fmt:    "json" or "console"; falls back to LOG_FORMAT, then json.
        stream: destination file object (default: sys.stderr).
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    threshold = getattr(logging, level_name, logging.INFO)
    fmt = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

    renderer = (
        structlog.dev.ConsoleRenderer(colors=False)
        if fmt == "console"
        else structlog.processors.JSONRenderer(sort_keys=True)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _add_component,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


configure_logging()


def get_logger(name: str):
    """Lazy logger carrying `name`; it follows later configure_logging() calls."""
    return structlog.get_logger(name, logger=name)
