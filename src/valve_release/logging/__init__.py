"""Structured logging for the valve release engine."""
from valve_release.logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
