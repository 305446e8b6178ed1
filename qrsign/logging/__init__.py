"""Structured logging for qrsign."""

from qrsign.logging.setup import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
