"""Structlog configuration for qrsign."""

import logging
import sys

import structlog

from qrsign.config import ValidatorConfig, LogFormat


def configure_logging(config: ValidatorConfig | None = None) -> None:
    """
    Configure structlog with appropriate processors and output format.

    Args:
        config: ValidatorConfig instance, uses defaults if None
    """
    if config is None:
        config = ValidatorConfig()

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if config.log_format == LogFormat.JSON:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ])

    # Logs go to whatever stderr is current at call time, stdout is left to command output
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a configured structlog logger.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog BoundLogger
    """
    # Initial values keep the proxy lazy, so module-level loggers pick up
    # configuration applied after import
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
