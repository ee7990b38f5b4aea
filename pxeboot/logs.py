"""Structured logging setup for processes embedding the server store."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output at the given level.

    Args:
        level: Standard logging level name (DEBUG, INFO, WARNING, ...)
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Invalid LOG_LEVEL: {level}")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
