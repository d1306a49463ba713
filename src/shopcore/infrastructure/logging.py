"""structlog setup, called once per CLI invocation.

Modules log through ``structlog.get_logger(__name__)`` with an event name
and key-value context. structlog renders the event and hands it to the
stdlib root logger, whose single handler writes to stderr so command
output on stdout stays clean.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_stdlib_logging(level: str) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)


def setup_structlog(fmt: str) -> None:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.contextvars.merge_contextvars,
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure all logging for the application."""
    level = level.upper()
    setup_stdlib_logging(level)
    setup_structlog(fmt)
