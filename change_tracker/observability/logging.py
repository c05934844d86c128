"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol, TextIO

import structlog


class Logger(Protocol):
    """Logging capability injected into the tracker.

    Satisfied by structlog bound loggers and by ``unittest.mock.MagicMock``.
    """

    def debug(self, event: str, **kw: Any) -> Any: ...

    def info(self, event: str, **kw: Any) -> Any: ...

    def warning(self, event: str, **kw: Any) -> Any: ...

    def error(self, event: str, **kw: Any) -> Any: ...


def setup_logging(level: str = "info", fmt: str = "json", stream: TextIO | None = None) -> None:
    """Configure structlog to write one event per line to *stream* (stderr by default).

    ``fmt="json"`` renders JSON lines for pipeline logs; ``fmt="console"``
    renders the human-readable key/value format used at a terminal.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=False) if fmt == "console" else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name and any extra *context*."""
    return structlog.get_logger(component=component, **context)  # type: ignore[return-value]
