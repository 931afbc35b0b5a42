"""
Compiler Logging
structlog events for parse, validate and build steps, tagged with the app,
form and file being compiled.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _stdout_handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _processors(json_logs: bool) -> list[Any]:
    """Processor chain; compile context bound by LogContext is merged first."""
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Route compiler events to stdout.

    Safe to call again: the root handler is replaced, so a test or CLI can
    switch between console and JSON output at any time.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_logs: Emit one JSON object per event instead of console lines
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[_stdout_handler(json_logs)],
        force=True,
    )
    structlog.configure(
        processors=_processors(json_logs),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger for a compiler module (pass __name__)."""
    return structlog.get_logger(name)


class LogContext:
    """
    Tag every event in scope with compile context, e.g. ``app`` or ``form``.

    Scopes nest: a key rebound by an inner scope gets its outer value back
    when the inner scope exits.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self.previous: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        bound = structlog.contextvars.get_contextvars()
        self.previous = {k: bound[k] for k in self.context if k in bound}
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context.keys())
        if self.previous:
            structlog.contextvars.bind_contextvars(**self.previous)
