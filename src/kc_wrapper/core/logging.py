"""Structured logging for kc_wrapper.

The library only emits events through `get_logger`. Events go to the stdlib
logger of the emitting module, so they stay silent under stdlib's default
`WARNING` threshold until an application (or the `kc-wrapper` CLI) calls
`configure_logging` to choose level and output.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

PACKAGE_LOGGER = "kc_wrapper"


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the logger name, falling back to the package name."""
    event_dict["logger"] = getattr(logger, "name", None) or PACKAGE_LOGGER
    return event_dict


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """
    Configure structlog for console (``fmt="console"``) or JSON output.

    Args:
        level: Standard logging level name, e.g. ``"DEBUG"``.
        fmt: ``"console"`` or ``"json"``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False,
            exception_formatter=structlog.dev.plain_traceback,
        )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # stderr keeps stdout free for the CLI's JSON summary
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger bound to the stdlib logger ``name`` (defaults to ``kc_wrapper``)."""
    return structlog.wrap_logger(logging.getLogger(name or PACKAGE_LOGGER))
