"""Structured logging for Hookshot.

Log lines are rendered by structlog on top of the standard library
logging module. Every fan-out runs inside ``bound_context`` so the
event type and idempotency key of the trigger appear on each line it
produces, including lines written by observers.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import Processor

LOG_FORMATS = ("json", "text")

_configured = False


def _processors(format: str) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if format.lower() == "text":
        return [*shared, structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [*shared, structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(level: str = "INFO", format: str = "json") -> None:
    """Configure structured logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format: "json" for services, "text" for a terminal.

    Raises:
        ValueError: If format is not one of LOG_FORMATS.
    """
    global _configured

    if format.lower() not in LOG_FORMATS:
        raise ValueError(f"format must be one of {LOG_FORMATS}, got {format!r}")

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=_processors(format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, applying default configuration on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


@contextmanager
def bound_context(**kwargs: object) -> Iterator[None]:
    """Bind context variables for the duration of a block.

    Previous values of the same keys are restored on exit. Tasks created
    inside the block (such as the deliveries of one fan-out) copy the
    bound values.

    Example:
        ```python
        with bound_context(tenant="acme"):
            await client.trigger("invoice.paid", data)
        ```
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
