"""Logging utilities for the Inspectlet client.

Every module obtains its logger through :func:`get_logger`. Fields bound
with :func:`log_context` are appended to each message emitted inside the
block, so the lines produced by one login/request/logout cycle can be told
apart from the next one.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator


# ---------------------------------------------------------------------------
# Context variables for structured logging
# ---------------------------------------------------------------------------

_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "inspectlet_log_context", default={})


def current_context() -> dict[str, Any]:
    """Return a copy of the fields currently bound with :func:`log_context`."""
    return dict(_log_context.get())


class ContextualFormatter(logging.Formatter):
    """Formatter that appends context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        ctx = _log_context.get()
        if ctx:
            ctx_str = " ".join(f"{k}={v}" for k, v in ctx.items())
            formatted = f"{formatted} [{ctx_str}]"
        return formatted


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Temporarily add context fields to all log messages.

    Usage::

        with log_context(path="/dashboard", method="GET"):
            logger.info("Logging in")  # message includes context

    Fields are merged with any existing context and restored on exit.
    """
    current = _log_context.get()
    merged = {**current, **fields}
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_configured = False

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    level: int = logging.INFO,
    third_party_level: int = logging.WARNING,
) -> None:
    """Configure logging for applications embedding the client.

    The library never calls this itself; it is offered to scripts that want
    the contextual format without wiring handlers by hand.

    Args:
        level: Log level for the root logger (default INFO).
        third_party_level: Log level for ``requests``/``urllib3`` (default WARNING).
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextualFormatter(DEFAULT_FORMAT))
    root.addHandler(handler)

    # Quieten noisy third-party loggers
    for name in ("requests", "urllib3", "charset_normalizer"):
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name.

    A :class:`logging.NullHandler` is attached to the package logger so the
    library stays silent unless the embedding application configures logging.
    """
    logger = logging.getLogger(name)
    package = logging.getLogger("inspectlet")
    if not any(isinstance(h, logging.NullHandler) for h in package.handlers):
        package.addHandler(logging.NullHandler())
    return logger


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log an exception with context fields.

    Args:
        logger: Logger instance.
        message: Human-readable message describing the error.
        exc: The exception that was raised.
        **context: Additional context fields to include.
    """
    with log_context(**context):
        logger.warning(f"{message}: {exc}", exc_info=exc)
