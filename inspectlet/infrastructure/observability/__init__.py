"""Logging facade."""

from .logging import (
    ContextualFormatter,
    configure_logging,
    current_context,
    get_logger,
    log_context,
    log_exception,
)

__all__ = [
    "ContextualFormatter",
    "configure_logging",
    "current_context",
    "get_logger",
    "log_context",
    "log_exception",
]
