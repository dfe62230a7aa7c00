"""Structured logging for anchorscore."""

from anchorscore.observability.logging import (
    configure_logging,
    log_metrics_summary,
    session_context,
)


__all__ = [
    "configure_logging",
    "log_metrics_summary",
    "session_context",
]
