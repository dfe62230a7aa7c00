"""structlog setup shared by the command line and the library."""

import logging
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import TextIO

import structlog


def configure_logging(
    level: int = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Route structlog events to a stream.

    Events carry the bound context (session_id), their level and an ISO
    timestamp, rendered as one JSON object per line or as console text.

    Args:
        level: Lowest level emitted.
        output: Destination stream; the current sys.stderr when omitted.
        json_format: JSON lines instead of console text.
    """
    stream = output if output is not None else sys.stderr
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer(colors=stream.isatty())
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )


@contextmanager
def session_context(session_id: str) -> Iterator[None]:
    """Tag every event logged inside the block with session_id."""
    with structlog.contextvars.bound_contextvars(session_id=session_id):
        yield


def log_metrics_summary(**groups: Mapping[str, object]) -> None:
    """Emit one metrics_summary event with a field per metrics group.

    Args:
        groups: Metric snapshots keyed by component, e.g. fetch=..., interpolation=...
    """
    structlog.get_logger().info(
        "metrics_summary",
        **{name: dict(values) for name, values in groups.items()},
    )
