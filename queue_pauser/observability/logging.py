"""
Structured logging setup using structlog.

Every process logs as one role (``api`` or ``worker``). The role, the
service name and the pid are bound once at startup, so records from
different processes of a fleet can be told apart when a pause is traced
from the operator call to every worker that applied it.
"""

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

import structlog
from opentelemetry import trace

from queue_pauser.config import get_settings

# Loggers that are chatty at INFO and say nothing about pause state
QUIET_LOGGERS = ("uvicorn.access", "redis", "httpx")

# Record fields holding queue lists, rendered as one comma-separated string
QUEUE_LIST_FIELDS = ("queues", "paused")


def add_trace_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add the current trace and span ids, if a span is recording."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def flatten_queue_lists(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render queue name collections as ``a,b,c`` so they stay greppable."""
    for field in QUEUE_LIST_FIELDS:
        value = event_dict.get(field)
        if isinstance(value, (set, frozenset)):
            value = sorted(value)
        if isinstance(value, Sequence) and not isinstance(value, str):
            event_dict[field] = ",".join(str(item) for item in value)
    return event_dict


def setup_logging(role: str, log_level: str | None = None, **context: Any) -> None:
    """
    Configure structured logging for a process.

    Module loggers are plain ``logging.getLogger(__name__)`` loggers; their
    records are rendered through structlog so that ``extra`` fields land in
    the JSON (or console) output next to the message.

    Args:
        role: Process role, ``api`` or ``worker``.
        log_level: Overrides the configured level.
        **context: Further fields bound to every record, e.g. ``worker_id``.
    """
    settings = get_settings()

    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_trace_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
        flatten_queue_lists,
    ]

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    clear_context()
    bind_context(
        role=role,
        service=settings.otel_service_name,
        pid=os.getpid(),
        **context,
    )


def bind_context(**kwargs: Any) -> None:
    """Bind fields to all subsequent log records of this process."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
