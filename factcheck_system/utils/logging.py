"""Structured logging utilities using structlog for pipeline components and request tracing."""

import sys
import uuid
from typing import Any, Optional
import structlog
from structlog.processors import JSONRenderer
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

from factcheck_system.config.settings import settings


def configure_structured_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structlog processors and renderer for pipeline stage events.

    Stage events are snake_case keys (claims_extracted, search_session_failed)
    carrying a bound component name. Request-scoped values such as request_id
    are merged in from contextvars, so every stage line of one request can be
    correlated.

    Args:
        level: Optional level override; defaults to LOG_LEVEL
        log_format: Optional format override; defaults to LOG_FORMAT
    """
    level = (level or settings.log_level).upper()
    use_console = (log_format or settings.log_format).lower() == "console"

    processors = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_console and sys.stderr.isatty():
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(JSONRenderer(ensure_ascii=False))

    # stdout carries CLI results only
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_request_id() -> str:
    """Generate a request ID used to correlate all stage logs of one request."""
    return str(uuid.uuid4())


def bind_request_context(request_id: Optional[str] = None, **context: Any) -> str:
    """
    Bind a request ID (and extra values) to the current task's log context.

    Returns:
        The request ID that was bound.
    """
    request_id = request_id or get_request_id()
    clear_contextvars()
    bind_contextvars(request_id=request_id, **context)
    return request_id


configure_structured_logging()

__all__ = [
    "get_request_id",
    "bind_request_context",
    "configure_structured_logging",
]
