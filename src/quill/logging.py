"""
Structured logging for Quill.

Request-scoped fields (``request_id``, ``user_id``, ``graphql_operation``)
are kept in structlog's context variables and merged into every line logged
while the request is being served.
"""

import logging
import sys
from typing import Any
from uuid import uuid4

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Route structlog through the standard library and pick a renderer.

    Args:
        debug: Console output at DEBUG level when True, JSON lines otherwise
        level: Explicit level name, ignored when ``debug`` is set
    """
    if debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)

    renderer: Any = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def new_request_id() -> str:
    return uuid4().hex


def bind_request_context(request_id: str | None = None, user_id: str | None = None) -> str:
    """Start a fresh logging context for a request and return its id."""
    clear_contextvars()
    request_id = request_id or new_request_id()
    bind_contextvars(request_id=request_id)
    if user_id is not None:
        bind_contextvars(user_id=user_id)
    return request_id


def bind_user_id(user_id: str) -> None:
    bind_contextvars(user_id=user_id)


def bind_graphql_operation(operation: str) -> None:
    bind_contextvars(graphql_operation=operation)


def clear_request_context() -> None:
    clear_contextvars()


def get_request_id() -> str | None:
    return get_contextvars().get("request_id")


def get_user_id() -> str | None:
    return get_contextvars().get("user_id")
