"""
Middleware for request context and logging
"""

import json
import re
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .auth.middleware import authenticate_request
from .logging import (
    bind_graphql_operation,
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger(__name__)

SENSITIVE_KEYS = {
    "password",
    "token",
    "secret",
    "auth",
    "authorization",
    "access_token",
    "refresh_token",
    "jwt",
    "session",
    "cookie",
    "credentials",
}

GRAPHQL_PATH = "/graphql"
REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Remove sensitive query parameters from logging.

    Args:
        params: Dictionary of query parameters

    Returns:
        Dictionary with sensitive parameters redacted
    """
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = value

    return sanitized


def operation_name_from_payload(payload: dict[str, Any]) -> str | None:
    """Derive a loggable operation name from a GraphQL request payload."""
    op = payload.get("operationName")
    if isinstance(op, str) and op:
        return op

    q = payload.get("query", "")
    if not isinstance(q, str) or not q:
        return None
    if "__schema" in q or "IntrospectionQuery" in q:
        return "__introspection"

    match = re.search(r"\bquery\s+(\w+)", q) or re.search(r"\bmutation\s+(\w+)", q)
    if match:
        kind = "mutation:" if q.lstrip().startswith("mutation") else ""
        return f"{kind}{match.group(1)}"

    # Anonymous operations: name them after the first root field
    match = re.search(r"^\s*(query|mutation)?\s*(\([^)]*\))?\s*\{\s*(\w+)", q)
    if match:
        kind = "mutation:" if match.group(1) == "mutation" else ""
        return f"{kind}{match.group(3)}"
    return "unnamed_operation"


async def extract_graphql_operation_name(request: Request) -> str | None:
    if request.url.path != GRAPHQL_PATH:
        return None

    if request.method == "GET":
        return operation_name_from_payload(dict(request.query_params))

    if request.method == "POST":
        try:
            body = await request.body()
            if not body:
                return None
            data = json.loads(body)
            if not isinstance(data, dict):
                return None
            return operation_name_from_payload(data)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None

    return None


def incoming_request_id(request: Request) -> str | None:
    """Reuse a caller-supplied request id when it is short and plain."""
    value = request.headers.get(REQUEST_ID_HEADER)
    if value and _REQUEST_ID_PATTERN.fullmatch(value):
        return value
    return None


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """
    Bind request id, user and GraphQL operation into the logging context.

    The Authorization header is verified here once; resolvers read the
    outcome from ``request.state``.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = bind_request_context(incoming_request_id(request))

        try:
            await authenticate_request(request)

            sanitized_params = None
            if request.query_params:
                sanitized_params = sanitize_query_params(dict(request.query_params))
                # Never log raw GraphQL payloads sent in the query string
                if request.url.path == GRAPHQL_PATH:
                    for k in ("query", "variables", "extensions"):
                        if k in sanitized_params:
                            sanitized_params[k] = "[REDACTED]"

            graphql_operation = await extract_graphql_operation_name(request)
            if graphql_operation:
                bind_graphql_operation(graphql_operation)

            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                query_params=sanitized_params,
                user_agent=request.headers.get("user-agent"),
                remote_addr=request.client.host if request.client else None,
            )

            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            logger.info("Request completed", status_code=response.status_code)
            return response

        except Exception as e:
            logger.error("Request failed", error=str(e))
            raise

        finally:
            clear_request_context()
