"""
GraphQL client for the Quill API.

Used by the integration tests and by scripts talking to a running server.
An operation "rejects" when the response carries GraphQL errors, in which
case GraphQLResponseError is raised.
"""

from typing import Any

import httpx

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)


class GraphQLResponseError(Exception):
    """Raised when a GraphQL response contains errors."""

    def __init__(self, errors: list[dict[str, Any]], data: dict[str, Any] | None = None):
        self.errors = errors
        self.data = data
        messages = [str(error.get("message", error)) for error in errors]
        super().__init__("; ".join(messages) or "GraphQL request failed")

    @property
    def messages(self) -> list[str]:
        return [str(error.get("message", "")) for error in self.errors]


class GraphQLClient:
    """Minimal async GraphQL-over-HTTP client."""

    def __init__(
        self,
        endpoint: str,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.endpoint = endpoint
        self.token = token

        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(headers=headers, transport=transport, timeout=timeout)

    async def execute(
        self,
        document: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> dict[str, Any]:
        """Send a GraphQL document and return the ``data`` part of the response.

        Raises:
            httpx.HTTPStatusError: If the server answered with a non-2xx status
                and no GraphQL errors
            GraphQLResponseError: If the response contains GraphQL errors
        """
        payload: dict[str, Any] = {"query": document}
        if variables is not None:
            payload["variables"] = variables
        if operation_name is not None:
            payload["operationName"] = operation_name

        response = await self._client.post(self.endpoint, json=payload)

        body: dict[str, Any] | None = None
        if response.headers.get("content-type", "").startswith("application/json"):
            body = response.json()

        if body and body.get("errors"):
            logger.debug(
                "GraphQL operation rejected",
                endpoint=self.endpoint,
                status_code=response.status_code,
                errors=[e.get("message") for e in body["errors"]],
            )
            raise GraphQLResponseError(body["errors"], body.get("data"))

        response.raise_for_status()

        if body is None:
            raise GraphQLResponseError([{"message": "Response is not JSON"}])
        return body.get("data") or {}

    async def query(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        return await self.execute(query, variables)

    async def mutate(
        self, mutation: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        return await self.execute(mutation, variables)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def get_client(
    token: str | None = None,
    *,
    endpoint: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GraphQLClient:
    """
    Build a client for the GraphQL endpoint.

    Args:
        token: Session token sent as ``Authorization: Bearer <token>``
        endpoint: GraphQL URL, defaults to ``settings.graphql_endpoint``
        transport: Custom httpx transport, e.g. ``ASGITransport`` in tests
    """
    return GraphQLClient(endpoint or settings.graphql_endpoint, token=token, transport=transport)
