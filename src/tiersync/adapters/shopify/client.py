"""HTTP client for the Shopify Admin GraphQL API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import httpx
import pydantic

from tiersync.adapters.http_resilience import ResilientClient
from tiersync.domain.errors import TransportError

from .schema import GraphQLResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from tiersync.config.http_resilience import ResilienceConfig
    from tiersync.config.shopify import ShopifyConfig

log = getLogger(__name__)


class GraphQLClient(Protocol):
    """Opaque query/mutate RPC against the platform."""

    def graphql(
        self,
        query: str,
        variables: Mapping[str, object] | None = None,
    ) -> GraphQLResponse: ...


class ShopifyAdminClient:
    """Low-level client posting GraphQL documents to one shop.

    One event loop and one resilient client live as long as the instance, so the
    configured rate limit spans every call of an operation. Close the instance, or
    use it as a context manager, when the operation is done.
    """

    def __init__(
        self,
        *,
        config: ShopifyConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner = asyncio.Runner()
        self._client: ResilientClient | None = None

    def __enter__(self) -> ShopifyAdminClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._runner.run(self._client.aclose())
            self._client = None
        self._runner.close()

    def graphql(
        self,
        query: str,
        variables: Mapping[str, object] | None = None,
    ) -> GraphQLResponse:
        return self._runner.run(self._graphql_async(query, variables))

    async def _graphql_async(
        self,
        query: str,
        variables: Mapping[str, object] | None,
    ) -> GraphQLResponse:
        body: dict[str, object] = {"query": query}
        if variables:
            body["variables"] = dict(variables)

        if self._client is None:
            self._client = self._client_factory(self._resilience)
        try:
            response = await self._client.post(self._config.graphql_url, json=body)
        except httpx.HTTPError as exc:
            log.error("Shopify request to %s failed: %s", self._config.shop, exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        return _parse_response(response)


def _parse_response(response: httpx.Response) -> GraphQLResponse:
    if response.is_error:
        log.error("Shopify answered HTTP %s: %s", response.status_code, response.text[:200])
        raise TransportError(
            f"HTTP {response.status_code} {response.reason_phrase}".strip(),
            status_code=response.status_code,
        )
    try:
        return GraphQLResponse.model_validate(response.json())
    except (ValueError, pydantic.ValidationError) as exc:
        raise TransportError(
            "unexpected response payload", status_code=response.status_code
        ) from exc
