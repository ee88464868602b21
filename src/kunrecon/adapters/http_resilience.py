"""Resilient async HTTP client shared by every metadata source.

Layering, outermost first: a wall-clock deadline over the whole call, the optional
hishel cache, the retry transport, then the client-side rate limiter in front of
the network transport. Cache hits take no limiter slot; every attempt that
reaches the network takes one.
"""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import RetryTransport

from kunrecon.config.http_resilience import (
    CacheConfig,
    PayloadFilter,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)
from kunrecon.config.storage import get_http_cache_path

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
]

log = getLogger(__name__)


class ResilientClient:
    """``httpx.AsyncClient`` with retries, client-side rate limiting and caching.

    One instance per provider and per event loop; it is meant to live as long as
    the fetcher that owns it so the limiter and the cache span its calls.
    ``transport`` replaces the network transport underneath the retry layer,
    which is how tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        network = transport or httpx.AsyncHTTPTransport()
        limiter = _build_limiter(config.ratelimit)
        if limiter is not None:
            network = _RateLimitedTransport(network, limiter)

        options: dict[str, Any] = {
            "timeout": config.timeout_seconds,
            "transport": RetryTransport(transport=network, retry=config.retry.build()),
            "follow_redirects": config.follow_redirects,
        }
        if config.base_url is not None:
            options["base_url"] = config.base_url
        if config.default_headers:
            options["headers"] = dict(config.default_headers)

        storage, policy = _build_cache_components(config.cache)
        if storage is None:
            self._client = httpx.AsyncClient(**options)
        else:
            self._client = AsyncCacheClient(**options, storage=storage, policy=policy)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str | int] | None = None,
        json: object = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request, retries included, within ``timeout_seconds`` of wall-clock time.

        httpx applies its own timeout per phase, so a server trickling bytes would
        otherwise hold the call open. Expiry raises ``httpx.TimeoutException``.
        """

        deadline = self.config.timeout_seconds
        try:
            async with asyncio.timeout(deadline):
                response = await self._client.request(
                    method, url, params=params, json=json, headers=headers
                )
        except TimeoutError as exc:
            msg = f"{self.config.name} {method} {url} exceeded {deadline}s"
            raise httpx.TimeoutException(msg) from exc
        log.debug(
            "%s %s %s -> %s", self.config.name, method, response.request.url, response.status_code
        )
        return response

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, str | int] | None = None,
    ) -> httpx.Response:
        return await self.request("GET", url, params=params)

    async def post(self, url: str, *, json: object = None) -> httpx.Response:
        return await self.request("POST", url, json=json)


def _build_limiter(ratelimit: RateLimit | None) -> AsyncLimiter | None:
    if ratelimit is None:
        return None
    return AsyncLimiter(ratelimit.max_calls, ratelimit.per_seconds)


class _RateLimitedTransport(httpx.AsyncBaseTransport):
    """Takes a limiter slot for every request that reaches the network."""

    def __init__(self, transport: httpx.AsyncBaseTransport, limiter: AsyncLimiter) -> None:
        self._transport = transport
        self._limiter = limiter

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        async with self._limiter:
            return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        await self._transport.aclose()


class _AdmissionFilter(BaseFilter[HishelCacheResponse]):
    """Stores 2xx responses whatever their caching headers say.

    With a ``payload_filter`` the JSON body must also pass it; bodies that are not
    JSON (scraped HTML) are admitted on status alone.
    """

    def __init__(self, payload_filter: PayloadFilter | None) -> None:
        self._payload_filter = payload_filter

    def needs_body(self) -> bool:
        return self._payload_filter is not None

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:
        if not 200 <= item.status_code < 300:
            return False
        if self._payload_filter is None or body is None:
            return True
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return True
        return bool(self._payload_filter(payload))


def _build_cache_components(
    config: CacheConfig | None,
) -> tuple[AsyncSqliteStorage | None, FilterPolicy | None]:
    if config is None or not config.enabled:
        return None, None

    if config.backend == "sqlite":
        database_path = config.sqlite_path or str(get_http_cache_path())
    elif config.backend == "memory":
        database_path = ":memory:"
    else:
        msg = f"Unsupported cache backend: {config.backend}"
        raise ValueError(msg)

    storage = AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)
    if not (config.cache_any_success or config.payload_filter is not None):
        return storage, None
    return storage, FilterPolicy(response_filters=[_AdmissionFilter(config.payload_filter)])
