"""Retry, rate-limit and cache settings of the metadata clients."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import httpx
from httpx_retries import Retry

if TYPE_CHECKING:
    from collections.abc import Mapping

# Decides from a decoded JSON payload whether a response may be cached.
PayloadFilter = Callable[[object], bool]

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retries on 429/5xx and transport errors with exponential backoff.

    ``total`` counts retries, not attempts; see :meth:`attempts`.
    """

    total: int = 2
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    backoff_jitter: float = 1.0
    respect_retry_after_header: bool = True
    # AniList queries are POSTs, so POST is retried like GET.
    methods: frozenset[str] = frozenset({"GET", "HEAD", "POST"})
    statuses: frozenset[int] = RETRYABLE_STATUSES
    exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )

    @classmethod
    def attempts(cls, count: int, *, backoff_factor: float = 1.0) -> RetryPolicy:
        """Policy allowing ``count`` attempts in total (the first try plus retries)."""

        return cls(total=max(count - 1, 0), backoff_factor=backoff_factor)

    def build(self) -> Retry:
        return Retry(
            total=self.total,
            backoff_factor=self.backoff_factor,
            max_backoff_wait=self.max_backoff_wait,
            backoff_jitter=self.backoff_jitter,
            respect_retry_after_header=self.respect_retry_after_header,
            allowed_methods=sorted(self.methods),
            status_forcelist=sorted(self.statuses),
            retry_on_exceptions=self.exceptions,
        )


@dataclass(slots=True, frozen=True)
class RateLimit:
    """At most ``max_calls`` requests per ``per_seconds`` window."""

    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    ttl_seconds: float | None = None
    # Scraped sites send no usable caching headers: keep any 2xx page for the TTL.
    cache_any_success: bool = False
    payload_filter: PayloadFilter | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Everything a ``ResilientClient`` needs to talk to one provider."""

    name: str
    base_url: str | None = None
    # Per httpx phase, and again as a wall-clock bound on each call, retries included.
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None
    follow_redirects: bool = False
