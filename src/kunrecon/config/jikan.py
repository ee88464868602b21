"""Jikan (MyAnimeList) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_JIKAN_URL = "https://api.jikan.moe/v4"


@dataclass(frozen=True, slots=True)
class JikanConfig:
    resilience: ResilienceConfig
    limit: int = 5


def get_jikan_config() -> JikanConfig:
    resilience = ResilienceConfig(
        name="jikan",
        base_url=DEFAULT_JIKAN_URL,
        timeout_seconds=10.0,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        cache=CacheConfig(enabled=True, backend="memory"),
    )
    return JikanConfig(resilience=resilience)
