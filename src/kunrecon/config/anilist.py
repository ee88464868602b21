"""AniList configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_ANILIST_URL = "https://graphql.anilist.co"
DEFAULT_USER_AGENT = "kunrecon/1.0 (catalog reconciliation)"


@dataclass(frozen=True, slots=True)
class AniListConfig:
    resilience: ResilienceConfig
    per_page: int = 5


def get_anilist_config() -> AniListConfig:
    user_agent = optional_env_var("KUNRECON_USER_AGENT") or DEFAULT_USER_AGENT
    resilience = ResilienceConfig(
        name="anilist",
        base_url=DEFAULT_ANILIST_URL,
        timeout_seconds=10.0,
        # AniList runs a degraded limit of 30 requests per minute.
        ratelimit=RateLimit(max_calls=30, per_seconds=60.0),
        retry=RetryPolicy(total=2),
        cache=None,
        default_headers={
            "User-Agent": user_agent,
            "Accept": "application/json",
            "Content-Type": "application/json",
        },
    )
    return AniListConfig(resilience=resilience)
