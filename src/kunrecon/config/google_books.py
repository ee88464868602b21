"""Google Books configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, ResilienceConfig, RetryPolicy

DEFAULT_GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1"
MAX_RESULTS_PER_PAGE = 40


def _is_cacheable_payload(payload: object) -> bool:
    return isinstance(payload, dict) and "error" not in payload


@dataclass(frozen=True, slots=True)
class GoogleBooksConfig:
    resilience: ResilienceConfig
    api_key: str | None = None
    language: str = "fr"
    max_results: int = 20


def get_google_books_config() -> GoogleBooksConfig:
    resilience = ResilienceConfig(
        name="google_books",
        base_url=DEFAULT_GOOGLE_BOOKS_URL,
        timeout_seconds=8.0,
        retry=RetryPolicy(total=2),
        cache=CacheConfig(enabled=True, backend="memory", payload_filter=_is_cacheable_payload),
    )
    return GoogleBooksConfig(
        resilience=resilience,
        api_key=optional_env_var("GOOGLE_BOOKS_API_KEY"),
        language=optional_env_var("GOOGLE_BOOKS_LANGUAGE") or "fr",
    )
