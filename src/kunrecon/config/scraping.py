"""Configuration for the HTML-scraped sources (Nautiljon, Manga-News)."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

NAUTILJON_BASE_URL: Final[str] = "https://www.nautiljon.com"
MANGA_NEWS_BASE_URL: Final[str] = "https://www.manga-news.com"

SCRAPE_CACHE_TTL_SECONDS: Final[float] = 600.0
SCRAPE_TIMEOUT_SECONDS: Final[float] = 30.0
SCRAPE_MAX_ATTEMPTS: Final[int] = 3

BROWSER_HEADERS: Final = MappingProxyType(
    {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7",
    }
)


@dataclass(frozen=True, slots=True)
class ScraperConfig:
    resilience: ResilienceConfig


def scraper_resilience(name: str, *, base_url: str, min_delay_seconds: float) -> ResilienceConfig:
    """Resilience settings shared by the scraped sources.

    One request per ``min_delay_seconds``, three attempts with a growing delay on
    429/5xx, and a short-lived in-memory page cache.
    """

    return ResilienceConfig(
        name=name,
        base_url=base_url,
        timeout_seconds=SCRAPE_TIMEOUT_SECONDS,
        retry=RetryPolicy.attempts(SCRAPE_MAX_ATTEMPTS, backoff_factor=2.0),
        ratelimit=RateLimit(max_calls=1, per_seconds=min_delay_seconds),
        cache=CacheConfig(
            enabled=True,
            backend="memory",
            ttl_seconds=SCRAPE_CACHE_TTL_SECONDS,
            cache_any_success=True,
        ),
        default_headers=BROWSER_HEADERS,
        follow_redirects=True,
    )


def get_nautiljon_config() -> ScraperConfig:
    return ScraperConfig(
        resilience=scraper_resilience(
            "nautiljon", base_url=NAUTILJON_BASE_URL, min_delay_seconds=1.5
        )
    )


def get_manga_news_config() -> ScraperConfig:
    return ScraperConfig(
        resilience=scraper_resilience(
            "manga_news", base_url=MANGA_NEWS_BASE_URL, min_delay_seconds=1.0
        )
    )
