"""Application configuration helpers."""

from __future__ import annotations

from .anilist import AniListConfig, get_anilist_config
from .env import env_float, env_int, optional_env_var
from .errors import ConfigurationError
from .google_books import GoogleBooksConfig, get_google_books_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .jikan import JikanConfig, get_jikan_config
from .logging import configure_logging
from .openlibrary import OpenLibraryConfig, get_openlibrary_config
from .reconcile import MatchingConfig, ReconcileConfig, get_matching_config, get_reconcile_config
from .scraping import ScraperConfig, get_manga_news_config, get_nautiljon_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "AniListConfig",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "GoogleBooksConfig",
    "JikanConfig",
    "MatchingConfig",
    "OpenLibraryConfig",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "ScraperConfig",
    "StorageConfig",
    "configure_logging",
    "env_float",
    "env_int",
    "get_anilist_config",
    "get_database_config",
    "get_google_books_config",
    "get_jikan_config",
    "get_manga_news_config",
    "get_matching_config",
    "get_nautiljon_config",
    "get_openlibrary_config",
    "get_reconcile_config",
    "get_storage_config",
    "optional_env_var",
]
