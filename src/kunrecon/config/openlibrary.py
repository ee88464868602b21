"""OpenLibrary configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .anilist import DEFAULT_USER_AGENT
from .env import optional_env_var
from .http_resilience import CacheConfig, ResilienceConfig, RetryPolicy

DEFAULT_OPENLIBRARY_URL = "https://openlibrary.org"
DEFAULT_COVERS_URL = "https://covers.openlibrary.org"


@dataclass(frozen=True, slots=True)
class OpenLibraryConfig:
    resilience: ResilienceConfig
    covers_url: str = DEFAULT_COVERS_URL
    max_subjects: int = 5


def get_openlibrary_config() -> OpenLibraryConfig:
    user_agent = optional_env_var("KUNRECON_USER_AGENT") or DEFAULT_USER_AGENT
    resilience = ResilienceConfig(
        name="openlibrary",
        base_url=DEFAULT_OPENLIBRARY_URL,
        timeout_seconds=5.0,
        retry=RetryPolicy(total=2),
        cache=CacheConfig(enabled=True, backend="memory"),
        default_headers={"User-Agent": user_agent},
        follow_redirects=True,
    )
    return OpenLibraryConfig(resilience=resilience)
