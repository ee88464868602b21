"""AniList adapter."""

from __future__ import annotations

from .client import AniListAPIError, AniListClient
from .fetcher import AniListFetcher, build_anilist_fetcher
from .schema import AniListMedia, AniListMediaType, AniListResponse
from .translator import clean_description, translate_media

__all__ = [
    "AniListAPIError",
    "AniListClient",
    "AniListFetcher",
    "AniListMedia",
    "AniListMediaType",
    "AniListResponse",
    "build_anilist_fetcher",
    "clean_description",
    "translate_media",
]
