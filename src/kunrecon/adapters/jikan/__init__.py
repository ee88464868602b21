"""Jikan (MyAnimeList) adapter."""

from __future__ import annotations

from .client import JikanClient
from .fetcher import JikanFetcher, build_jikan_fetcher
from .schema import JikanAnime
from .translator import translate_anime

__all__ = ["JikanAnime", "JikanClient", "JikanFetcher", "build_jikan_fetcher", "translate_anime"]
