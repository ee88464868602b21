"""Manga-News scraping adapter."""

from __future__ import annotations

from .extract import extract_manga_news_details, extract_search_result_url
from .fetcher import MangaNewsFetcher, build_manga_news_fetcher

__all__ = [
    "MangaNewsFetcher",
    "build_manga_news_fetcher",
    "extract_manga_news_details",
    "extract_search_result_url",
]
