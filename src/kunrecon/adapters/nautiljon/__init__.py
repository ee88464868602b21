"""Nautiljon scraping adapter."""

from __future__ import annotations

from .extract import extract_anime_details, extract_listing_titles, extract_volume_details
from .fetcher import NautiljonFetcher, build_nautiljon_fetcher

__all__ = [
    "NautiljonFetcher",
    "build_nautiljon_fetcher",
    "extract_anime_details",
    "extract_listing_titles",
    "extract_volume_details",
]
