"""Google Books adapter."""

from __future__ import annotations

from .classification import is_manga_volume, manga_publishers
from .client import GoogleBooksAPIError, GoogleBooksClient
from .fetcher import GoogleBooksFetcher, build_google_books_fetcher
from .schema import GoogleBooksVolume, GoogleBooksVolumes, VolumeInfo
from .translator import translate_volume

__all__ = [
    "GoogleBooksAPIError",
    "GoogleBooksClient",
    "GoogleBooksFetcher",
    "GoogleBooksVolume",
    "GoogleBooksVolumes",
    "VolumeInfo",
    "build_google_books_fetcher",
    "is_manga_volume",
    "manga_publishers",
    "translate_volume",
]
