"""OpenLibrary adapter."""

from __future__ import annotations

from .client import OpenLibraryClient
from .fetcher import OpenLibraryFetcher, build_openlibrary_fetcher
from .schema import OpenLibraryAuthor, OpenLibraryEdition, OpenLibraryWork
from .translator import description_text, translate_edition

__all__ = [
    "OpenLibraryAuthor",
    "OpenLibraryClient",
    "OpenLibraryEdition",
    "OpenLibraryFetcher",
    "OpenLibraryWork",
    "build_openlibrary_fetcher",
    "description_text",
    "translate_edition",
]
