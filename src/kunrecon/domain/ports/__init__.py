"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogReader, CatalogRow, CatalogUnitOfWork, SimilarityHit
from .fetching import (
    ClosableSource,
    FetchError,
    FetchErrorKind,
    FetchFailed,
    FetchFound,
    FetchNotFound,
    FetchResult,
    FetchStatus,
    IdLookupSource,
    IsbnLookupSource,
    TitleSearchSource,
    found_or_not,
)

__all__ = [
    "CatalogReader",
    "CatalogRow",
    "CatalogUnitOfWork",
    "ClosableSource",
    "FetchError",
    "FetchErrorKind",
    "FetchFailed",
    "FetchFound",
    "FetchNotFound",
    "FetchResult",
    "FetchStatus",
    "IdLookupSource",
    "IsbnLookupSource",
    "SimilarityHit",
    "TitleSearchSource",
    "found_or_not",
]
