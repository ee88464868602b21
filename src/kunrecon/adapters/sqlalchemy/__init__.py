"""SQLAlchemy adapter package for the catalog read side."""

from __future__ import annotations

from .catalog import SUBSTRING_MATCH_SCORE, SqlAlchemyCatalogReader
from .similarity import register_trigram_similarity, register_unicode_lower, trigram_similarity
from .tables import (
    CATALOG_TABLES,
    anime_table,
    catalog_metadata,
    create_catalog_tables,
    manga_table,
)
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "CATALOG_TABLES",
    "SUBSTRING_MATCH_SCORE",
    "SqlAlchemyCatalogReader",
    "SqlAlchemyCatalogUnitOfWork",
    "StartupError",
    "anime_table",
    "catalog_metadata",
    "configured_engine",
    "create_catalog_tables",
    "is_started",
    "manga_table",
    "register_trigram_similarity",
    "register_unicode_lower",
    "shutdown",
    "startup",
    "trigram_similarity",
]
