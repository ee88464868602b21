"""SQLAlchemy table metadata for the catalog tables reconciliation reads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, MetaData, String, Table, Text

from kunrecon.domain.model import CatalogKind

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

catalog_metadata = MetaData()

anime_table = Table(
    "ak_animes",
    catalog_metadata,
    Column("id_anime", Integer, primary_key=True),
    Column("titre", String(255), nullable=False, index=True),
    Column("titre_orig", String(255)),
    Column("titre_fr", String(255)),
    Column("titres_alternatifs", Text),
    Column("statut", Integer, nullable=False, default=1),
)

manga_table = Table(
    "ak_mangas",
    catalog_metadata,
    Column("id_manga", Integer, primary_key=True),
    Column("titre", String(255), nullable=False, index=True),
    Column("titre_orig", String(255)),
    Column("titre_fr", String(255)),
    Column("titres_alternatifs", Text),
    Column("isbn", String(32), index=True),
    Column("statut", Integer, nullable=False, default=1),
)

CATALOG_TABLES = {
    CatalogKind.ANIME: anime_table,
    CatalogKind.MANGA: manga_table,
}


def create_catalog_tables(engine: Engine) -> None:
    """Create the catalog tables (local SQLite catalogs and tests only)."""

    catalog_metadata.create_all(engine)
