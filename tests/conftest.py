from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, insert
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kunrecon.adapters.sqlalchemy import (
    SqlAlchemyCatalogReader,
    SqlAlchemyCatalogUnitOfWork,
    anime_table,
    create_catalog_tables,
    manga_table,
    register_trigram_similarity,
    register_unicode_lower,
    shutdown,
    startup,
)
from kunrecon.domain.model import CatalogKind

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


ANIME_ROWS: tuple[dict[str, object], ...] = (
    {
        "id_anime": 1,
        "titre": "Shingeki no Kyojin",
        "titre_orig": "進撃の巨人",
        "titre_fr": "L'Attaque des Titans",
        "titres_alternatifs": "Attack on Titan\nAoT",
    },
    {
        "id_anime": 2,
        "titre": "Frieren",
        "titre_orig": "葬送のフリーレン",
        "titre_fr": None,
        "titres_alternatifs": "Sousou no Frieren; Frieren: Beyond Journey's End",
    },
    {
        "id_anime": 3,
        "titre": "Spy x Family Season 2",
        "titre_orig": None,
        "titre_fr": None,
        "titres_alternatifs": None,
    },
    {
        "id_anime": 4,
        "titre": "Kaguya-sama: Love is War",
        "titre_orig": "かぐや様は告らせたい",
        "titre_fr": None,
        "titres_alternatifs": "Kaguya-sama wa Kokurasetai",
    },
)

MANGA_ROWS: tuple[dict[str, object], ...] = (
    {
        "id_manga": 10,
        "titre": "One Piece",
        "titre_orig": "ワンピース",
        "titre_fr": None,
        "titres_alternatifs": None,
        "isbn": "9782723488525",
    },
    {
        "id_manga": 11,
        "titre": "Dandadan",
        "titre_orig": "ダンダダン",
        "titre_fr": None,
        "titres_alternatifs": "Dan Da Dan",
        "isbn": None,
    },
    {
        "id_manga": 12,
        "titre": "Blue Lock",
        "titre_orig": "ブルーロック",
        "titre_fr": None,
        "titres_alternatifs": None,
        "isbn": "9782811650551",
    },
)


def _memory_engine() -> Engine:
    return create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def catalog_engine() -> Iterator[Engine]:
    """In-memory catalog with ``similarity()`` registered and a few rows seeded."""

    engine = _memory_engine()
    register_unicode_lower(engine)
    register_trigram_similarity(engine)
    create_catalog_tables(engine)
    with engine.begin() as connection:
        connection.execute(insert(anime_table), list(ANIME_ROWS))
        connection.execute(insert(manga_table), list(MANGA_ROWS))
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def plain_catalog_engine() -> Iterator[Engine]:
    """Same catalog without the similarity function, as on a database lacking pg_trgm."""

    engine = _memory_engine()
    register_unicode_lower(engine)
    create_catalog_tables(engine)
    with engine.begin() as connection:
        connection.execute(insert(anime_table), list(ANIME_ROWS))
        connection.execute(insert(manga_table), list(MANGA_ROWS))
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def catalog_session(catalog_engine: Engine) -> Iterator[Session]:
    session = sessionmaker(bind=catalog_engine, future=True)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def anime_catalog(catalog_session: Session) -> SqlAlchemyCatalogReader:
    return SqlAlchemyCatalogReader(catalog_session, anime_table)


@pytest.fixture
def manga_catalog(catalog_session: Session) -> SqlAlchemyCatalogReader:
    return SqlAlchemyCatalogReader(catalog_session, manga_table)


@pytest.fixture
def catalog_unit_of_work(
    catalog_engine: Engine,
) -> Iterator[Callable[[CatalogKind], SqlAlchemyCatalogUnitOfWork]]:
    startup(engine=catalog_engine, force=True)

    def factory(kind: CatalogKind) -> SqlAlchemyCatalogUnitOfWork:
        return SqlAlchemyCatalogUnitOfWork(kind)

    try:
        yield factory
    finally:
        shutdown()
