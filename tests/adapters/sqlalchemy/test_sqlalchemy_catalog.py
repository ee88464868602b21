from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import insert
from sqlalchemy.orm import Session

from kunrecon.adapters.sqlalchemy import (
    SUBSTRING_MATCH_SCORE,
    SqlAlchemyCatalogReader,
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    anime_table,
    configured_engine,
    is_started,
    shutdown,
    startup,
    trigram_similarity,
)
from kunrecon.domain.model import CatalogKind, MatchMethod

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture
def fresh_adapter() -> Iterator[None]:
    shutdown()
    try:
        yield
    finally:
        shutdown()


def test_title_lookup_is_case_insensitive_on_every_title_column(
    anime_catalog: SqlAlchemyCatalogReader,
) -> None:
    assert [row.id for row in anime_catalog.rows_with_title_in(["frieren"])] == [2]
    assert [row.id for row in anime_catalog.rows_with_title_in(["l'attaque des titans"])] == [1]
    assert [row.id for row in anime_catalog.rows_with_title_in(["進撃の巨人"])] == [1]
    assert anime_catalog.rows_with_title_in([]) == []


def test_rows_carry_every_title_column(anime_catalog: SqlAlchemyCatalogReader) -> None:
    (row,) = anime_catalog.rows_with_title_in(["shingeki no kyojin"])

    assert row.title == "Shingeki no Kyojin"
    assert row.original_title == "進撃の巨人"
    assert row.localized_title == "L'Attaque des Titans"
    assert row.alternative_titles == "Attack on Titan\nAoT"
    assert row.isbn is None


def test_alternative_titles_containment(
    anime_catalog: SqlAlchemyCatalogReader, manga_catalog: SqlAlchemyCatalogReader
) -> None:
    titans = anime_catalog.rows_with_alternative_title_containing(["attack on titan"])
    dandadan = manga_catalog.rows_with_alternative_title_containing(["Dan Da Dan"])

    assert [row.id for row in titans] == [1]
    assert [row.id for row in dandadan] == [11]
    assert anime_catalog.rows_with_alternative_title_containing(["100%"]) == []


def test_isbn_lookup(
    anime_catalog: SqlAlchemyCatalogReader, manga_catalog: SqlAlchemyCatalogReader
) -> None:
    (row,) = manga_catalog.rows_with_isbn("9782723488525")

    assert row.id == 10
    assert row.isbn == "9782723488525"
    assert manga_catalog.rows_with_isbn("9780000000000") == []
    # The anime catalog has no ISBN column.
    assert anime_catalog.rows_with_isbn("9782723488525") == []


def test_trigram_similarity_ranks_best_first(anime_catalog: SqlAlchemyCatalogReader) -> None:
    hits = anime_catalog.rows_similar_to("Frieren", threshold=0.3, limit=5)

    assert hits[0].row.id == 2
    assert hits[0].score == pytest.approx(1.0)
    assert all(hit.method is MatchMethod.TRIGRAM for hit in hits)
    assert all(hit.score >= 0.3 for hit in hits)


def test_trigram_similarity_threshold_and_limit(anime_catalog: SqlAlchemyCatalogReader) -> None:
    assert anime_catalog.rows_similar_to("Zzyzx Qwerty", threshold=0.3, limit=5) == []
    assert len(anime_catalog.rows_similar_to("Frieren", threshold=0.0, limit=1)) == 1


def test_missing_similarity_function_falls_back_to_substring_search(plain_catalog_engine: Engine) -> None:
    with Session(plain_catalog_engine) as session:
        catalog = SqlAlchemyCatalogReader(session, anime_table)

        first = catalog.rows_similar_to("love is war", threshold=0.3, limit=5)
        again = catalog.rows_similar_to("Titans", threshold=0.3, limit=5)

    assert [(hit.row.id, hit.method, hit.score) for hit in first] == [
        (4, MatchMethod.SUBSTRING, SUBSTRING_MATCH_SCORE)
    ]
    assert [hit.row.id for hit in again] == [1]


def test_substring_fallback_escapes_wildcards(plain_catalog_engine: Engine) -> None:
    with Session(plain_catalog_engine) as session:
        catalog = SqlAlchemyCatalogReader(session, anime_table)

        assert catalog.rows_similar_to("Spy_x", threshold=0.3, limit=5) == []
        assert catalog.rows_similar_to("%", threshold=0.3, limit=5) == []


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("Frieren", "frieren", 1.0),
        ("Frieren", None, 0.0),
        ("", "Frieren", 0.0),
        ("!!!", "???", 0.0),
    ],
)
def test_trigram_similarity_edges(left: str | None, right: str | None, expected: float) -> None:
    assert trigram_similarity(left, right) == expected


def test_trigram_similarity_partial_overlap() -> None:
    # "naruto" and "naruta" share "  n", " na", "nar", "aru", "rut" out of 9 trigrams.
    assert trigram_similarity("Naruto", "Naruta") == pytest.approx(5 / 9)


def test_unit_of_work_reads_the_requested_catalog(
    catalog_unit_of_work: Callable[[CatalogKind], SqlAlchemyCatalogUnitOfWork],
) -> None:
    with catalog_unit_of_work(CatalogKind.MANGA) as uow:
        rows = uow.catalog.rows_with_title_in(["dandadan"])

    assert [row.id for row in rows] == [11]


def test_unit_of_work_catalog_only_inside_the_block(
    catalog_unit_of_work: Callable[[CatalogKind], SqlAlchemyCatalogUnitOfWork],
) -> None:
    uow = catalog_unit_of_work(CatalogKind.ANIME)

    with pytest.raises(StartupError):
        _ = uow.catalog
    with uow, pytest.raises(StartupError):
        uow.__enter__()
    with pytest.raises(StartupError):
        _ = uow.catalog


@pytest.mark.usefixtures("fresh_adapter")
def test_unit_of_work_requires_startup() -> None:
    assert not is_started()
    with pytest.raises(StartupError, match="not initialised"):
        SqlAlchemyCatalogUnitOfWork(CatalogKind.ANIME)


@pytest.mark.usefixtures("fresh_adapter")
def test_startup_lifecycle() -> None:
    startup(database_uri="sqlite+pysqlite:///:memory:")

    assert is_started()
    engine = configured_engine()
    assert engine is not None
    assert engine.dialect.name == "sqlite"
    with pytest.raises(StartupError, match="already initialised"):
        startup(database_uri="sqlite+pysqlite:///:memory:")

    startup(database_uri="sqlite+pysqlite:///:memory:", force=True)
    assert configured_engine() is not engine

    shutdown()
    assert not is_started()
    assert configured_engine() is None


def _add_accented_row(session: Session) -> None:
    session.execute(
        insert(anime_table).values(
            id_anime=5,
            titre="Érased",
            titre_orig="僕だけがいない街",
            titre_fr=None,
            titres_alternatifs="Boku dake ga Inai Machi\nÉcole des Ombres",
        )
    )


def test_lowercasing_folds_non_ascii_capitals(anime_catalog: SqlAlchemyCatalogReader) -> None:
    _add_accented_row(anime_catalog.session)

    assert [row.id for row in anime_catalog.rows_with_title_in(["érased"])] == [5]
    assert [
        row.id for row in anime_catalog.rows_with_alternative_title_containing(["école des"])
    ] == [5]


def test_substring_fallback_folds_non_ascii_capitals(plain_catalog_engine: Engine) -> None:
    with Session(plain_catalog_engine) as session:
        _add_accented_row(session)
        catalog = SqlAlchemyCatalogReader(session, anime_table)

        hits = catalog.rows_similar_to("érased", threshold=0.3, limit=5)

    assert [(hit.row.id, hit.method) for hit in hits] == [(5, MatchMethod.SUBSTRING)]
