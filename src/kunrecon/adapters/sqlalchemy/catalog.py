"""SQLAlchemy implementation of the catalog read port."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import ColumnElement, Float, String, func, literal, or_, select
from sqlalchemy.exc import DBAPIError

from kunrecon.domain.model import MatchMethod
from kunrecon.domain.ports import CatalogRow, SimilarityHit

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Row, Select, Table
    from sqlalchemy.orm import Session

log = getLogger(__name__)

SUBSTRING_MATCH_SCORE = 0.8


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _is_missing_similarity_function(exc: DBAPIError) -> bool:
    message = str(exc.orig).lower()
    return "similarity" in message and (
        "no such function" in message or "does not exist" in message
    )


class SqlAlchemyCatalogReader:
    """Read-only catalog queries for one catalog table.

    Similarity uses ``similarity()`` (``pg_trgm`` on PostgreSQL). When the function
    is missing the reader switches to a case-insensitive substring search for the
    rest of its life. Case folding goes through ``unicode_lower()`` on SQLite.
    """

    def __init__(self, session: Session, table: Table) -> None:
        self.session = session
        self.table = table
        self._id_column = next(iter(table.primary_key.columns))
        self._trigram_available: bool | None = None

    def rows_with_title_in(self, variants: Sequence[str]) -> list[CatalogRow]:
        lowered = sorted({variant.lower() for variant in variants})
        if not lowered:
            return []
        columns = self.table.c
        stmt = self._select_rows().where(
            or_(
                self._lower(columns.titre).in_(lowered),
                self._lower(columns.titre_orig).in_(lowered),
                self._lower(columns.titre_fr).in_(lowered),
            )
        )
        return self._fetch_rows(stmt)

    def rows_with_alternative_title_containing(self, variants: Sequence[str]) -> list[CatalogRow]:
        if not variants:
            return []
        alternatives = self._lower(self.table.c.titres_alternatifs)
        stmt = self._select_rows().where(
            or_(
                *(
                    alternatives.like(f"%{_escape_like(variant.lower())}%", escape="\\")
                    for variant in variants
                )
            )
        )
        return self._fetch_rows(stmt)

    def rows_with_isbn(self, isbn: str) -> list[CatalogRow]:
        if "isbn" not in self.table.c:
            return []
        stmt = self._select_rows().where(
            self.table.c.isbn.like(f"%{_escape_like(isbn)}%", escape="\\")
        )
        return self._fetch_rows(stmt)

    def rows_similar_to(self, title: str, *, threshold: float, limit: int) -> list[SimilarityHit]:
        if self._trigram_available is not False:
            try:
                hits = self._trigram_hits(title, threshold=threshold, limit=limit)
            except DBAPIError as exc:
                if exc.connection_invalidated or not _is_missing_similarity_function(exc):
                    raise
                self.session.rollback()
                self._trigram_available = False
                log.info(
                    "Similarity function unavailable on %s, falling back to substring search",
                    self.table.name,
                )
            else:
                self._trigram_available = True
                return hits
        return self._substring_hits(title, limit=limit)

    def _trigram_hits(self, title: str, *, threshold: float, limit: int) -> list[SimilarityHit]:
        columns = self.table.c
        scores = [
            func.coalesce(func.similarity(column, title), literal(0.0, Float))
            for column in (
                columns.titre,
                columns.titre_orig,
                columns.titre_fr,
                columns.titres_alternatifs,
            )
        ]
        score_expr = self._greatest(scores)
        score = score_expr.label("score")
        stmt = (
            select(*self._row_columns(), score)
            .where(score_expr >= threshold)
            .order_by(score.desc(), columns.titre.asc(), self._id_column.asc())
            .limit(limit)
        )
        return [
            SimilarityHit(
                row=self._to_row(result),
                score=float(result.score),
                method=MatchMethod.TRIGRAM,
            )
            for result in self.session.execute(stmt)
        ]

    def _substring_hits(self, title: str, *, limit: int) -> list[SimilarityHit]:
        columns = self.table.c
        pattern = f"%{_escape_like(title.lower())}%"
        stmt = (
            self._select_rows()
            .where(
                or_(
                    *(
                        self._lower(column).like(pattern, escape="\\")
                        for column in (
                            columns.titre,
                            columns.titre_orig,
                            columns.titre_fr,
                            columns.titres_alternatifs,
                        )
                    )
                )
            )
            .limit(limit)
        )
        return [
            SimilarityHit(row=row, score=SUBSTRING_MATCH_SCORE, method=MatchMethod.SUBSTRING)
            for row in self._fetch_rows(stmt)
        ]

    def _is_sqlite(self) -> bool:
        return self.session.get_bind().dialect.name == "sqlite"

    def _lower(self, column: ColumnElement[str]) -> ColumnElement[str]:
        # SQLite lower() folds ASCII only; register_unicode_lower provides the rest.
        if self._is_sqlite():
            return func.unicode_lower(column)
        return func.lower(column)

    def _greatest(self, scores: list[ColumnElement[float]]) -> ColumnElement[float]:
        if self._is_sqlite():
            return func.max(*scores)
        return func.greatest(*scores)

    def _row_columns(self) -> tuple[ColumnElement[object], ...]:
        columns = self.table.c
        isbn = columns.isbn if "isbn" in columns else literal(None, String)
        return (
            self._id_column.label("id"),
            columns.titre,
            columns.titre_orig,
            columns.titre_fr,
            columns.titres_alternatifs,
            isbn.label("isbn"),
        )

    def _select_rows(self) -> Select[tuple[object, ...]]:
        return select(*self._row_columns()).order_by(
            self.table.c.titre.asc(), self._id_column.asc()
        )

    def _fetch_rows(self, stmt: Select[tuple[object, ...]]) -> list[CatalogRow]:
        return [self._to_row(result) for result in self.session.execute(stmt)]

    @staticmethod
    def _to_row(result: Row[tuple[object, ...]]) -> CatalogRow:
        return CatalogRow(
            id=int(result.id),
            title=result.titre,
            original_title=result.titre_orig,
            localized_title=result.titre_fr,
            alternative_titles=result.titres_alternatifs,
            isbn=result.isbn,
        )
