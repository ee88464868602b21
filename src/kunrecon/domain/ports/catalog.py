"""Read-only port onto the local catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from kunrecon.domain.model import MatchMethod


@dataclass(slots=True, frozen=True, kw_only=True)
class CatalogRow:
    id: int
    title: str
    original_title: str | None = None
    localized_title: str | None = None
    alternative_titles: str | None = None
    isbn: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class SimilarityHit:
    row: CatalogRow
    score: float
    method: MatchMethod


class CatalogReader(Protocol):
    """Queries the matcher needs; implementations never write."""

    def rows_with_title_in(self, variants: Sequence[str]) -> list[CatalogRow]:
        """Rows whose title, original or localized title equals a variant, ignoring case.

        Ordered by title then id.
        """
        ...

    def rows_with_alternative_title_containing(self, variants: Sequence[str]) -> list[CatalogRow]:
        """Rows whose alternative titles contain a variant, ignoring case.

        Ordered by title then id.
        """
        ...

    def rows_similar_to(self, title: str, *, threshold: float, limit: int) -> list[SimilarityHit]:
        """Best rows by title similarity, score descending then title ascending."""
        ...

    def rows_with_isbn(self, isbn: str) -> list[CatalogRow]: ...


@runtime_checkable
class CatalogUnitOfWork(Protocol):
    """Session boundary around a ``CatalogReader``."""

    @property
    def catalog(self) -> CatalogReader: ...

    def __enter__(self) -> CatalogUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...
