"""Local catalog matcher: single best catalog row for a set of title variants."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from kunrecon.domain.model import (
    NO_MATCH,
    ConfidenceTier,
    MatchCandidate,
    MatchedField,
    MatchMethod,
)

from .normalize import collapse_whitespace, extract_volume_number, strip_volume_suffix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kunrecon.domain.ports import CatalogReader, CatalogRow, SimilarityHit

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class CatalogMatcher:
    """Tiered lookup, first success wins.

    1. case-insensitive equality against title, original title or localized title
    2. case-insensitive containment in the alternative titles field
    3. similarity of the cleaned title against the four title fields

    Variants are tried in the order given; the first variant is the untouched
    input, which makes the difference between an ``exact`` and a ``variant`` hit.
    """

    catalog: CatalogReader
    similarity_threshold: float = 0.3
    similarity_candidates: int = 5

    def match(
        self,
        variants: Sequence[str],
        *,
        search_title: str | None = None,
        volume_hint: int | None = None,
    ) -> MatchCandidate:
        if not variants:
            return NO_MATCH
        original = variants[0]

        equality = _first_equal(variants, self.catalog.rows_with_title_in(variants))
        if equality is not None:
            row, variant, matched_field = equality
            return MatchCandidate(
                existing_id=row.id,
                existing_title=row.title,
                matched_field=matched_field,
                confidence_tier=_tier_for(variant, original),
                method=MatchMethod.EQUALITY,
                score=1.0,
            )

        containment = _first_containing(
            variants, self.catalog.rows_with_alternative_title_containing(variants)
        )
        if containment is not None:
            row, variant = containment
            return MatchCandidate(
                existing_id=row.id,
                existing_title=row.title,
                matched_field=MatchedField.ALT_TITLES,
                confidence_tier=_tier_for(variant, original),
                method=MatchMethod.CONTAINMENT,
                score=1.0,
            )

        cleaned = search_title or strip_volume_suffix(collapse_whitespace(original))
        hits = self.catalog.rows_similar_to(
            cleaned,
            threshold=self.similarity_threshold,
            limit=self.similarity_candidates,
        )
        best = _best_similarity_hit(hits, volume_hint)
        if best is None:
            log.debug("No catalog match for %r", original)
            return NO_MATCH
        return MatchCandidate(
            existing_id=best.row.id,
            existing_title=best.row.title,
            matched_field=_closest_field(best.row, cleaned),
            confidence_tier=ConfidenceTier.SIMILARITY,
            method=best.method,
            score=round(best.score, 4),
        )

    def match_isbn(self, isbn: str) -> MatchCandidate:
        rows = self.catalog.rows_with_isbn(isbn)
        if not rows:
            return NO_MATCH
        row = rows[0]
        return MatchCandidate(
            existing_id=row.id,
            existing_title=row.title,
            matched_field=MatchedField.ISBN,
            confidence_tier=ConfidenceTier.EXACT,
            method=MatchMethod.ISBN,
            score=1.0,
        )


def _tier_for(variant: str, original: str) -> ConfidenceTier:
    if variant == original or variant == collapse_whitespace(original):
        return ConfidenceTier.EXACT
    return ConfidenceTier.VARIANT


def _title_fields(row: CatalogRow) -> tuple[tuple[MatchedField, str | None], ...]:
    return (
        (MatchedField.TITLE, row.title),
        (MatchedField.TITLE_ORIG, row.original_title),
        (MatchedField.TITLE_FR, row.localized_title),
    )


def _first_equal(
    variants: Sequence[str], rows: Sequence[CatalogRow]
) -> tuple[CatalogRow, str, MatchedField] | None:
    for variant in variants:
        wanted = variant.casefold()
        for row in rows:
            for matched_field, value in _title_fields(row):
                if value is not None and value.casefold() == wanted:
                    return row, variant, matched_field
    return None


def _first_containing(
    variants: Sequence[str], rows: Sequence[CatalogRow]
) -> tuple[CatalogRow, str] | None:
    for variant in variants:
        wanted = variant.casefold()
        for row in rows:
            if row.alternative_titles and wanted in row.alternative_titles.casefold():
                return row, variant
    return None


def _best_similarity_hit(
    hits: Sequence[SimilarityHit], volume_hint: int | None
) -> SimilarityHit | None:
    if not hits:
        return None
    if volume_hint is None:
        return hits[0]
    top_score = hits[0].score
    tied = [hit for hit in hits if hit.score == top_score]
    for hit in tied:
        if extract_volume_number(hit.row.title) == volume_hint:
            return hit
    return hits[0]


def _closest_field(row: CatalogRow, title: str) -> MatchedField:
    wanted = title.casefold()
    for matched_field, value in _title_fields(row):
        if value and wanted in value.casefold():
            return matched_field
    if row.alternative_titles and wanted in row.alternative_titles.casefold():
        return MatchedField.ALT_TITLES
    return MatchedField.TITLE
