"""Reconciliation orchestrator composing normalizer, matcher, sources and merge."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from kunrecon.domain.model import MergedCandidate, SourceName
from kunrecon.domain.ports import FetchFailed, FetchFound

from .merge import merge_records
from .normalize import (
    clean_isbn,
    extract_volume_number,
    is_valid_isbn,
    normalize_title,
    strip_volume_suffix,
)
from .ranking import rank_by_title
from .vocabulary import annotate_record

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from kunrecon.domain.model import ExternalRecord
    from kunrecon.domain.ports import FetchResult, IsbnLookupSource, TitleSearchSource

    from .match import CatalogMatcher

log = getLogger(__name__)

DEFAULT_LISTING_PRIORITY: tuple[SourceName, ...] = (
    SourceName.ANILIST,
    SourceName.JIKAN,
    SourceName.NAUTILJON,
    SourceName.MANGA_NEWS,
    SourceName.GOOGLE_BOOKS,
    SourceName.OPENLIBRARY,
)


class InvalidReconciliationInput(ValueError):
    """Raised before any lookup when a title or ISBN cannot be reconciled at all."""


def validate_title(raw_title: str) -> str:
    if not isinstance(raw_title, str) or not raw_title.strip():
        raise InvalidReconciliationInput(f"Empty title: {raw_title!r}")
    return raw_title


def validate_isbn(raw_isbn: str) -> str:
    if not isinstance(raw_isbn, str):
        raise InvalidReconciliationInput(f"ISBN must be a string, got {type(raw_isbn).__name__}")
    isbn = clean_isbn(raw_isbn)
    if not is_valid_isbn(isbn):
        raise InvalidReconciliationInput(f"Malformed ISBN: {raw_isbn!r}")
    return isbn


@dataclass(slots=True, kw_only=True)
class ReconciliationEngine:
    """Runs the listing and ISBN workflows.

    Listing titles are reconciled concurrently (at most ``max_concurrent_titles``
    at a time) and every unmatched title fans out to all ``listing_sources`` at
    once. The ISBN workflow walks ``isbn_chain`` in order and stops at the first
    source that knows the book. Source failures are logged and left out of the
    merge; they never abort a workflow.

    Catalog lookups go through the synchronous ``CatalogMatcher`` and run on the
    event loop itself, so a slow catalog query stalls the other titles' fetches
    for its duration. They share one session, which is not safe to use from
    worker threads.
    """

    matcher: CatalogMatcher
    listing_sources: Sequence[TitleSearchSource] = ()
    isbn_chain: Sequence[IsbnLookupSource] = ()
    priority_order: Sequence[SourceName] = DEFAULT_LISTING_PRIORITY
    max_concurrent_titles: int = 4
    batch_budget_seconds: float | None = None
    search_limit: int = 5
    clock: Callable[[], float] = field(default=time.monotonic)

    async def reconcile_listing(self, raw_titles: Sequence[str]) -> list[MergedCandidate]:
        titles = [validate_title(raw_title) for raw_title in raw_titles]
        if not titles:
            return []

        log.info("Reconciling %s listing titles", len(titles))
        semaphore = asyncio.Semaphore(max(self.max_concurrent_titles, 1))
        started = self.clock()

        async def run(raw_title: str) -> MergedCandidate:
            async with semaphore:
                return await self._reconcile_title(
                    raw_title, allow_fetch=self._within_budget(started)
                )

        candidates = await asyncio.gather(*(run(raw_title) for raw_title in titles))
        log.info(
            "Finished listing reconciliation: titles=%s, existing=%s",
            len(candidates),
            sum(1 for candidate in candidates if candidate.exists),
        )
        return list(candidates)

    async def reconcile_isbn(self, raw_isbn: str) -> MergedCandidate:
        isbn = validate_isbn(raw_isbn)
        match = self.matcher.match_isbn(isbn)

        per_source: dict[SourceName, ExternalRecord] = {}
        for source in self.isbn_chain:
            outcome = await source.fetch_by_isbn(isbn)
            _log_failure(outcome, isbn)
            if isinstance(outcome, FetchFound):
                per_source[outcome.source] = outcome.best
                break

        record = next(iter(per_source.values()), None)
        volume_number = None
        if record is not None:
            volume_number = record.volume_number or extract_volume_number(record.title)
            if not match.exists:
                series_title = strip_volume_suffix(record.title)
                match = self.matcher.match(
                    normalize_title(series_title),
                    search_title=series_title,
                    volume_hint=volume_number,
                )

        chain_order = [source.name for source in self.isbn_chain]
        merged = merge_records(per_source.values(), chain_order)
        log.info(
            "ISBN %s reconciled: metadata=%s, existing_id=%s",
            isbn,
            record.source if record else None,
            match.existing_id,
        )
        return MergedCandidate(
            raw_title=record.title if record else isbn,
            match=match,
            merged_fields=merged,
            per_source_records=per_source,
            vocabulary=annotate_record(merged),
            isbn=isbn,
            volume_number=volume_number,
        )

    async def _reconcile_title(self, raw_title: str, *, allow_fetch: bool) -> MergedCandidate:
        match = self.matcher.match(
            normalize_title(raw_title), volume_hint=extract_volume_number(raw_title)
        )
        if match.exists:
            return MergedCandidate(raw_title=raw_title, match=match)
        if not allow_fetch:
            log.warning("Batch budget exhausted, not querying sources for %r", raw_title)
            return MergedCandidate(raw_title=raw_title, match=match)

        outcomes = await asyncio.gather(
            *(
                source.search_by_title(raw_title, limit=self.search_limit)
                for source in self.listing_sources
            )
        )
        per_source: dict[SourceName, ExternalRecord] = {}
        for outcome in outcomes:
            _log_failure(outcome, raw_title)
            if isinstance(outcome, FetchFound):
                per_source[outcome.source] = rank_by_title(raw_title, outcome.records)[0]

        if not per_source:
            log.warning("No source returned metadata for %r", raw_title)
        merged = merge_records(per_source.values(), self.priority_order)
        return MergedCandidate(
            raw_title=raw_title,
            match=match,
            merged_fields=merged,
            per_source_records=per_source,
            vocabulary=annotate_record(merged),
        )

    def _within_budget(self, started: float) -> bool:
        if self.batch_budget_seconds is None:
            return True
        return self.clock() - started <= self.batch_budget_seconds


def _log_failure(outcome: FetchResult, query: str) -> None:
    if isinstance(outcome, FetchFailed):
        log.warning(
            "Source %s failed for %r (%s): %s",
            outcome.source,
            query,
            outcome.error.kind,
            outcome.error.message,
        )
