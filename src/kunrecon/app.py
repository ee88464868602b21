"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

from kunrecon.adapters.anilist import AniListMediaType, build_anilist_fetcher
from kunrecon.adapters.google_books import build_google_books_fetcher
from kunrecon.adapters.jikan import build_jikan_fetcher
from kunrecon.adapters.manga_news import build_manga_news_fetcher
from kunrecon.adapters.nautiljon import build_nautiljon_fetcher, extract_listing_titles
from kunrecon.adapters.openlibrary import build_openlibrary_fetcher
from kunrecon.adapters.sqlalchemy import SqlAlchemyCatalogUnitOfWork, is_started, startup
from kunrecon.config import get_matching_config, get_reconcile_config
from kunrecon.domain.model import CatalogKind
from kunrecon.domain.ports import CatalogUnitOfWork, ClosableSource
from kunrecon.domain.reconciliation import CatalogMatcher, ReconciliationEngine

if TYPE_CHECKING:
    from collections.abc import Awaitable, Sequence

    from kunrecon.adapters.nautiljon import NautiljonFetcher
    from kunrecon.config import MatchingConfig, ReconcileConfig
    from kunrecon.domain.model import MergedCandidate
    from kunrecon.domain.ports import CatalogReader, IsbnLookupSource, TitleSearchSource

UnitOfWorkFactory = Callable[[CatalogKind], CatalogUnitOfWork]

log = getLogger(__name__)


def default_listing_sources(kind: CatalogKind) -> list[TitleSearchSource]:
    if kind is CatalogKind.MANGA:
        return [
            build_anilist_fetcher(media_type=AniListMediaType.MANGA),
            build_manga_news_fetcher(),
            build_google_books_fetcher(),
        ]
    return [build_anilist_fetcher(), build_jikan_fetcher(), build_nautiljon_fetcher()]


def default_isbn_chain() -> list[IsbnLookupSource]:
    return [
        build_google_books_fetcher(),
        build_openlibrary_fetcher(),
        build_manga_news_fetcher(),
        build_anilist_fetcher(media_type=AniListMediaType.MANGA),
    ]


def reconcile_listing(
    titles: Sequence[str],
    *,
    catalog_kind: CatalogKind = CatalogKind.ANIME,
    sources: Sequence[TitleSearchSource] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    matching: MatchingConfig | None = None,
    settings: ReconcileConfig | None = None,
) -> list[MergedCandidate]:
    """Compare listing titles against the catalog, fetching metadata for the unknown ones."""

    owned = [] if sources is not None else default_listing_sources(catalog_kind)
    effective_sources = list(sources) if sources is not None else owned
    log.info(
        "Starting listing reconciliation: titles=%s, catalog=%s, sources=%s",
        len(titles),
        catalog_kind,
        ", ".join(source.name for source in effective_sources),
    )
    with _unit_of_work(catalog_kind, unit_of_work_factory) as uow:
        engine = _build_engine(
            uow.catalog, matching=matching, settings=settings, listing_sources=effective_sources
        )
        candidates = asyncio.run(_closing(engine.reconcile_listing(titles), owned))
    log.info(
        "Finished listing reconciliation: candidates=%s, existing=%s",
        len(candidates),
        sum(1 for candidate in candidates if candidate.exists),
    )
    return candidates


def reconcile_listing_html(
    html: str,
    *,
    catalog_kind: CatalogKind = CatalogKind.ANIME,
    sources: Sequence[TitleSearchSource] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    matching: MatchingConfig | None = None,
    settings: ReconcileConfig | None = None,
) -> list[MergedCandidate]:
    """Extract the titles of a scraped listing page and reconcile them."""

    titles = extract_listing_titles(html)
    log.info("Extracted %s titles from listing page", len(titles))
    return reconcile_listing(
        titles,
        catalog_kind=catalog_kind,
        sources=sources,
        unit_of_work_factory=unit_of_work_factory,
        matching=matching,
        settings=settings,
    )


def reconcile_listing_url(
    url: str,
    *,
    catalog_kind: CatalogKind = CatalogKind.ANIME,
    listing_fetcher: NautiljonFetcher | None = None,
    sources: Sequence[TitleSearchSource] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    matching: MatchingConfig | None = None,
    settings: ReconcileConfig | None = None,
) -> list[MergedCandidate]:
    """Download a Nautiljon listing page and reconcile its titles."""

    fetcher = listing_fetcher or build_nautiljon_fetcher()
    owned = [] if listing_fetcher is not None else [fetcher]
    titles = asyncio.run(_closing(fetcher.fetch_listing_titles(url), owned))
    log.info("Fetched %s titles from %s", len(titles), url)
    return reconcile_listing(
        titles,
        catalog_kind=catalog_kind,
        sources=sources,
        unit_of_work_factory=unit_of_work_factory,
        matching=matching,
        settings=settings,
    )


def reconcile_isbn(
    isbn: str,
    *,
    isbn_chain: Sequence[IsbnLookupSource] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    matching: MatchingConfig | None = None,
) -> MergedCandidate:
    """Resolve an ISBN to bibliographic metadata and a manga catalog match."""

    owned = [] if isbn_chain is not None else default_isbn_chain()
    chain = list(isbn_chain) if isbn_chain is not None else owned
    log.info(
        "Starting ISBN reconciliation: isbn=%s, chain=%s",
        isbn,
        " > ".join(source.name for source in chain),
    )
    with _unit_of_work(CatalogKind.MANGA, unit_of_work_factory) as uow:
        engine = _build_engine(uow.catalog, matching=matching, isbn_chain=chain)
        candidate = asyncio.run(_closing(engine.reconcile_isbn(isbn), owned))
    log.info(
        "Finished ISBN reconciliation: isbn=%s, existing_id=%s, sources=%s",
        candidate.isbn,
        candidate.existing_id,
        ", ".join(candidate.per_source_records) or "none",
    )
    return candidate


def _unit_of_work(kind: CatalogKind, factory: UnitOfWorkFactory | None) -> CatalogUnitOfWork:
    if factory is not None:
        return factory(kind)
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork(kind)


def _build_engine(
    catalog: CatalogReader,
    *,
    matching: MatchingConfig | None = None,
    settings: ReconcileConfig | None = None,
    listing_sources: Sequence[TitleSearchSource] = (),
    isbn_chain: Sequence[IsbnLookupSource] = (),
) -> ReconciliationEngine:
    matching = matching or get_matching_config()
    settings = settings or get_reconcile_config()
    matcher = CatalogMatcher(
        catalog=catalog,
        similarity_threshold=matching.similarity_threshold,
        similarity_candidates=matching.similarity_candidates,
    )
    return ReconciliationEngine(
        matcher=matcher,
        listing_sources=listing_sources,
        isbn_chain=isbn_chain,
        max_concurrent_titles=settings.max_concurrent_titles,
        batch_budget_seconds=settings.batch_budget_seconds,
    )


T = TypeVar("T")


async def _closing(work: Awaitable[T], sources: Sequence[object]) -> T:
    """Await ``work``, then close the sources this module built, on the same loop."""

    try:
        return await work
    finally:
        for source in sources:
            if isinstance(source, ClosableSource):
                await source.aclose()
