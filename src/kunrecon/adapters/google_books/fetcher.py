"""Google Books metadata source with manga classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from kunrecon.adapters.fetch_errors import fetch_failed
from kunrecon.config.google_books import MAX_RESULTS_PER_PAGE, get_google_books_config
from kunrecon.domain.model import SourceName
from kunrecon.domain.ports import found_or_not

from .classification import is_manga_volume
from .client import GoogleBooksAPIError, GoogleBooksClient
from .translator import translate_volume

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.adapters.http_resilience import ResilientClient
    from kunrecon.config.google_books import GoogleBooksConfig
    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.domain.model import ExternalRecord
    from kunrecon.domain.ports import FetchResult

    from .schema import GoogleBooksVolume

log = getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, GoogleBooksAPIError, ValidationError, ValueError)


@dataclass(slots=True)
class GoogleBooksFetcher:
    client: GoogleBooksClient
    max_pages: int = 3
    name: SourceName = field(default=SourceName.GOOGLE_BOOKS, init=False)

    async def fetch_by_isbn(self, isbn: str) -> FetchResult:
        try:
            volumes = await self.client.search_volumes(query=f"isbn:{isbn}", max_results=10)
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=isbn)
        records = self._accepted(volumes.items, query=isbn)
        return found_or_not(self.name, records[:1])

    async def search_by_title(self, query: str, *, limit: int = 5) -> FetchResult:
        accepted: list[ExternalRecord] = []
        page_size = min(max(limit, self.client.max_results), MAX_RESULTS_PER_PAGE)
        start_index = 0
        try:
            for _ in range(self.max_pages):
                volumes = await self.client.search_volumes(
                    query=query,
                    start_index=start_index,
                    max_results=page_size,
                    language=self.client.language,
                )
                accepted.extend(self._accepted(volumes.items, query=query))
                start_index += len(volumes.items)
                if (
                    len(accepted) >= limit
                    or len(volumes.items) < page_size
                    or start_index >= volumes.total_items
                ):
                    break
        except _FETCH_ERRORS as exc:
            if not accepted:
                return fetch_failed(self.name, exc, query=query)
            log.warning("Google Books pagination stopped early for %r: %s", query, exc)
        return found_or_not(self.name, tuple(accepted[:limit]))

    async def aclose(self) -> None:
        await self.client.aclose()

    def _accepted(self, items: list[GoogleBooksVolume], *, query: str) -> tuple[ExternalRecord, ...]:
        accepted = tuple(
            translate_volume(item)
            for item in items
            if is_manga_volume(item.volume_info, language=self.client.language)
        )
        rejected = len(items) - len(accepted)
        if rejected:
            log.debug("Google Books: %s non-manga volumes rejected for %r", rejected, query)
        return accepted


def build_google_books_fetcher(
    *,
    config: GoogleBooksConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> GoogleBooksFetcher:
    client = GoogleBooksClient(
        config=config or get_google_books_config(), client_factory=client_factory
    )
    return GoogleBooksFetcher(client=client)
