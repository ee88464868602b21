"""Manga-News metadata source (scraped)."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote_plus, urljoin

import httpx

from kunrecon.adapters.fetch_errors import fetch_failed
from kunrecon.adapters.html_extract import parse_html
from kunrecon.adapters.page_client import PageClient
from kunrecon.config.scraping import get_manga_news_config
from kunrecon.domain.model import SourceName
from kunrecon.domain.ports import FetchNotFound, found_or_not

from .extract import extract_manga_news_details, extract_search_result_url, is_detail_page

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.adapters.http_resilience import ResilientClient
    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.config.scraping import ScraperConfig
    from kunrecon.domain.ports import FetchResult

log = getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, ValueError)
SEARCH_PATH = "/index.php/recherche"


@dataclass(slots=True)
class MangaNewsFetcher:
    client: PageClient
    name: SourceName = field(default=SourceName.MANGA_NEWS, init=False)

    async def fetch_by_isbn(self, isbn: str) -> FetchResult:
        return await self._search(isbn)

    async def search_by_title(self, query: str, *, limit: int = 5) -> FetchResult:
        return await self._search(query)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _search(self, query: str) -> FetchResult:
        search_url = f"{SEARCH_PATH}?q={quote_plus(query)}"
        try:
            html = await self.client.fetch_page(search_url)
            if html is None:
                return FetchNotFound(source=self.name)
            target = extract_search_result_url(html)
            if target is None:
                if not is_detail_page(parse_html(html)):
                    log.debug("Manga-News has no result for %r", query)
                    return FetchNotFound(source=self.name)
                # Sheet rendered in place without a canonical link.
                target, page = search_url, html
            else:
                page = await self.client.fetch_page(target)
            record = None
            if page is not None:
                record = extract_manga_news_details(
                    page,
                    url=urljoin(f"{self.client.base_url}/", target),
                    base_url=self.client.base_url,
                )
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=query)
        return found_or_not(self.name, (record,) if record else ())


def build_manga_news_fetcher(
    *,
    config: ScraperConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> MangaNewsFetcher:
    client = PageClient(
        config=config or get_manga_news_config(), client_factory=client_factory
    )
    return MangaNewsFetcher(client=client)
