"""Nautiljon metadata source (scraped)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import urljoin

import httpx

from kunrecon.adapters.fetch_errors import fetch_failed
from kunrecon.adapters.html_extract import parse_html
from kunrecon.adapters.page_client import PageClient
from kunrecon.config.scraping import get_nautiljon_config
from kunrecon.domain.model import SourceName
from kunrecon.domain.ports import FetchNotFound, found_or_not
from kunrecon.domain.reconciliation.normalize import slugify_for_search

from .extract import extract_anime_details, extract_listing_titles, extract_volume_details

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.adapters.http_resilience import ResilientClient
    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.config.scraping import ScraperConfig
    from kunrecon.domain.ports import FetchResult

log = getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, ValueError)
_VOLUME_LINK_RE = re.compile(r"volume-(\d+),\d+\.html$")


@dataclass(slots=True)
class NautiljonFetcher:
    client: PageClient
    name: SourceName = field(default=SourceName.NAUTILJON, init=False)

    async def search_by_title(self, query: str, *, limit: int = 5) -> FetchResult:
        """Nautiljon has no usable search API; the anime sheet is addressed by slug."""

        return await self._anime_sheet(f"/animes/{slugify_for_search(query)}.html", query=query)

    async def fetch_by_id(self, external_id: str) -> FetchResult:
        """``external_id`` is a sheet URL or a site-relative path."""

        return await self._anime_sheet(external_id, query=external_id)

    async def fetch_volume(self, url: str) -> FetchResult:
        try:
            html = await self.client.fetch_page(url)
            record = None
            if html is not None:
                record = extract_volume_details(
                    html, url=self._absolute(url), base_url=self.client.base_url
                )
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=url)
        return found_or_not(self.name, (record,) if record else ())

    async def find_volume(self, series_title: str, volume_number: int) -> FetchResult:
        """Volume ``volume_number`` of a manga series, via the series' volume list."""

        listing = f"/mangas/{slugify_for_search(series_title)}/volumes.html"
        try:
            html = await self.client.fetch_page(listing)
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=series_title)
        if html is None:
            return FetchNotFound(source=self.name)
        for anchor in parse_html(html).find_all("a", href=True):
            href = str(anchor["href"])
            found = _VOLUME_LINK_RE.search(href)
            if found is not None and int(found.group(1)) == volume_number:
                return await self.fetch_volume(href)
        log.debug("No volume %d listed for %r on Nautiljon", volume_number, series_title)
        return FetchNotFound(source=self.name)

    async def fetch_listing_titles(self, url: str) -> list[str]:
        """Titles of a season listing page. Network errors propagate."""

        html = await self.client.fetch_page(url)
        if html is None:
            log.warning("Nautiljon listing %s not found", url)
            return []
        return extract_listing_titles(html)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _anime_sheet(self, path: str, *, query: str) -> FetchResult:
        try:
            html = await self.client.fetch_page(path)
            record = None
            if html is not None:
                record = extract_anime_details(
                    html, url=self._absolute(path), base_url=self.client.base_url
                )
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=query)
        return found_or_not(self.name, (record,) if record else ())

    def _absolute(self, url: str) -> str:
        return urljoin(f"{self.client.base_url}/", url)


def build_nautiljon_fetcher(
    *,
    config: ScraperConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> NautiljonFetcher:
    client = PageClient(
        config=config or get_nautiljon_config(), client_factory=client_factory
    )
    return NautiljonFetcher(client=client)
