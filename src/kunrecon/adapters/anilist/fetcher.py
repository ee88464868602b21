"""AniList metadata source."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from kunrecon.adapters.fetch_errors import fetch_failed
from kunrecon.config.anilist import get_anilist_config
from kunrecon.domain.model import SourceName
from kunrecon.domain.ports import FetchNotFound, found_or_not

from .client import AniListAPIError, AniListClient
from .schema import AniListMediaType
from .translator import translate_media

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.adapters.http_resilience import ResilientClient
    from kunrecon.config.anilist import AniListConfig
    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.domain.ports import FetchResult

log = getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, AniListAPIError, ValidationError)


@dataclass(slots=True)
class AniListFetcher:
    """Title search, id lookup and a best-effort ISBN search against AniList."""

    client: AniListClient
    media_type: AniListMediaType = AniListMediaType.ANIME
    name: SourceName = field(default=SourceName.ANILIST, init=False)

    async def search_by_title(self, query: str, *, limit: int = 5) -> FetchResult:
        return await self._search(query, media_type=self.media_type, limit=limit)

    async def fetch_by_id(self, external_id: str) -> FetchResult:
        try:
            media_id = int(external_id)
        except ValueError:
            log.warning("AniList ids are numeric, got %r", external_id)
            return FetchNotFound(source=self.name)
        try:
            media = await self.client.fetch_media(media_id=media_id)
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=external_id)
        if media is None:
            return FetchNotFound(source=self.name)
        return found_or_not(self.name, (translate_media(media),))

    async def fetch_by_isbn(self, isbn: str) -> FetchResult:
        # AniList has no ISBN index; its search occasionally knows a volume by ISBN.
        return await self._search(isbn, media_type=AniListMediaType.MANGA, limit=1)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _search(self, query: str, *, media_type: AniListMediaType, limit: int) -> FetchResult:
        try:
            media = await self.client.search_media(
                search=query, media_type=media_type, per_page=limit
            )
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=query)
        return found_or_not(self.name, tuple(translate_media(item) for item in media))


def build_anilist_fetcher(
    *,
    media_type: AniListMediaType = AniListMediaType.ANIME,
    config: AniListConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> AniListFetcher:
    client = AniListClient(config=config or get_anilist_config(), client_factory=client_factory)
    return AniListFetcher(client=client, media_type=media_type)
