"""Jikan metadata source."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from kunrecon.adapters.fetch_errors import fetch_failed
from kunrecon.config.jikan import get_jikan_config
from kunrecon.domain.model import SourceName
from kunrecon.domain.ports import FetchNotFound, found_or_not

from .client import JikanClient
from .translator import translate_anime

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.adapters.http_resilience import ResilientClient
    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.config.jikan import JikanConfig
    from kunrecon.domain.ports import FetchResult

log = getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, ValidationError, ValueError)


@dataclass(slots=True)
class JikanFetcher:
    client: JikanClient
    name: SourceName = field(default=SourceName.JIKAN, init=False)

    async def search_by_title(self, query: str, *, limit: int = 5) -> FetchResult:
        try:
            anime = await self.client.search_anime(query=query, limit=limit)
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=query)
        return found_or_not(self.name, tuple(translate_anime(item) for item in anime))

    async def fetch_by_id(self, external_id: str) -> FetchResult:
        if not external_id.isdigit():
            log.warning("MyAnimeList ids are numeric, got %r", external_id)
            return FetchNotFound(source=self.name)
        try:
            anime = await self.client.fetch_anime(mal_id=int(external_id))
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=external_id)
        if anime is None:
            return FetchNotFound(source=self.name)
        return found_or_not(self.name, (translate_anime(anime),))

    async def aclose(self) -> None:
        await self.client.aclose()


def build_jikan_fetcher(
    *,
    config: JikanConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> JikanFetcher:
    return JikanFetcher(
        client=JikanClient(config=config or get_jikan_config(), client_factory=client_factory)
    )
