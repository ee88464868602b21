"""Jikan (unofficial MyAnimeList) REST client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kunrecon.adapters.http_resilience import ResilientClient

from .schema import JikanAnimeFull, JikanAnimeSearch

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.config.jikan import JikanConfig

    from .schema import JikanAnime


class JikanClient:
    def __init__(
        self,
        *,
        config: JikanConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._http: ResilientClient | None = None

    async def search_anime(self, *, query: str, limit: int) -> list[JikanAnime]:
        http = self._client()
        response = await http.get(
            "/anime",
            params={
                "q": query,
                "limit": str(limit),
                "order_by": "popularity",
                "sort": "asc",
            },
        )
        response.raise_for_status()
        return JikanAnimeSearch.model_validate(response.json()).data

    async def fetch_anime(self, *, mal_id: int) -> JikanAnime | None:
        response = await self._client().get(f"/anime/{mal_id}/full")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return JikanAnimeFull.model_validate(response.json()).data

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> ResilientClient:
        if self._http is None:
            self._http = self._client_factory(self._resilience)
        return self._http
