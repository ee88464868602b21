"""Google Books REST client."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kunrecon.adapters.http_resilience import ResilientClient
from kunrecon.config.google_books import MAX_RESULTS_PER_PAGE

from .schema import GoogleBooksVolumes

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.config.google_books import GoogleBooksConfig
    from kunrecon.config.http_resilience import ResilienceConfig


class GoogleBooksAPIError(RuntimeError):
    """Raised when Google Books answers with an error payload."""


class GoogleBooksClient:
    def __init__(
        self,
        *,
        config: GoogleBooksConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._http: ResilientClient | None = None

    @property
    def language(self) -> str:
        return self._config.language

    @property
    def max_results(self) -> int:
        return self._config.max_results

    async def search_volumes(
        self,
        *,
        query: str,
        start_index: int = 0,
        max_results: int = MAX_RESULTS_PER_PAGE,
        language: str | None = None,
    ) -> GoogleBooksVolumes:
        params: dict[str, str] = {
            "q": query,
            "printType": "books",
            "maxResults": str(min(max(max_results, 1), MAX_RESULTS_PER_PAGE)),
            "startIndex": str(max(start_index, 0)),
        }
        if language:
            params["langRestrict"] = language
        if self._config.api_key:
            params["key"] = self._config.api_key

        if self._http is None:
            self._http = self._client_factory(self._resilience)
        response = await self._http.get("/volumes", params=params)
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, dict) and "error" in payload:
            raise GoogleBooksAPIError(str(payload["error"]))
        return GoogleBooksVolumes.model_validate(payload)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
