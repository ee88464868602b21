"""OpenLibrary REST client."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from kunrecon.adapters.http_resilience import ResilientClient

from .schema import OpenLibraryAuthor, OpenLibraryEdition, OpenLibraryWork

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx
    from pydantic import BaseModel

    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.config.openlibrary import OpenLibraryConfig

M = TypeVar("M", bound="BaseModel")


class OpenLibraryClient:
    def __init__(
        self,
        *,
        config: OpenLibraryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._http: ResilientClient | None = None

    @property
    def config(self) -> OpenLibraryConfig:
        return self._config

    async def fetch_edition(self, *, isbn: str) -> OpenLibraryEdition | None:
        return await self._get_model(f"/isbn/{isbn}.json", OpenLibraryEdition)

    async def fetch_work(self, *, key: str) -> OpenLibraryWork | None:
        return await self._get_model(f"{_as_path(key)}.json", OpenLibraryWork)

    async def fetch_author(self, *, key: str) -> OpenLibraryAuthor | None:
        return await self._get_model(f"{_as_path(key)}.json", OpenLibraryAuthor)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _get_model(self, path: str, model: type[M]) -> M | None:
        response = await self._get(path)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return model.model_validate(response.json())

    async def _get(self, path: str) -> httpx.Response:
        if self._http is None:
            self._http = self._client_factory(self._resilience)
        return await self._http.get(path)


def _as_path(key: str) -> str:
    return key if key.startswith("/") else f"/{key}"
