"""Page client shared by the scraped sources."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from kunrecon.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.config.scraping import ScraperConfig

log = getLogger(__name__)


class PageClient:
    """Fetches HTML pages of one site through a long-lived ``ResilientClient``."""

    def __init__(
        self,
        *,
        config: ScraperConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._http: ResilientClient | None = None

    @property
    def base_url(self) -> str:
        return self._resilience.base_url or ""

    async def fetch_page(self, url: str) -> str | None:
        """HTML of ``url`` (absolute, or relative to the site); ``None`` on 404."""

        if self._http is None:
            self._http = self._client_factory(self._resilience)
        response = await self._http.get(url)
        if response.status_code == 404:
            log.debug("%s page %s not found", self._resilience.name, url)
            return None
        response.raise_for_status()
        return response.text

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
