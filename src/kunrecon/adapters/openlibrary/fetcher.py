"""OpenLibrary metadata source (ISBN lookups only)."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from kunrecon.adapters.fetch_errors import fetch_failed
from kunrecon.config.openlibrary import get_openlibrary_config
from kunrecon.domain.model import SourceName
from kunrecon.domain.ports import FetchFound, FetchNotFound

from .client import OpenLibraryClient
from .translator import translate_edition

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.adapters.http_resilience import ResilientClient
    from kunrecon.config.http_resilience import ResilienceConfig
    from kunrecon.config.openlibrary import OpenLibraryConfig
    from kunrecon.domain.ports import FetchResult

    from .schema import OpenLibraryEdition, OpenLibraryWork

log = getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, ValidationError, ValueError)


@dataclass(slots=True)
class OpenLibraryFetcher:
    client: OpenLibraryClient
    max_authors: int = 3
    name: SourceName = field(default=SourceName.OPENLIBRARY, init=False)

    async def fetch_by_isbn(self, isbn: str) -> FetchResult:
        try:
            edition = await self.client.fetch_edition(isbn=isbn)
            if edition is None:
                return FetchNotFound(source=self.name)
            work = await self._work(edition)
            authors = await self._author_names(edition, work)
        except _FETCH_ERRORS as exc:
            return fetch_failed(self.name, exc, query=isbn)

        config = self.client.config
        record = translate_edition(
            edition,
            isbn=isbn,
            work=work,
            authors=authors,
            covers_url=config.covers_url,
            max_subjects=config.max_subjects,
        )
        return FetchFound(source=self.name, records=(record,))

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _work(self, edition: OpenLibraryEdition) -> OpenLibraryWork | None:
        if not edition.works:
            return None
        return await self.client.fetch_work(key=edition.works[0].key)

    async def _author_names(
        self, edition: OpenLibraryEdition, work: OpenLibraryWork | None
    ) -> list[str]:
        keys = [ref.key for ref in edition.authors]
        if not keys and work is not None:
            keys = [role.author.key for role in work.authors]
        names: list[str] = []
        for key in keys[: self.max_authors]:
            author = await self.client.fetch_author(key=key)
            name = author.name or author.personal_name if author else None
            if name:
                names.append(name)
        return names


def build_openlibrary_fetcher(
    *,
    config: OpenLibraryConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> OpenLibraryFetcher:
    client = OpenLibraryClient(
        config=config or get_openlibrary_config(), client_factory=client_factory
    )
    return OpenLibraryFetcher(client=client)
