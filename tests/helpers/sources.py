"""In-memory metadata sources for engine and application tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kunrecon.domain.ports import (
    FetchError,
    FetchErrorKind,
    FetchFailed,
    FetchFound,
    FetchNotFound,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kunrecon.domain.model import ExternalRecord, SourceName
    from kunrecon.domain.ports import FetchResult


@dataclass
class FakeSource:
    """Answers from a canned table keyed by query; unknown queries are not found."""

    name: SourceName
    answers: Mapping[str, FetchResult | tuple[ExternalRecord, ...]] = field(default_factory=dict)
    delays: Mapping[str, float] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    closed: bool = False

    async def search_by_title(self, query: str, *, limit: int = 5) -> FetchResult:
        del limit
        return await self._answer(query)

    async def fetch_by_isbn(self, isbn: str) -> FetchResult:
        return await self._answer(isbn)

    async def aclose(self) -> None:
        self.closed = True

    async def _answer(self, query: str) -> FetchResult:
        self.calls.append(query)
        await asyncio.sleep(self.delays.get(query, 0))
        answer = self.answers.get(query)
        if answer is None:
            return FetchNotFound(source=self.name)
        if isinstance(answer, tuple):
            return FetchFound(source=self.name, records=answer)
        return answer


def failed(source: SourceName, message: str = "read timed out") -> FetchFailed:
    return FetchFailed(
        source=source,
        error=FetchError(source=source, kind=FetchErrorKind.TIMEOUT, message=message),
    )
