"""Ports for fetching metadata from external sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from kunrecon.domain.model import ExternalRecord, SourceName


class FetchStatus(StrEnum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class FetchErrorKind(StrEnum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    PROVIDER = "provider"
    PARSE = "parse"


@dataclass(slots=True, frozen=True, kw_only=True)
class FetchError:
    """Why a source could not answer."""

    source: SourceName
    kind: FetchErrorKind
    message: str


@dataclass(slots=True, frozen=True, kw_only=True)
class FetchFound:
    """Source answered with at least one record, best candidate first."""

    source: SourceName
    records: tuple[ExternalRecord, ...]
    status: Literal[FetchStatus.FOUND] = FetchStatus.FOUND

    @property
    def best(self) -> ExternalRecord:
        return self.records[0]


@dataclass(slots=True, frozen=True, kw_only=True)
class FetchNotFound:
    """Source answered but knows nothing about the query."""

    source: SourceName
    status: Literal[FetchStatus.NOT_FOUND] = FetchStatus.NOT_FOUND


@dataclass(slots=True, frozen=True, kw_only=True)
class FetchFailed:
    """Source malfunctioned (network, timeout, provider error, unparsable payload)."""

    source: SourceName
    error: FetchError
    status: Literal[FetchStatus.FAILED] = FetchStatus.FAILED


FetchResult: TypeAlias = FetchFound | FetchNotFound | FetchFailed


def found_or_not(source: SourceName, records: tuple[ExternalRecord, ...]) -> FetchResult:
    if records:
        return FetchFound(source=source, records=records)
    return FetchNotFound(source=source)


@runtime_checkable
class TitleSearchSource(Protocol):
    """Source able to search its catalog by free-text title."""

    name: SourceName

    async def search_by_title(self, query: str, *, limit: int = 5) -> FetchResult: ...


@runtime_checkable
class IdLookupSource(Protocol):
    """Source able to fetch one record by its own identifier."""

    name: SourceName

    async def fetch_by_id(self, external_id: str) -> FetchResult: ...


@runtime_checkable
class IsbnLookupSource(Protocol):
    """Source able to resolve an ISBN to bibliographic metadata."""

    name: SourceName

    async def fetch_by_isbn(self, isbn: str) -> FetchResult: ...


@runtime_checkable
class ClosableSource(Protocol):
    async def aclose(self) -> None: ...


__all__ = [
    "ClosableSource",
    "FetchError",
    "FetchErrorKind",
    "FetchFailed",
    "FetchFound",
    "FetchNotFound",
    "FetchResult",
    "FetchStatus",
    "IdLookupSource",
    "IsbnLookupSource",
    "TitleSearchSource",
    "found_or_not",
]
