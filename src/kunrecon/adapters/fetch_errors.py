"""Translate exceptions raised at an adapter boundary into ``FetchFailed`` results."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from kunrecon.domain.ports import FetchError, FetchErrorKind, FetchFailed

if TYPE_CHECKING:
    from kunrecon.domain.model import SourceName

log = getLogger(__name__)


def classify_error(exc: Exception) -> FetchErrorKind:
    if isinstance(exc, httpx.TimeoutException):
        return FetchErrorKind.TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        return FetchErrorKind.HTTP_STATUS
    if isinstance(exc, httpx.HTTPError):
        return FetchErrorKind.NETWORK
    if isinstance(exc, (ValidationError, ValueError)):
        return FetchErrorKind.PARSE
    return FetchErrorKind.PROVIDER


def fetch_failed(source: SourceName, exc: Exception, *, query: str) -> FetchFailed:
    kind = classify_error(exc)
    message = str(exc) or type(exc).__name__
    log.warning("%s lookup for %r failed (%s): %s", source, query, kind, message)
    return FetchFailed(source=source, error=FetchError(source=source, kind=kind, message=message))
