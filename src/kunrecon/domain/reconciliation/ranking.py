"""Pick the search hit that best matches the query a source was asked about."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rapidfuzz import fuzz

from .normalize import normalize_key

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kunrecon.domain.model import ExternalRecord


def title_score(query: str, record: ExternalRecord) -> float:
    """Best ``token_sort_ratio`` (0-100) between the query and any known title of the record."""

    wanted = normalize_key(query)
    scores = [fuzz.token_sort_ratio(wanted, normalize_key(title)) for title in record.known_titles]
    return max(scores, default=0.0)


def rank_by_title(query: str, records: Sequence[ExternalRecord]) -> tuple[ExternalRecord, ...]:
    """Records best match first; the provider's own order breaks ties."""

    scored = [(-title_score(query, record), index, record) for index, record in enumerate(records)]
    scored.sort(key=lambda item: (item[0], item[1]))
    return tuple(record for _, _, record in scored)
