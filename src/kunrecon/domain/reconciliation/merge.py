"""Field merge resolver: one record out of several sources' records.

Scalars come from the first source, in priority order, that has a value.
Collections are unioned over every source and de-duplicated, first spelling
wins. Sources absent from the priority list rank after it, by name, so the
result never depends on the order in which records arrived.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, TypeVar

from kunrecon.domain.model import (
    STUDIO_ROLE,
    CharacterCredit,
    CharacterRole,
    ExternalRecord,
    StaffCredit,
    VoiceLanguage,
)

from .vocabulary import map_media_format

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from kunrecon.domain.model import SourceName

T = TypeVar("T")

_YEAR_RE = re.compile(r"\b((?:19|20)\d{2})\b")
_KEPT_CHARACTER_ROLES = frozenset({CharacterRole.MAIN, CharacterRole.SUPPORTING})


def order_by_priority(
    records: Iterable[ExternalRecord], priority_order: Sequence[SourceName]
) -> list[ExternalRecord]:
    rank = {source: index for index, source in enumerate(priority_order)}
    fallback = len(rank)
    return sorted(
        records,
        key=lambda record: (rank.get(record.source, fallback), str(record.source), record.title),
    )


def merge_records(
    records: Iterable[ExternalRecord], priority_order: Sequence[SourceName]
) -> ExternalRecord | None:
    """Combine ``records`` into one; ``None`` when there is nothing to merge.

    The merged record is attributed to its highest-priority contributor.
    """

    ordered = order_by_priority(records, priority_order)
    if not ordered:
        return None
    lead = ordered[0]

    def first(getter: Callable[[ExternalRecord], T | None]) -> T | None:
        for record in ordered:
            value = getter(record)
            if isinstance(value, str):
                if value.strip():
                    return value
            elif value is not None:
                return value
        return None

    title = first(lambda r: r.title) or lead.title
    airing = first(lambda r: r.airing_or_release_info)
    media_format = first(lambda r: r.media_format)
    studios = _union_text(record.studios for record in ordered)

    return ExternalRecord(
        source=lead.source,
        title=title,
        external_id=lead.external_id,
        source_url=lead.source_url,
        original_title=first(lambda r: r.original_title),
        english_title=first(lambda r: r.english_title),
        alternative_titles=tuple(
            alt
            for alt in _union_text(record.known_titles for record in ordered)
            if alt.casefold() != title.casefold()
        ),
        synopsis=first(lambda r: r.synopsis),
        cover_image_url=first(lambda r: r.cover_image_url),
        genres=_union_text(record.genres for record in ordered),
        themes=_union_text(record.themes for record in ordered),
        staff=_merge_staff(ordered, studios),
        studios=studios,
        characters=_merge_characters(ordered),
        episode_or_volume_count=first(lambda r: r.episode_or_volume_count),
        airing_or_release_info=airing,
        duration=first(lambda r: r.duration),
        official_links=_union_text((record.official_links for record in ordered), casefold=False),
        media_format=map_media_format(media_format) if media_format else None,
        year=first(lambda r: r.year) or _year_from(airing),
        isbn=first(lambda r: r.isbn),
        publisher=first(lambda r: r.publisher),
        page_count=first(lambda r: r.page_count),
        release_date=first(lambda r: r.release_date),
        volume_number=first(lambda r: r.volume_number),
        authors=_union_text(record.authors for record in ordered),
    )


def _union_text(groups: Iterable[Iterable[str]], *, casefold: bool = True) -> tuple[str, ...]:
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for value in group:
            text = value.strip()
            key = text.casefold() if casefold else text
            if not text or key in seen:
                continue
            seen.add(key)
            merged.append(text)
    return tuple(merged)


def _merge_staff(ordered: Sequence[ExternalRecord], studios: Sequence[str]) -> tuple[StaffCredit, ...]:
    seen: set[str] = set()
    merged: list[StaffCredit] = []
    credits = [credit for record in ordered for credit in record.staff]
    credits.extend(StaffCredit(name=studio, role=STUDIO_ROLE) for studio in studios)
    for credit in credits:
        if not credit.name.strip() or credit.dedupe_key in seen:
            continue
        seen.add(credit.dedupe_key)
        merged.append(credit)
    return tuple(merged)


def _merge_characters(ordered: Sequence[ExternalRecord]) -> tuple[CharacterCredit, ...]:
    seen: set[str] = set()
    merged: list[CharacterCredit] = []
    for record in ordered:
        for character in record.characters:
            if character.role not in _KEPT_CHARACTER_ROLES or character.dedupe_key in seen:
                continue
            seen.add(character.dedupe_key)
            merged.append(
                CharacterCredit(
                    name=character.name,
                    role=character.role,
                    voice_actors=tuple(
                        actor
                        for actor in character.voice_actors
                        if actor.language == VoiceLanguage.JAPANESE
                    ),
                )
            )
    return tuple(merged)


def _year_from(text: str | None) -> int | None:
    if not text:
        return None
    found = _YEAR_RE.search(text)
    return int(found.group(1)) if found else None
