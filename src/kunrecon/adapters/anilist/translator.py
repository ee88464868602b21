"""Translate AniList media payloads into ``ExternalRecord`` values."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from kunrecon.domain.model import (
    CharacterCredit,
    ExternalRecord,
    SourceName,
    StaffCredit,
    VoiceActor,
    VoiceLanguage,
)

from .schema import AniListMediaType

if TYPE_CHECKING:
    from .schema import AniListDate, AniListExternalLink, AniListMedia

_ROLE_QUALIFIER_RE = re.compile(r"\s*\([^)]*\)\s*$")


def translate_media(media: AniListMedia) -> ExternalRecord:
    title = media.title.romaji or media.title.english or media.title.native or str(media.id)
    is_manga = media.type is AniListMediaType.MANGA
    return ExternalRecord(
        source=SourceName.ANILIST,
        title=title,
        external_id=str(media.id),
        source_url=media.site_url,
        original_title=media.title.native,
        english_title=media.title.english,
        alternative_titles=tuple(media.synonyms),
        synopsis=clean_description(media.description),
        cover_image_url=_cover_url(media),
        genres=tuple(media.genres),
        staff=_staff(media),
        studios=tuple(
            studio.name
            for studio in (media.studios.nodes if media.studios else ())
            if studio.is_animation_studio
        ),
        characters=_characters(media),
        episode_or_volume_count=media.volumes if is_manga else media.episodes,
        airing_or_release_info=_airing_info(media),
        duration=f"{media.duration} min" if media.duration else None,
        official_links=tuple(link.url for link in _official_links(media.external_links)[:1]),
        media_format=media.format.lower() if media.format else None,
        year=media.season_year or (media.start_date.year if media.start_date else None),
    )


def clean_description(description: str | None) -> str | None:
    """AniList descriptions carry ``<br>`` and ``<i>`` markup; keep the text only."""

    if not description:
        return None
    text = BeautifulSoup(description, "html.parser").get_text()
    text = re.sub(r"\n{3,}", "\n\n", text).strip()
    return text or None


def _cover_url(media: AniListMedia) -> str | None:
    cover = media.cover_image
    if cover is None:
        return None
    return cover.extra_large or cover.large or cover.medium


def _staff(media: AniListMedia) -> tuple[StaffCredit, ...]:
    if media.staff is None:
        return ()
    credits: list[StaffCredit] = []
    for edge in media.staff.edges:
        name = edge.node.name.full
        if not name or not edge.role:
            continue
        credits.append(StaffCredit(name=name, role=_ROLE_QUALIFIER_RE.sub("", edge.role)))
    return tuple(credits)


def _characters(media: AniListMedia) -> tuple[CharacterCredit, ...]:
    if media.characters is None:
        return ()
    characters: list[CharacterCredit] = []
    for edge in media.characters.edges:
        name = edge.node.name.full
        if not name:
            continue
        actors = tuple(
            VoiceActor(name=actor.name.full, language=actor.language or VoiceLanguage.JAPANESE)
            for actor in edge.voice_actors
            if actor.name.full and (actor.language or VoiceLanguage.JAPANESE) == VoiceLanguage.JAPANESE
        )
        role = (edge.role or "").title()
        characters.append(CharacterCredit(name=name, role=role, voice_actors=actors))
    return tuple(characters)


def _official_links(links: list[AniListExternalLink]) -> list[AniListExternalLink]:
    return [
        link
        for link in links
        if (link.site and "official" in link.site.lower()) or link.type == "INFO"
    ]


def _airing_info(media: AniListMedia) -> str | None:
    start = _format_date(media.start_date)
    if media.season and media.season_year:
        season = f"{media.season.title()} {media.season_year}"
        return f"{season} ({start})" if start else season
    return start


def _format_date(date: AniListDate | None) -> str | None:
    if date is None or date.year is None:
        return None
    if date.month is None:
        return f"{date.year:04d}"
    if date.day is None:
        return f"{date.year:04d}-{date.month:02d}"
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"
