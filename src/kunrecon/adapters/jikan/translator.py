"""Translate Jikan anime payloads into ``ExternalRecord`` values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kunrecon.domain.model import ExternalRecord, SourceName

if TYPE_CHECKING:
    from .schema import JikanAnime

# Title kinds already carried by dedicated record fields.
_PRIMARY_TITLE_KINDS = frozenset({"Default", "English", "Japanese"})


def translate_anime(anime: JikanAnime) -> ExternalRecord:
    return ExternalRecord(
        source=SourceName.JIKAN,
        title=anime.title,
        external_id=str(anime.mal_id),
        source_url=anime.url,
        original_title=anime.title_japanese,
        english_title=anime.title_english,
        alternative_titles=_alternative_titles(anime),
        synopsis=_synopsis(anime.synopsis),
        cover_image_url=_cover_url(anime),
        genres=tuple(genre.name for genre in anime.genres),
        themes=tuple(theme.name for theme in anime.themes),
        studios=tuple(studio.name for studio in anime.studios),
        episode_or_volume_count=anime.episodes,
        airing_or_release_info=anime.aired.string if anime.aired else None,
        duration=anime.duration,
        media_format=anime.type.lower() if anime.type else None,
        year=anime.year,
    )


def _alternative_titles(anime: JikanAnime) -> tuple[str, ...]:
    titles = list(anime.title_synonyms)
    titles.extend(item.title for item in anime.titles if item.type not in _PRIMARY_TITLE_KINDS)
    return tuple(dict.fromkeys(title for title in titles if title))


def _synopsis(synopsis: str | None) -> str | None:
    if not synopsis:
        return None
    return synopsis.replace("[Written by MAL Rewrite]", "").strip() or None


def _cover_url(anime: JikanAnime) -> str | None:
    if anime.images is None or anime.images.jpg is None:
        return None
    return anime.images.jpg.large_image_url or anime.images.jpg.image_url
