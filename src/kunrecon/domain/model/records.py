"""Uniform record shape produced by every metadata source."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import SourceName

STUDIO_ROLE = "Studio d'animation"


@dataclass(slots=True, frozen=True, kw_only=True)
class StaffCredit:
    name: str
    role: str

    @property
    def dedupe_key(self) -> str:
        return f"{self.name.lower()}|{self.role.lower()}"


@dataclass(slots=True, frozen=True, kw_only=True)
class VoiceActor:
    name: str
    language: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class CharacterCredit:
    name: str
    role: str
    voice_actors: tuple[VoiceActor, ...] = ()

    @property
    def dedupe_key(self) -> str:
        return f"{self.name.lower()}|{self.role.lower()}"


@dataclass(slots=True, frozen=True, kw_only=True)
class ExternalRecord:
    """One source's view of a title or a book.

    Only ``source`` and ``title`` are guaranteed; every other field is whatever the
    source managed to provide. Collections are tuples so records stay hashable and
    their order is part of their identity.
    """

    source: SourceName
    title: str
    external_id: str | None = None
    source_url: str | None = None
    original_title: str | None = None
    english_title: str | None = None
    alternative_titles: tuple[str, ...] = ()
    synopsis: str | None = None
    cover_image_url: str | None = None
    genres: tuple[str, ...] = ()
    themes: tuple[str, ...] = ()
    staff: tuple[StaffCredit, ...] = ()
    studios: tuple[str, ...] = ()
    characters: tuple[CharacterCredit, ...] = ()
    episode_or_volume_count: int | None = None
    airing_or_release_info: str | None = None
    duration: str | None = None
    official_links: tuple[str, ...] = ()
    media_format: str | None = None
    year: int | None = None
    # Book-shaped sources
    isbn: str | None = None
    publisher: str | None = None
    page_count: int | None = None
    release_date: str | None = None
    volume_number: int | None = None
    authors: tuple[str, ...] = ()

    @property
    def known_titles(self) -> tuple[str, ...]:
        titles = (self.title, self.original_title, self.english_title, *self.alternative_titles)
        return tuple(title for title in titles if title)

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
