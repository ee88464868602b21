"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SourceName(StrEnum):
    ANILIST = "anilist"
    GOOGLE_BOOKS = "google_books"
    OPENLIBRARY = "openlibrary"
    JIKAN = "jikan"
    NAUTILJON = "nautiljon"
    MANGA_NEWS = "manga_news"


class CatalogKind(StrEnum):
    """Which catalog table a reconciliation runs against."""

    ANIME = "anime"
    MANGA = "manga"


class MatchedField(StrEnum):
    TITLE = "title"
    TITLE_ORIG = "titleOrig"
    TITLE_FR = "titleFr"
    ALT_TITLES = "altTitles"
    ISBN = "isbn"


class ConfidenceTier(StrEnum):
    """Which matcher tier produced a catalog hit."""

    EXACT = "exact"
    VARIANT = "variant"
    SIMILARITY = "similarity"


class MatchMethod(StrEnum):
    EQUALITY = "equality"
    CONTAINMENT = "containment"
    TRIGRAM = "trigram"
    SUBSTRING = "substring"
    ISBN = "isbn"


class CharacterRole(StrEnum):
    MAIN = "Main"
    SUPPORTING = "Supporting"
    BACKGROUND = "Background"


class VoiceLanguage(StrEnum):
    JAPANESE = "Japanese"
    FRENCH = "French"
    ENGLISH = "English"
