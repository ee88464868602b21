"""Controlled vocabularies for staff roles, genres/themes and media formats.

The tables are built once at import time and exposed read-only. Lookups are
case-sensitive on the literal external term: spelling and language variants are
listed explicitly instead of being guessed. A miss is not an error, the term is
returned with ``canonical_id=None``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final, TypeAlias

from kunrecon.domain.model import (
    STUDIO_ROLE,
    CandidateVocabulary,
    MappedStaffCredit,
    VocabularyTerm,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from kunrecon.domain.model import ExternalRecord

VOCABULARY_VERSION: Final[str] = "2025.1"

VocabularyRow: TypeAlias = tuple[int, str, tuple[str, ...]]

_STAFF_ROLES: Final[tuple[VocabularyRow, ...]] = (
    (1, "Réalisateur", ("Director", "Series Director", "Chief Director", "Réalisation")),
    (
        2,
        "Auteur original",
        (
            "Original Creator",
            "Original Story",
            "Original Work",
            "Créateur original",
            "Histoire originale",
            "Œuvre originale",
            "Oeuvre originale",
        ),
    ),
    (3, "Scénariste", ("Script", "Screenplay", "Scénario")),
    (4, "Composition de la série", ("Series Composition", "Composition")),
    (5, "Character designer", ("Character Design", "Character Designer", "Chara-design")),
    (6, "Compositeur", ("Music", "Composer", "Musique")),
    (7, "Directeur artistique", ("Art Director", "Art Direction", "Direction artistique")),
    (
        8,
        "Directeur de l'animation",
        (
            "Animation Director",
            "Chief Animation Director",
            "Directeur d'animation",
            "Directeur animation",
        ),
    ),
    (9, "Producteur", ("Producer", "Production")),
    (10, "Producteur exécutif", ("Executive Producer",)),
    (11, "Directeur du son", ("Sound Director", "Sound Direction", "Directeur son")),
    (12, "Storyboard", ("Storyboards", "Storyboarder")),
    (13, STUDIO_ROLE, ("Animation Studio", "Studio", "Animation Production")),
    (14, "Doubleur japonais", ("Japanese Voice Actor", "Seiyuu", "Seiyū")),
    (15, "Auteur", ("Author", "Story & Art", "Story", "Mangaka")),
    (16, "Dessinateur", ("Art", "Illustrator", "Illustration", "Dessin")),
    (17, "Directeur de la photographie", ("Director of Photography", "Photography Director")),
    (18, "Mecha designer", ("Mechanical Design", "Mecha Design", "Mecha Designer")),
)

_GENRES: Final[tuple[VocabularyRow, ...]] = (
    (1, "Action", ()),
    (2, "Aventure", ("Adventure",)),
    (3, "Comédie", ("Comedy",)),
    (4, "Drame", ("Drama",)),
    (5, "Fantasy", ()),
    (6, "Horreur", ("Horror",)),
    (7, "Mystère", ("Mystery",)),
    (8, "Romance", ()),
    (9, "Science-fiction", ("Sci-Fi", "Science-Fiction", "Science Fiction", "SF")),
    (10, "Tranche de vie", ("Slice of Life",)),
    (11, "Sport", ("Sports",)),
    (12, "Surnaturel", ("Supernatural",)),
    (13, "Thriller", ("Suspense",)),
    (14, "Psychologique", ("Psychological",)),
    (15, "Mecha", ()),
    (16, "Musique", ("Music",)),
    (17, "Ecchi", ()),
    (18, "Magical girl", ("Mahou Shoujo", "Mahou Shōjo", "Magical Girl")),
    (19, "Gastronomie", ("Gourmet", "Cuisine")),
    (20, "Historique", ("Historical",)),
    (21, "Militaire", ("Military",)),
    (22, "École", ("School", "Ecole", "Scolaire")),
    (23, "Isekai", ()),
    (24, "Arts martiaux", ("Martial Arts",)),
    (25, "Shônen", ("Shounen", "Shōnen", "Shonen")),
    (26, "Shôjo", ("Shoujo", "Shōjo", "Shojo")),
    (27, "Seinen", ()),
    (28, "Josei", ()),
    (29, "Harem", ()),
    (30, "Policier", ("Detective", "Enquête")),
    (31, "Vampire", ()),
    (32, "Idols", ("Idols (Female)", "Idols (Male)", "Idol")),
    (33, "Super pouvoirs", ("Super Power",)),
    (34, "Survie", ("Survival",)),
    (35, "Voyage temporel", ("Time Travel",)),
)

_MEDIA_FORMATS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "tv": "Série TV",
        "tv_short": "Série TV",
        "série tv": "Série TV",
        "ova": "OAV",
        "oav": "OAV",
        "film": "Film",
        "movie": "Film",
        "ona": "ONA",
        "special": "Spécial",
        "spécial": "Spécial",
        "clip": "Clip",
        "music": "Clip",
    }
)


def _build_table(rows: Iterable[VocabularyRow]) -> Mapping[str, VocabularyTerm]:
    table: dict[str, VocabularyTerm] = {}
    for canonical_id, canonical_name, aliases in rows:
        for term in (canonical_name, *aliases):
            existing = table.get(term)
            if existing is not None and existing.canonical_id != canonical_id:
                raise ValueError(f"Vocabulary term {term!r} maps to two canonical entries")
            table[term] = VocabularyTerm(
                external_term=term,
                canonical_id=canonical_id,
                canonical_name=canonical_name,
            )
    return MappingProxyType(table)


STAFF_ROLE_VOCABULARY: Final = _build_table(_STAFF_ROLES)
GENRE_VOCABULARY: Final = _build_table(_GENRES)


def _lookup(table: Mapping[str, VocabularyTerm], term: str) -> VocabularyTerm:
    entry = table.get(term)
    if entry is None:
        return VocabularyTerm(external_term=term)
    return entry


def map_staff_role(term: str) -> VocabularyTerm:
    return _lookup(STAFF_ROLE_VOCABULARY, term)


def map_genre(term: str) -> VocabularyTerm:
    return _lookup(GENRE_VOCABULARY, term)


def map_media_format(term: str) -> str:
    """Catalog label for a media format; unknown formats pass through."""

    return _MEDIA_FORMATS.get(term.strip().lower(), term)


def annotate_record(record: ExternalRecord | None) -> CandidateVocabulary:
    if record is None:
        return CandidateVocabulary(version=VOCABULARY_VERSION)
    return CandidateVocabulary(
        staff=tuple(
            MappedStaffCredit(name=credit.name, role=map_staff_role(credit.role))
            for credit in record.staff
        ),
        genres=tuple(map_genre(genre) for genre in record.genres),
        themes=tuple(map_genre(theme) for theme in record.themes),
        version=VOCABULARY_VERSION,
    )
