"""Shared fixtures for AniList adapter tests."""

from __future__ import annotations

import copy

import pytest

from kunrecon.config.anilist import AniListConfig
from kunrecon.config.http_resilience import ResilienceConfig, RetryPolicy

FRIEREN: dict[str, object] = {
    "id": 154587,
    "idMal": 52991,
    "type": "ANIME",
    "format": "TV",
    "status": "FINISHED",
    "title": {
        "romaji": "Sousou no Frieren",
        "english": "Frieren: Beyond Journey's End",
        "native": "葬送のフリーレン",
    },
    "synonyms": ["Frieren at the Funeral"],
    "description": (
        "The adventure is over but life goes on for an elf mage.<br><br>\n"
        "<i>(Source: Crunchyroll)</i>"
    ),
    "season": "FALL",
    "seasonYear": 2023,
    "startDate": {"year": 2023, "month": 9, "day": 29},
    "episodes": 28,
    "duration": 24,
    "chapters": None,
    "volumes": None,
    "coverImage": {
        "extraLarge": "https://s4.anilist.co/file/anilistcdn/media/anime/cover/large/bx154587.jpg",
        "large": "https://s4.anilist.co/file/anilistcdn/media/anime/cover/medium/bx154587.jpg",
        "medium": None,
    },
    "genres": ["Adventure", "Drama", "Fantasy"],
    "siteUrl": "https://anilist.co/anime/154587",
    "studios": {
        "nodes": [
            {"name": "Madhouse", "isAnimationStudio": True},
            {"name": "Aniplex", "isAnimationStudio": False},
        ]
    },
    "staff": {
        "edges": [
            {
                "role": "Director",
                "node": {
                    "name": {"full": "Keiichirou Saitou", "native": "斎藤圭一郎"},
                    "primaryOccupations": ["Director"],
                },
            },
            {
                "role": "Original Creator (Story)",
                "node": {"name": {"full": "Kanehito Yamada", "native": None}},
            },
            {"role": None, "node": {"name": {"full": "Nobody Credited"}}},
        ]
    },
    "characters": {
        "edges": [
            {
                "role": "MAIN",
                "node": {"name": {"full": "Frieren", "native": "フリーレン"}},
                "voiceActors": [
                    {"name": {"full": "Atsumi Tanezaki"}, "languageV2": "Japanese"},
                ],
            },
            {
                "role": "SUPPORTING",
                "node": {"name": {"full": "Fern"}},
                "voiceActors": [],
            },
        ]
    },
    "externalLinks": [
        {"url": "https://twitter.com/Anime_Frieren", "site": "Twitter", "type": "SOCIAL"},
        {"url": "https://frieren-anime.jp/", "site": "Official Site", "type": "INFO"},
    ],
    "popularity": 400000,
}


@pytest.fixture
def frieren_payload() -> dict[str, object]:
    return copy.deepcopy(FRIEREN)


@pytest.fixture
def anilist_config() -> AniListConfig:
    return AniListConfig(
        resilience=ResilienceConfig(
            name="anilist",
            base_url="https://graphql.anilist.test",
            retry=RetryPolicy(total=1, backoff_factor=0.0, backoff_jitter=0.0),
            cache=None,
        ),
        per_page=3,
    )
