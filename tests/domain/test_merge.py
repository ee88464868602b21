from __future__ import annotations

import pytest

from kunrecon.domain.model import (
    STUDIO_ROLE,
    CharacterCredit,
    CharacterRole,
    ExternalRecord,
    SourceName,
    StaffCredit,
    VoiceActor,
    VoiceLanguage,
)
from kunrecon.domain.reconciliation.engine import DEFAULT_LISTING_PRIORITY
from kunrecon.domain.reconciliation.merge import merge_records, order_by_priority


@pytest.fixture
def anilist_record() -> ExternalRecord:
    return ExternalRecord(
        source=SourceName.ANILIST,
        title="Sousou no Frieren",
        external_id="154587",
        english_title="Frieren: Beyond Journey's End",
        cover_image_url="https://img.anili.st/frieren.jpg",
        genres=("Adventure", "Drama"),
        staff=(StaffCredit(name="Keiichirou Saitou", role="Director"),),
        studios=("Madhouse",),
        characters=(
            CharacterCredit(
                name="Frieren",
                role=CharacterRole.MAIN,
                voice_actors=(
                    VoiceActor(name="Atsumi Tanezaki", language=VoiceLanguage.JAPANESE),
                    VoiceActor(name="Mallorie Rodak", language=VoiceLanguage.ENGLISH),
                ),
            ),
            CharacterCredit(name="Himmel", role=CharacterRole.BACKGROUND),
        ),
        episode_or_volume_count=28,
        airing_or_release_info="Fall 2023 (2023-09-29)",
        media_format="tv",
    )


@pytest.fixture
def jikan_record() -> ExternalRecord:
    return ExternalRecord(
        source=SourceName.JIKAN,
        title="Sousou no Frieren",
        external_id="52991",
        synopsis="During their decade-long quest to defeat the Demon King...",
        genres=("Adventure", "Fantasy", "drama"),
        studios=("Madhouse",),
        episode_or_volume_count=28,
        media_format="tv",
        year=2023,
    )


@pytest.fixture
def nautiljon_record() -> ExternalRecord:
    return ExternalRecord(
        source=SourceName.NAUTILJON,
        title="Frieren",
        synopsis="Après dix ans de quête, le groupe du héros Himmel...",
        cover_image_url="https://www.nautiljon.com/images/anime/frieren.webp",
        staff=(StaffCredit(name="Keiichirou Saitou", role="Réalisateur"),),
        characters=(
            CharacterCredit(
                name="frieren",
                role=CharacterRole.MAIN,
                voice_actors=(VoiceActor(name="Atsumi Tanezaki", language=VoiceLanguage.JAPANESE),),
            ),
        ),
    )


def test_scalars_come_from_first_source_with_a_value(
    anilist_record: ExternalRecord, jikan_record: ExternalRecord, nautiljon_record: ExternalRecord
) -> None:
    merged = merge_records([nautiljon_record, jikan_record, anilist_record], DEFAULT_LISTING_PRIORITY)

    assert merged is not None
    assert merged.source is SourceName.ANILIST
    assert merged.title == "Sousou no Frieren"
    assert merged.synopsis == jikan_record.synopsis
    assert merged.cover_image_url == anilist_record.cover_image_url
    assert merged.episode_or_volume_count == 28
    assert merged.year == 2023
    assert merged.media_format == "Série TV"


def test_collections_are_unioned_and_deduplicated(
    anilist_record: ExternalRecord, jikan_record: ExternalRecord, nautiljon_record: ExternalRecord
) -> None:
    merged = merge_records([anilist_record, jikan_record, nautiljon_record], DEFAULT_LISTING_PRIORITY)

    assert merged is not None
    assert merged.genres == ("Adventure", "Drama", "Fantasy")
    assert merged.studios == ("Madhouse",)
    assert merged.staff == (
        StaffCredit(name="Keiichirou Saitou", role="Director"),
        StaffCredit(name="Keiichirou Saitou", role="Réalisateur"),
        StaffCredit(name="Madhouse", role=STUDIO_ROLE),
    )
    assert merged.alternative_titles == ("Frieren: Beyond Journey's End", "Frieren")


def test_characters_keep_main_and_supporting_with_japanese_voices(
    anilist_record: ExternalRecord, nautiljon_record: ExternalRecord
) -> None:
    merged = merge_records([anilist_record, nautiljon_record], DEFAULT_LISTING_PRIORITY)

    assert merged is not None
    assert len(merged.characters) == 1
    frieren = merged.characters[0]
    assert frieren.name == "Frieren"
    assert frieren.role == CharacterRole.MAIN
    assert [actor.name for actor in frieren.voice_actors] == ["Atsumi Tanezaki"]


def test_merge_is_independent_of_arrival_order(
    anilist_record: ExternalRecord, jikan_record: ExternalRecord, nautiljon_record: ExternalRecord
) -> None:
    forward = merge_records([anilist_record, jikan_record, nautiljon_record], DEFAULT_LISTING_PRIORITY)
    backward = merge_records([nautiljon_record, jikan_record, anilist_record], DEFAULT_LISTING_PRIORITY)

    assert forward == backward
    assert forward is not None
    assert backward is not None
    assert forward.to_dict() == backward.to_dict()


def test_sources_outside_priority_rank_last_by_name() -> None:
    books = ExternalRecord(source=SourceName.GOOGLE_BOOKS, title="One Piece - Tome 105")
    library = ExternalRecord(source=SourceName.OPENLIBRARY, title="One Piece, Vol. 105")
    anilist = ExternalRecord(source=SourceName.ANILIST, title="ONE PIECE")

    ordered = order_by_priority([library, books, anilist], [SourceName.ANILIST])

    assert [record.source for record in ordered] == [
        SourceName.ANILIST,
        SourceName.GOOGLE_BOOKS,
        SourceName.OPENLIBRARY,
    ]


def test_year_falls_back_to_airing_info() -> None:
    record = ExternalRecord(
        source=SourceName.NAUTILJON,
        title="Dandadan",
        airing_or_release_info="Du 04/10/2024 au 20/12/2024",
    )

    merged = merge_records([record], DEFAULT_LISTING_PRIORITY)

    assert merged is not None
    assert merged.year == 2024


def test_merge_nothing() -> None:
    assert merge_records([], DEFAULT_LISTING_PRIORITY) is None
