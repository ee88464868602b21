"""AniList GraphQL response schemas."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class AniListMediaType(StrEnum):
    ANIME = "ANIME"
    MANGA = "MANGA"


class AniListBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "AniList %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class AniListTitle(AniListBaseModel):
    romaji: str | None = None
    english: str | None = None
    native: str | None = None


class AniListDate(AniListBaseModel):
    year: int | None = None
    month: int | None = None
    day: int | None = None


class AniListCoverImage(AniListBaseModel):
    extra_large: str | None = Field(default=None, alias="extraLarge")
    large: str | None = None
    medium: str | None = None


class AniListStudio(AniListBaseModel):
    name: str
    is_animation_studio: bool = Field(default=False, alias="isAnimationStudio")


class AniListStudioConnection(AniListBaseModel):
    nodes: list[AniListStudio] = Field(default_factory=list)


class AniListName(AniListBaseModel):
    full: str | None = None
    native: str | None = None


class AniListStaff(AniListBaseModel):
    name: AniListName
    primary_occupations: list[str] = Field(default_factory=list, alias="primaryOccupations")
    language: str | None = Field(default=None, alias="languageV2")


class AniListStaffEdge(AniListBaseModel):
    role: str | None = None
    node: AniListStaff


class AniListStaffConnection(AniListBaseModel):
    edges: list[AniListStaffEdge] = Field(default_factory=list)


class AniListCharacter(AniListBaseModel):
    name: AniListName


class AniListCharacterEdge(AniListBaseModel):
    role: str | None = None
    node: AniListCharacter
    voice_actors: list[AniListStaff] = Field(default_factory=list, alias="voiceActors")


class AniListCharacterConnection(AniListBaseModel):
    edges: list[AniListCharacterEdge] = Field(default_factory=list)


class AniListExternalLink(AniListBaseModel):
    url: str
    site: str | None = None
    type: str | None = None


class AniListMedia(AniListBaseModel):
    id: int
    id_mal: int | None = Field(default=None, alias="idMal")
    type: AniListMediaType | None = None
    format: str | None = None
    status: str | None = None
    title: AniListTitle
    synonyms: list[str] = Field(default_factory=list)
    description: str | None = None
    season: str | None = None
    season_year: int | None = Field(default=None, alias="seasonYear")
    start_date: AniListDate | None = Field(default=None, alias="startDate")
    episodes: int | None = None
    duration: int | None = None
    chapters: int | None = None
    volumes: int | None = None
    cover_image: AniListCoverImage | None = Field(default=None, alias="coverImage")
    genres: list[str] = Field(default_factory=list)
    studios: AniListStudioConnection | None = None
    staff: AniListStaffConnection | None = None
    characters: AniListCharacterConnection | None = None
    external_links: list[AniListExternalLink] = Field(default_factory=list, alias="externalLinks")
    site_url: str | None = Field(default=None, alias="siteUrl")


class AniListPage(AniListBaseModel):
    media: list[AniListMedia] = Field(default_factory=list)


class AniListData(AniListBaseModel):
    page: AniListPage | None = Field(default=None, alias="Page")
    media: AniListMedia | None = Field(default=None, alias="Media")


class AniListError(AniListBaseModel):
    message: str
    status: int | None = None


class AniListResponse(AniListBaseModel):
    data: AniListData | None = None
    errors: list[AniListError] = Field(default_factory=list)
