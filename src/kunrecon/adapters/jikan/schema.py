"""Jikan v4 anime payload schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class JikanBaseModel(BaseModel):
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
            "Jikan %s: unmodeled keys: %s", type(self).__name__, ", ".join(sorted(new_keys))
        )


class JikanImage(JikanBaseModel):
    image_url: str | None = None
    large_image_url: str | None = None


class JikanImages(JikanBaseModel):
    jpg: JikanImage | None = None
    webp: JikanImage | None = None


class JikanTitle(JikanBaseModel):
    type: str
    title: str


class JikanNamedResource(JikanBaseModel):
    mal_id: int
    name: str
    type: str | None = None


class JikanAired(JikanBaseModel):
    string: str | None = None


class JikanAnime(JikanBaseModel):
    mal_id: int
    url: str | None = None
    images: JikanImages | None = None
    title: str
    title_english: str | None = None
    title_japanese: str | None = None
    title_synonyms: list[str] = Field(default_factory=list)
    titles: list[JikanTitle] = Field(default_factory=list)
    type: str | None = None
    episodes: int | None = None
    aired: JikanAired | None = None
    duration: str | None = None
    synopsis: str | None = None
    year: int | None = None
    genres: list[JikanNamedResource] = Field(default_factory=list)
    themes: list[JikanNamedResource] = Field(default_factory=list)
    studios: list[JikanNamedResource] = Field(default_factory=list)


class JikanAnimeSearch(JikanBaseModel):
    data: list[JikanAnime] = Field(default_factory=list)


class JikanAnimeFull(JikanBaseModel):
    data: JikanAnime
