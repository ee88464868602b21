"""Google Books volume search schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class GoogleBooksBaseModel(BaseModel):
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
            "Google Books %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class IndustryIdentifier(GoogleBooksBaseModel):
    type: str
    identifier: str


class ImageLinks(GoogleBooksBaseModel):
    small_thumbnail: str | None = Field(default=None, alias="smallThumbnail")
    thumbnail: str | None = None
    small: str | None = None
    medium: str | None = None
    large: str | None = None
    extra_large: str | None = Field(default=None, alias="extraLarge")


class VolumeInfo(GoogleBooksBaseModel):
    title: str | None = None
    subtitle: str | None = None
    authors: list[str] = Field(default_factory=list)
    publisher: str | None = None
    published_date: str | None = Field(default=None, alias="publishedDate")
    description: str | None = None
    industry_identifiers: list[IndustryIdentifier] = Field(
        default_factory=list, alias="industryIdentifiers"
    )
    page_count: int | None = Field(default=None, alias="pageCount")
    categories: list[str] = Field(default_factory=list)
    image_links: ImageLinks | None = Field(default=None, alias="imageLinks")
    language: str | None = None
    info_link: str | None = Field(default=None, alias="infoLink")

    def isbn(self, kind: str) -> str | None:
        for identifier in self.industry_identifiers:
            if identifier.type == kind:
                return identifier.identifier
        return None


class GoogleBooksVolume(GoogleBooksBaseModel):
    id: str
    volume_info: VolumeInfo = Field(alias="volumeInfo")


class GoogleBooksVolumes(GoogleBooksBaseModel):
    total_items: int = Field(default=0, alias="totalItems")
    items: list[GoogleBooksVolume] = Field(default_factory=list)
