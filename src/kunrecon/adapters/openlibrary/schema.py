"""OpenLibrary edition, work and author schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class OpenLibraryBaseModel(BaseModel):
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
            "OpenLibrary %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class OpenLibraryRef(OpenLibraryBaseModel):
    key: str


class OpenLibraryText(OpenLibraryBaseModel):
    type: str | None = None
    value: str


class OpenLibraryAuthorRole(OpenLibraryBaseModel):
    author: OpenLibraryRef


class OpenLibraryEdition(OpenLibraryBaseModel):
    key: str | None = None
    title: str
    subtitle: str | None = None
    publishers: list[str] = Field(default_factory=list)
    publish_date: str | None = None
    number_of_pages: int | None = None
    isbn_13: list[str] = Field(default_factory=list)
    isbn_10: list[str] = Field(default_factory=list)
    covers: list[int] = Field(default_factory=list)
    works: list[OpenLibraryRef] = Field(default_factory=list)
    authors: list[OpenLibraryRef] = Field(default_factory=list)
    languages: list[OpenLibraryRef] = Field(default_factory=list)
    description: str | OpenLibraryText | None = None


class OpenLibraryWork(OpenLibraryBaseModel):
    key: str | None = None
    title: str | None = None
    description: str | OpenLibraryText | None = None
    subjects: list[str] = Field(default_factory=list)
    authors: list[OpenLibraryAuthorRole] = Field(default_factory=list)


class OpenLibraryAuthor(OpenLibraryBaseModel):
    name: str | None = None
    personal_name: str | None = None
