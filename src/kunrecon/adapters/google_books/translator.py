"""Translate Google Books volumes into ``ExternalRecord`` values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kunrecon.domain.model import ExternalRecord, SourceName, StaffCredit
from kunrecon.domain.reconciliation.normalize import extract_volume_number

if TYPE_CHECKING:
    from .schema import GoogleBooksVolume, ImageLinks


def translate_volume(volume: GoogleBooksVolume) -> ExternalRecord:
    info = volume.volume_info
    title = info.title or volume.id
    return ExternalRecord(
        source=SourceName.GOOGLE_BOOKS,
        title=title,
        external_id=volume.id,
        source_url=info.info_link,
        synopsis=info.description,
        cover_image_url=_cover_url(info.image_links),
        staff=tuple(StaffCredit(name=author, role="Author") for author in info.authors),
        authors=tuple(info.authors),
        isbn=info.isbn("ISBN_13") or info.isbn("ISBN_10"),
        publisher=info.publisher,
        page_count=info.page_count,
        release_date=info.published_date,
        volume_number=extract_volume_number(title),
        year=_year(info.published_date),
    )


def _cover_url(links: ImageLinks | None) -> str | None:
    if links is None:
        return None
    url = links.extra_large or links.large or links.medium or links.thumbnail or links.small_thumbnail
    if url is None:
        return None
    if url.startswith("http://"):
        return "https://" + url.removeprefix("http://")
    return url


def _year(published_date: str | None) -> int | None:
    if not published_date or len(published_date) < 4 or not published_date[:4].isdigit():
        return None
    return int(published_date[:4])
