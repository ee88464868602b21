"""Translate OpenLibrary payloads into ``ExternalRecord`` values."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from kunrecon.domain.model import ExternalRecord, SourceName, StaffCredit
from kunrecon.domain.reconciliation.normalize import extract_volume_number

from .schema import OpenLibraryText

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .schema import OpenLibraryEdition, OpenLibraryWork

_YEAR_RE = re.compile(r"\b(\d{4})\b")


def description_text(description: str | OpenLibraryText | None) -> str | None:
    if isinstance(description, OpenLibraryText):
        return description.value or None
    return description or None


def translate_edition(
    edition: OpenLibraryEdition,
    *,
    isbn: str,
    work: OpenLibraryWork | None = None,
    authors: Sequence[str] = (),
    covers_url: str,
    max_subjects: int = 5,
) -> ExternalRecord:
    title = f"{edition.title}: {edition.subtitle}" if edition.subtitle else edition.title
    synopsis = description_text(edition.description) or (
        description_text(work.description) if work else None
    )
    year_match = _YEAR_RE.search(edition.publish_date or "")
    return ExternalRecord(
        source=SourceName.OPENLIBRARY,
        title=title,
        external_id=edition.key,
        source_url=f"https://openlibrary.org{edition.key}" if edition.key else None,
        synopsis=synopsis,
        cover_image_url=f"{covers_url}/b/isbn/{isbn}-L.jpg",
        genres=tuple(work.subjects[:max_subjects]) if work else (),
        staff=tuple(StaffCredit(name=name, role="Author") for name in authors),
        authors=tuple(authors),
        isbn=next(iter(edition.isbn_13), None) or next(iter(edition.isbn_10), None) or isbn,
        publisher=next(iter(edition.publishers), None),
        page_count=edition.number_of_pages,
        release_date=edition.publish_date,
        volume_number=extract_volume_number(edition.title),
        year=int(year_match.group(1)) if year_match else None,
    )
