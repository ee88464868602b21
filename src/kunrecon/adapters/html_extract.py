"""Null-safe field extractors shared by the scraped detail pages.

Each helper looks for one field and returns ``None`` when it is absent, so a
page missing its publisher still yields its ISBN and release date.
"""

from __future__ import annotations

import re
from datetime import date
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from bs4 import Tag

_LABELLED_ISBN_RE = re.compile(r"ISBN(?:-1[03])?\s*:?\s*(\d[\dXx\- ]{8,20})", re.IGNORECASE)
_BARE_ISBN13_RE = re.compile(r"\b(97[89]\d{10})\b")
_ISBN_SEPARATORS_RE = re.compile(r"[\- ]")
_RELEASE_DATE_PATTERNS = (
    re.compile(r"date\s+de\s+sortie[\s:]*(\d{1,2}[/\-]\d{1,2}[/\-]\d{4})", re.IGNORECASE),
    re.compile(r"sortie[\s:]*(\d{1,2}[/\-]\d{1,2}[/\-]\d{4})", re.IGNORECASE),
    re.compile(r"(\d{1,2}[/\-]\d{1,2}[/\-]\d{4})"),
)
_DATE_PARTS_RE = re.compile(r"[/\-]")
_PAGE_COUNT_RE = re.compile(r"(\d+)\s*pages?\b", re.IGNORECASE)
_PUBLISHER_RE = re.compile(r"[eé]diteur(?:\s+VF)?\s*:?\s*([^\n\r,]+)", re.IGNORECASE)
_QUERY_RE = re.compile(r"\?.*$")
_MIN_SYNOPSIS_LENGTH = 10


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def node_text(node: Tag | None) -> str | None:
    if node is None:
        return None
    text = " ".join(node.get_text(" ").split())
    return text or None


def page_text(soup: BeautifulSoup) -> str:
    """Whole-page text with line breaks kept, for the regex-based fields."""

    body = soup.body or soup
    return body.get_text("\n")


def extract_isbn(text: str) -> str | None:
    """ISBN-13 preferred over ISBN-10; labelled numbers first, then a bare 978/979 run."""

    labelled = [
        _ISBN_SEPARATORS_RE.sub("", found.group(1)).upper()
        for found in _LABELLED_ISBN_RE.finditer(text)
    ]
    for digits in labelled:
        if digits[:3] in {"978", "979"} and len(digits) >= 13 and digits[:13].isdigit():
            return digits[:13]
    bare = _BARE_ISBN13_RE.search(text)
    if bare is not None:
        return bare.group(1)
    for digits in labelled:
        candidate = digits[:10]
        if len(candidate) == 10 and candidate[:9].isdigit():
            return candidate
    return None


def extract_release_date(text: str) -> str | None:
    """First valid ``DD/MM/YYYY`` date near a release label, as ISO ``YYYY-MM-DD``."""

    for pattern in _RELEASE_DATE_PATTERNS:
        for found in pattern.finditer(text):
            day, month, year = _DATE_PARTS_RE.split(found.group(1))
            try:
                return date(int(year), int(month), int(day)).isoformat()
            except ValueError:
                continue
    return None


def extract_page_count(text: str) -> int | None:
    found = _PAGE_COUNT_RE.search(text)
    return int(found.group(1)) if found else None


def extract_publisher(text: str) -> str | None:
    found = _PUBLISHER_RE.search(text)
    if found is None:
        return None
    return found.group(1).strip() or None


def full_size_cover(src: str | None, base_url: str) -> str | None:
    """Thumbnail path to full-size image: drop ``/mini/`` and the query string."""

    if not src:
        return None
    upgraded = _QUERY_RE.sub("", src.replace("/mini/", "/"))
    return urljoin(f"{base_url}/", upgraded)


def image_source(node: Tag | None) -> str | None:
    if node is None:
        return None
    for attribute in ("src", "data-src"):
        value = node.get(attribute)
        if isinstance(value, str) and value:
            return value
    return None


def synopsis_text(node: Tag | None) -> str | None:
    """Description block text; too-short blocks are placeholders."""

    if node is None:
        return None
    for fader in node.select("div.fader"):
        fader.decompose()
    text = node.get_text("\n").strip()
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n\s*\n+", "\n\n", text)
    return text if len(text) > _MIN_SYNOPSIS_LENGTH else None
