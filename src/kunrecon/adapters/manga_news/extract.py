"""Manga-News page extractors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kunrecon.adapters.html_extract import (
    extract_isbn,
    extract_page_count,
    extract_publisher,
    extract_release_date,
    full_size_cover,
    image_source,
    node_text,
    page_text,
    parse_html,
    synopsis_text,
)
from kunrecon.config.scraping import MANGA_NEWS_BASE_URL
from kunrecon.domain.model import ExternalRecord, SourceName, StaffCredit
from kunrecon.domain.reconciliation.normalize import clean_isbn, extract_volume_number

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

AUTHOR_ROLE = "Auteur"
_RESULT_PATH_MARKERS = ("/manga/", "/vol/")


def is_detail_page(soup: BeautifulSoup) -> bool:
    return soup.select_one("#cover") is not None and soup.select_one("h1") is not None


def extract_search_result_url(html: str) -> str | None:
    """URL of the sheet a search page leads to.

    A search that hits a single sheet renders the sheet itself; its canonical
    link is the answer. Otherwise the first result pointing at a series or a
    volume wins.
    """

    soup = parse_html(html)
    if is_detail_page(soup):
        canonical = soup.select_one("link[rel='canonical']")
        href = canonical.get("href") if canonical else None
        if isinstance(href, str) and href:
            return href
    for anchor in soup.select("#results_search .entry a.title"):
        href = anchor.get("href")
        if isinstance(href, str) and any(marker in href for marker in _RESULT_PATH_MARKERS):
            return href
    return None


def extract_manga_news_details(
    html: str, *, url: str | None = None, base_url: str = MANGA_NEWS_BASE_URL
) -> ExternalRecord | None:
    """Series or volume sheet to a record; ``None`` without a title."""

    soup = parse_html(html)
    title = node_text(soup.select_one("h1"))
    if not title:
        return None

    body = page_text(soup)
    authors = tuple(
        dict.fromkeys(name for name in map(node_text, soup.select(".entry-author a")) if name)
    )
    publishers = [name for name in map(node_text, soup.select(".entry-editor a")) if name]
    isbn_node = node_text(soup.select_one("[itemprop='isbn']"))
    return ExternalRecord(
        source=SourceName.MANGA_NEWS,
        title=title,
        source_url=url,
        synopsis=synopsis_text(soup.select_one("#summary")),
        cover_image_url=full_size_cover(image_source(soup.select_one("#cover img")), base_url),
        staff=tuple(StaffCredit(name=name, role=AUTHOR_ROLE) for name in authors),
        authors=authors,
        isbn=clean_isbn(isbn_node) if isbn_node else extract_isbn(body),
        publisher=publishers[0] if publishers else extract_publisher(body),
        page_count=extract_page_count(body),
        release_date=extract_release_date(body),
        volume_number=extract_volume_number(title),
    )
