"""Nautiljon page extractors: season listings, anime sheets and volume sheets."""

from __future__ import annotations

import re
from logging import getLogger
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
from kunrecon.config.scraping import NAUTILJON_BASE_URL
from kunrecon.domain.model import (
    CharacterCredit,
    CharacterRole,
    ExternalRecord,
    SourceName,
    StaffCredit,
    VoiceActor,
    VoiceLanguage,
)
from kunrecon.domain.reconciliation.normalize import extract_volume_number

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bs4 import BeautifulSoup, Tag

log = getLogger(__name__)

_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)")
_VOICE_ACTOR_RE = re.compile(r"(.+?)\s*\((.+?)\)")
_LEADING_NUMBER_RE = re.compile(r"\d+")

_CHARACTER_ROLES = {
    "principal": CharacterRole.MAIN,
    "principale": CharacterRole.MAIN,
    "secondaire": CharacterRole.SUPPORTING,
}
_VOICE_LANGUAGES = {
    "japonais": VoiceLanguage.JAPANESE,
    "jp": VoiceLanguage.JAPANESE,
    "ja": VoiceLanguage.JAPANESE,
    "français": VoiceLanguage.FRENCH,
    "francais": VoiceLanguage.FRENCH,
    "fr": VoiceLanguage.FRENCH,
    "anglais": VoiceLanguage.ENGLISH,
    "en": VoiceLanguage.ENGLISH,
}
_CHARACTER_SECTIONS = frozenset({"Personnages", "Characters"})


def extract_listing_titles(html: str) -> list[str]:
    """Anime titles of a season listing page, parentheticals stripped, in page order.

    Titles come from ``div.elt .title h2 a``; when that markup yields nothing
    every ``h2 a`` on the page is used instead.
    """

    soup = parse_html(html)
    titles = _listing_titles(
        container.select_one(".title h2 a") for container in soup.select("div.elt")
    )
    if not titles:
        log.info("No listing entries found, falling back to heading links")
        titles = _listing_titles(soup.select("h2 a"))
    return list(dict.fromkeys(titles))


def _listing_titles(anchors: Iterable[Tag | None]) -> list[str]:
    titles: list[str] = []
    for anchor in anchors:
        text = node_text(anchor)
        if not text:
            continue
        title = _PARENTHETICAL_RE.sub("", text).strip()
        if title:
            titles.append(title)
    return titles


def extract_anime_details(
    html: str, *, url: str | None = None, base_url: str = NAUTILJON_BASE_URL
) -> ExternalRecord | None:
    """Anime sheet to record; ``None`` when the page carries no title."""

    soup = parse_html(html)
    title = _sheet_title(soup)
    if not title:
        return None

    format_item = soup.select_one("ul.mb10 li")
    media_format = node_text(format_item.find("a")) if format_item else None
    episodes = (
        _as_int(node_text(format_item.select_one("span[itemprop='numberOfEpisodes']")))
        if format_item
        else None
    )
    studio_item = _labelled_item(soup, "Studio d'animation")
    official_item = _labelled_item(soup, "Site web officiel")

    return ExternalRecord(
        source=SourceName.NAUTILJON,
        title=title,
        source_url=url,
        original_title=_labelled_value(soup, "Titre original"),
        alternative_titles=_alternative_titles(soup),
        synopsis=synopsis_text(soup.select_one("div.description")),
        cover_image_url=full_size_cover(
            image_source(soup.select_one(".image_fiche img")), base_url
        ),
        genres=_genre_spans(_labelled_item(soup, "Genres :")),
        themes=_genre_spans(_labelled_item(soup, "Thèmes :")),
        studios=_texts(studio_item.select("span[itemprop='legalName']") if studio_item else ()),
        staff=_people_credits(_section(soup, {"Staff"})),
        characters=_characters(_section(soup, _CHARACTER_SECTIONS)),
        episode_or_volume_count=episodes,
        airing_or_release_info=_labelled_value(soup, "Diffusion :"),
        duration=_labelled_value(soup, "Durée :"),
        official_links=_hrefs(official_item),
        media_format=media_format,
    )


def extract_volume_details(
    html: str, *, url: str | None = None, base_url: str = NAUTILJON_BASE_URL
) -> ExternalRecord | None:
    """Volume sheet to a book-shaped record; ``None`` when the page carries no title."""

    soup = parse_html(html)
    title = _sheet_title(soup, use_cover_alt=False)
    if not title:
        return None

    body = page_text(soup)
    info_box = soup.select_one("div.info_fiche, table.info_fiche")
    isbn = (extract_isbn(info_box.get_text("\n")) if info_box else None) or extract_isbn(body)
    return ExternalRecord(
        source=SourceName.NAUTILJON,
        title=title,
        source_url=url,
        synopsis=synopsis_text(soup.select_one("div.description")),
        cover_image_url=full_size_cover(
            image_source(soup.select_one("div.image_fiche img, .image_fiche img")), base_url
        ),
        isbn=isbn,
        publisher=extract_publisher(body),
        page_count=extract_page_count(body),
        release_date=extract_release_date(body),
        volume_number=extract_volume_number(title),
    )


def _sheet_title(soup: BeautifulSoup, *, use_cover_alt: bool = True) -> str | None:
    heading = soup.select_one("h1.h1titre")
    if heading is not None:
        for button in heading.select("a.buttonlike"):
            button.decompose()
        title = node_text(heading)
        if title:
            return title
    if use_cover_alt:
        cover = soup.select_one("div.image_fiche img")
        alt = cover.get("alt") if cover else None
        if isinstance(alt, str) and alt.strip():
            return alt.strip()
    return None


def _labelled_item(soup: BeautifulSoup, label: str) -> Tag | None:
    for item in soup.find_all("li"):
        if label in item.get_text():
            return item
    return None


def _labelled_value(soup: BeautifulSoup, label: str) -> str | None:
    item = _labelled_item(soup, label)
    if item is None:
        return None
    text = node_text(item) or ""
    _, _, value = text.partition(label.rstrip(" :"))
    return value.lstrip(" :").strip() or None


def _alternative_titles(soup: BeautifulSoup) -> tuple[str, ...]:
    item = _labelled_item(soup, "Titre alternatif")
    if item is None:
        return ()
    titles: list[str] = []
    span = node_text(item.select_one("span[itemprop='alternateName']"))
    remainder = _labelled_value(soup, "Titre alternatif") or ""
    if span:
        titles.append(span)
        remainder = remainder.replace(span, "")
    titles.extend(part.strip() for part in remainder.split("/") if part.strip())
    return tuple(dict.fromkeys(titles))


def _genre_spans(item: Tag | None) -> tuple[str, ...]:
    return _texts(item.select("span[itemprop='genre']") if item else ())


def _texts(nodes: Iterable[Tag]) -> tuple[str, ...]:
    return tuple(text for text in (node_text(node) for node in nodes) if text)


def _hrefs(item: Tag | None) -> tuple[str, ...]:
    if item is None:
        return ()
    hrefs = (anchor.get("href") for anchor in item.find_all("a"))
    return tuple(href for href in hrefs if isinstance(href, str) and href)


def _section(soup: BeautifulSoup, headings: set[str] | frozenset[str]) -> Tag | None:
    for block in soup.select("div.top_bloc"):
        heading = node_text(block.find("h2"))
        if heading in headings:
            return block
    return None


def _people(section: Tag | None) -> list[tuple[str, str, Tag]]:
    if section is None:
        return []
    people: list[tuple[str, str, Tag]] = []
    for person in section.select(".unPeople"):
        name = node_text(person.select_one(".unPeopleT a"))
        role = node_text(person.select_one(".nom_role"))
        if name and role:
            people.append((name, role, person))
    return people


def _people_credits(section: Tag | None) -> tuple[StaffCredit, ...]:
    return tuple(
        dict.fromkeys(StaffCredit(name=name, role=role) for name, role, _ in _people(section))
    )


def _characters(section: Tag | None) -> tuple[CharacterCredit, ...]:
    characters: dict[str, CharacterCredit] = {}
    for name, role, person in _people(section):
        mapped = _CHARACTER_ROLES.get(role.casefold())
        if mapped is None:
            continue
        credit = CharacterCredit(
            name=name,
            role=mapped,
            voice_actors=tuple(
                actor
                for actor in (_voice_actor(node) for node in person.select(".doublage"))
                if actor is not None
            ),
        )
        characters.setdefault(credit.dedupe_key, credit)
    return tuple(characters.values())


def _voice_actor(node: Tag) -> VoiceActor | None:
    text = node_text(node)
    if not text:
        return None
    found = _VOICE_ACTOR_RE.match(text)
    if found is None:
        return VoiceActor(name=text, language=VoiceLanguage.JAPANESE)
    language = found.group(2).strip()
    return VoiceActor(
        name=found.group(1).strip(),
        language=_VOICE_LANGUAGES.get(language.casefold(), language),
    )


def _as_int(text: str | None) -> int | None:
    if not text:
        return None
    found = _LEADING_NUMBER_RE.search(text)
    return int(found.group(0)) if found else None
