"""Manga classification of Google Books volumes.

A volume counts as manga only on positive evidence. Rules, first decisive one wins:

1. publisher on the non-manga list: reject
2. title or description carries a non-manga keyword: reject
3. publisher on the manga roster for the requested language: accept
4. a category mentions manga or comics & graphic novels: accept
5. otherwise: reject
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from kunrecon.domain.reconciliation.normalize import fold_accents

if TYPE_CHECKING:
    from .schema import VolumeInfo

JAPANESE_PUBLISHERS: Final = (
    "shueisha",
    "shogakukan",
    "kodansha",
    "kadokawa",
    "hakusensha",
    "akita shoten",
    "square enix",
)

FRENCH_MANGA_PUBLISHERS: Final = (
    "glenat",
    "kana",
    "pika",
    "ki-oon",
    "kioon",
    "kurokawa",
    "delcourt",
    "tonkam",
    "kaze",
    "soleil manga",
    "akata",
    "doki-doki",
    "panini manga",
    "vega",
    "dupuis manga",
    "mangetsu",
    "noeve",
    "ototo",
    "taifu",
    "meian",
    "black box",
    "nobi nobi",
    "sakka",
    "komikku",
    "naban",
    "h2t",
    "isan manga",
    "crunchyroll",
)

ENGLISH_MANGA_PUBLISHERS: Final = (
    "viz",
    "yen press",
    "seven seas",
    "vertical",
    "dark horse manga",
    "tokyopop",
    "j-novel",
    "denpa",
    "one peace",
    "udon entertainment",
    "ghost ship",
    "airship",
)

NON_MANGA_PUBLISHERS: Final = (
    "harlequin",
    "mills & boon",
    "j'ai lu",
    "pocket",
    "folio",
    "gallimard",
    "le livre de poche",
    "hachette education",
    "larousse",
    "nathan",
    "bordas",
    "hatier",
    "dunod",
    "eyrolles",
    "penguin",
    "harpercollins",
)

_NON_MANGA_KEYWORDS_RE: Final = re.compile(
    r"\b(?:roman|romans|cookbook|livre de cuisine|recettes|dictionnaire|dictionary|"
    r"grammaire|textbook|manuel scolaire|coloriage|coloring book|colouring book|"
    r"cahier d'activites|biographie|guide de voyage|light novel)\b"
)

_MANGA_CATEGORY_RE: Final = re.compile(r"manga|comics\s*&\s*graphic novels")


def _fold(text: str | None) -> str:
    return fold_accents(text or "").lower()


def manga_publishers(language: str | None) -> tuple[str, ...]:
    if language == "fr":
        return FRENCH_MANGA_PUBLISHERS + JAPANESE_PUBLISHERS
    if language == "en":
        return ENGLISH_MANGA_PUBLISHERS + JAPANESE_PUBLISHERS
    return FRENCH_MANGA_PUBLISHERS + ENGLISH_MANGA_PUBLISHERS + JAPANESE_PUBLISHERS


def _publisher_matches(publisher: str, roster: tuple[str, ...]) -> bool:
    return any(re.search(rf"(?<![\w-]){re.escape(name)}(?![\w-])", publisher) for name in roster)


def is_manga_volume(info: VolumeInfo, *, language: str | None = None) -> bool:
    publisher = _fold(info.publisher)
    if publisher and _publisher_matches(publisher, NON_MANGA_PUBLISHERS):
        return False
    text = f"{_fold(info.title)} {_fold(info.subtitle)} {_fold(info.description)}"
    if _NON_MANGA_KEYWORDS_RE.search(text):
        return False
    if publisher and _publisher_matches(publisher, manga_publishers(language)):
        return True
    return any(_MANGA_CATEGORY_RE.search(category.lower()) for category in info.categories)
