"""Title normalization: search variants, volume handling and ISBN cleanup.

Every function here is pure and total. ``normalize_title`` returns an ordered,
duplicate-free tuple whose first element is always the input string, so callers
can tell the original apart from derived variants.
"""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_TRAILING_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)\s*$")
_COLON_RE = re.compile(r"\s*:\s*")
_DASH_RE = re.compile(r"\s*[-‐‑–—]\s*")

_ORDINAL_SEASON_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\s+season\b", re.IGNORECASE)
_SEASON_NUMBER_RE = re.compile(r"\bseason\s*(\d{1,2})\b", re.IGNORECASE)
_ORDINAL_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b", re.IGNORECASE)
_TRAILING_NUMBER_RE = re.compile(r"(?<=\s)(\d{1,2})$")
_SEASON_PATTERNS = (_ORDINAL_SEASON_RE, _SEASON_NUMBER_RE, _ORDINAL_RE, _TRAILING_NUMBER_RE)

_VOLUME_SUFFIX_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[,\s]*\btome\s+\d+", re.IGNORECASE), ""),
    (re.compile(r"[,\s]*\bvolume\s+\d+", re.IGNORECASE), ""),
    (re.compile(r"[,\s]*\bvol\.?\s*\d+", re.IGNORECASE), ""),
    (re.compile(r"[,\s]*\bt\.?\s*\d+\b", re.IGNORECASE), ""),
    (re.compile(r"\s*\b\d+(?:st|nd|rd|th)\s+edition\b", re.IGNORECASE), ""),
    (re.compile(r"\s*\bédition\s+\d+", re.IGNORECASE), ""),
    (re.compile(r"\s+\d+\s*$"), ""),
    (re.compile(r"[,\-:\s]+$"), ""),
)

# First match wins.
_VOLUME_NUMBER_PATTERNS = (
    re.compile(r"\btome\s*(\d+)", re.IGNORECASE),
    re.compile(r"\bvol\.?\s*(\d+)", re.IGNORECASE),
    re.compile(r"\bvolume\s*(\d+)", re.IGNORECASE),
    re.compile(r"\bt\.?\s*(\d+)(?:\s|$)", re.IGNORECASE),
    re.compile(r"(\d+)\s*巻"),
    re.compile(r"#\s*(\d+)"),
)

_ISBN_SEPARATORS_RE = re.compile(r"[-\s]")
_ISBN_RE = re.compile(r"^(?:\d{9}[\dX]|\d{13})$")
_SLUG_DROP_RE = re.compile(r"[^a-z0-9\s-]")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def ordinal(number: int) -> str:
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def normalize_title(raw: str) -> tuple[str, ...]:
    """Return the search variants of ``raw``, original first.

    Each rule starts from the whitespace-collapsed title; rules do not chain.
    """

    if not raw:
        return ()
    collapsed = collapse_whitespace(raw)
    variants: list[str] = [raw, collapsed]
    if collapsed:
        variants.append(collapse_whitespace(_NON_WORD_RE.sub("", collapsed)))
        variants.append(collapse_whitespace(_NON_WORD_RE.sub(" ", collapsed)))
        variants.append(fold_accents(collapsed))
        variants.append(_TRAILING_PARENTHETICAL_RE.sub("", collapsed))
        variants.extend(_season_variants(collapsed))
        variants.append(collapse_whitespace(_COLON_RE.sub(" ", collapsed)))
        variants.append(collapse_whitespace(_DASH_RE.sub(" ", collapsed)))
    return _dedupe_non_empty(variants)


def _season_variants(title: str) -> list[str]:
    for pattern in _SEASON_PATTERNS:
        found = pattern.search(title)
        if found is None:
            continue
        number = int(found.group(1))
        forms = (f"{ordinal(number)} Season", f"Season {number}", ordinal(number), str(number))
        head, tail = title[: found.start()], title[found.end() :]
        return [collapse_whitespace(f"{head}{form}{tail}") for form in forms]
    return []


def _dedupe_non_empty(values: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if not value or not value.strip() or value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return tuple(ordered)


def strip_volume_suffix(title: str) -> str:
    """Drop tome/volume/edition markers so a single volume's title finds its series."""

    cleaned = title
    for pattern, replacement in _VOLUME_SUFFIX_RULES:
        cleaned = pattern.sub(replacement, cleaned)
    cleaned = collapse_whitespace(cleaned)
    return cleaned or collapse_whitespace(title)


def extract_volume_number(title: str | None) -> int | None:
    if not title:
        return None
    for pattern in _VOLUME_NUMBER_PATTERNS:
        found = pattern.search(title)
        if found is not None:
            return int(found.group(1))
    return None


def slugify_for_search(title: str) -> str:
    """Lowercase ASCII slug with ``+`` for spaces, as used by scraped search URLs."""

    folded = fold_accents(title.lower())
    kept = _SLUG_DROP_RE.sub("", folded)
    return "+".join(kept.split())


def clean_isbn(raw: str) -> str:
    return _ISBN_SEPARATORS_RE.sub("", raw).upper()


def is_valid_isbn(isbn: str) -> bool:
    return bool(_ISBN_RE.match(isbn))


def normalize_key(text: str) -> str:
    """Comparison key: accents folded, punctuation dropped, casefolded."""

    folded = fold_accents(unicodedata.normalize("NFKC", text))
    return collapse_whitespace(_NON_WORD_RE.sub(" ", folded)).casefold()
