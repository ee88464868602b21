"""SQL functions SQLite lacks: ``pg_trgm`` style similarity and Unicode lowercasing."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import event

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = getLogger(__name__)

_WORD_RE = re.compile(r"[^\W_]+")


def trigrams(text: str) -> set[str]:
    """Trigrams of every word, padded with two leading blanks and one trailing blank."""

    grams: set[str] = set()
    for word in _WORD_RE.findall(text.lower()):
        padded = f"  {word} "
        grams.update(padded[index : index + 3] for index in range(len(padded) - 2))
    return grams


def trigram_similarity(left: str | None, right: str | None) -> float:
    if not left or not right:
        return 0.0
    left_grams = trigrams(left)
    right_grams = trigrams(right)
    union = left_grams | right_grams
    if not union:
        return 0.0
    return len(left_grams & right_grams) / len(union)


def register_trigram_similarity(engine: Engine) -> None:
    """Expose ``similarity(a, b)`` on every new SQLite connection of ``engine``."""

    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _register(dbapi_connection: object, _connection_record: object) -> None:
        dbapi_connection.create_function(  # type: ignore[attr-defined]
            "similarity", 2, trigram_similarity, deterministic=True
        )

    log.debug("Registered trigram similarity on %s", engine.url)


def unicode_lower(text: str | None) -> str | None:
    return None if text is None else text.lower()


def register_unicode_lower(engine: Engine) -> None:
    """Expose ``unicode_lower(a)`` on SQLite, whose ``lower()`` only folds ASCII letters."""

    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _register(dbapi_connection: object, _connection_record: object) -> None:
        dbapi_connection.create_function(  # type: ignore[attr-defined]
            "unicode_lower", 1, unicode_lower, deterministic=True
        )
