from __future__ import annotations

from kunrecon.domain.model import ExternalRecord, SourceName
from kunrecon.domain.reconciliation.ranking import rank_by_title, title_score


def _record(title: str, **kwargs: object) -> ExternalRecord:
    return ExternalRecord(source=SourceName.JIKAN, title=title, **kwargs)  # type: ignore[arg-type]


def test_title_score_uses_every_known_title() -> None:
    record = _record("Sousou no Frieren", english_title="Frieren: Beyond Journey's End")

    assert title_score("frieren beyond journey's end", record) == 100.0


def test_title_score_ignores_accents_and_punctuation() -> None:
    assert title_score("Pokémon: Horizons", _record("Pokemon Horizons")) == 100.0


def test_best_match_first() -> None:
    movie = _record("Frieren Movie Special")
    series = _record("Sousou no Frieren", alternative_titles=("Frieren",))

    ranked = rank_by_title("Frieren", [movie, series])

    assert ranked == (series, movie)


def test_ties_keep_provider_order() -> None:
    first = _record("Naruto", external_id="1")
    second = _record("Naruto", external_id="2")

    assert rank_by_title("Naruto", [first, second]) == (first, second)


def test_empty() -> None:
    assert rank_by_title("anything", []) == ()
