from __future__ import annotations

import json
from signal import SIGINT
from typing import TYPE_CHECKING

import pytest

from kunrecon import main as main_module
from kunrecon.config import ConfigurationError
from kunrecon.domain.model import CatalogKind, MergedCandidate
from kunrecon.domain.reconciliation import InvalidReconciliationInput

if TYPE_CHECKING:
    from pathlib import Path


def _candidate(raw_title: str) -> MergedCandidate:
    return MergedCandidate(raw_title=raw_title)


@pytest.fixture(autouse=True)
def isolated_entry_point(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "configure_logging", lambda **_: None)
    monkeypatch.setattr(main_module, "load_dotenv", lambda: False)
    monkeypatch.setattr(main_module, "signal", lambda *_: None)


def test_listing_titles(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(titles: list[str], **kwargs: object) -> list[MergedCandidate]:
        captured["titles"] = titles
        captured.update(kwargs)
        return [_candidate(title) for title in titles]

    monkeypatch.setattr(main_module, "reconcile_listing", fake_reconcile)

    main_module.main(["listing", "Frieren", "Dandadan"])

    assert captured["titles"] == ["Frieren", "Dandadan"]
    assert captured["catalog_kind"] is CatalogKind.ANIME
    output = json.loads(capsys.readouterr().out)
    assert [entry["raw_title"] for entry in output] == ["Frieren", "Dandadan"]
    assert output[0]["exists"] is False
    assert output[0]["merged_fields"] == {}


def test_listing_html_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}
    page = tmp_path / "listing.html"
    page.write_text("<h2><a>Frieren</a></h2>", encoding="utf-8")

    def fake_reconcile(html: str, **kwargs: object) -> list[MergedCandidate]:
        captured["html"] = html
        captured.update(kwargs)
        return []

    monkeypatch.setattr(main_module, "reconcile_listing_html", fake_reconcile)

    main_module.main(["listing", "--html-file", str(page), "--catalog", "manga"])

    assert captured["html"] == "<h2><a>Frieren</a></h2>"
    assert captured["catalog_kind"] is CatalogKind.MANGA
    assert json.loads(capsys.readouterr().out) == []


def test_listing_url(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(url: str, **kwargs: object) -> list[MergedCandidate]:
        captured["url"] = url
        captured.update(kwargs)
        return []

    monkeypatch.setattr(main_module, "reconcile_listing_url", fake_reconcile)

    main_module.main(["listing", "--url", "https://www.nautiljon.com/animes/automne-2023.html"])

    assert captured["url"] == "https://www.nautiljon.com/animes/automne-2023.html"


def test_isbn(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def fake_reconcile(isbn: str) -> MergedCandidate:
        return MergedCandidate(raw_title=isbn, isbn=isbn)

    monkeypatch.setattr(main_module, "reconcile_isbn", fake_reconcile)

    main_module.main(["isbn", "9782723488525"])

    (entry,) = json.loads(capsys.readouterr().out)
    assert entry["isbn"] == "9782723488525"


def test_listing_without_input_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["listing"])

    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (InvalidReconciliationInput("Malformed ISBN: 'abc'"), 2),
        (ConfigurationError("KUNRECON_MAX_CONCURRENT_TITLES must be at least 1"), 2),
        (RuntimeError("database unreachable"), 1),
    ],
)
def test_errors_map_to_exit_codes(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    error: Exception,
    code: int,
) -> None:
    def fake_reconcile(_isbn: str) -> MergedCandidate:
        raise error

    monkeypatch.setattr(main_module, "reconcile_isbn", fake_reconcile)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["isbn", "abc"])

    assert excinfo.value.code == code
    assert f"Error: {error}" in capsys.readouterr().err


def test_main_installs_the_interrupt_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    installed: list[object] = []
    monkeypatch.setattr(
        main_module, "signal", lambda signum, handler: installed.append((signum, handler))
    )
    monkeypatch.setattr(main_module, "reconcile_listing", lambda titles, **_: [])

    main_module.main(["listing", "Frieren"])

    assert installed == [(SIGINT, main_module.sigint_handler)]


def test_interrupt_exits_cleanly_without_touching_stdout(
    capsys: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.sigint_handler(SIGINT, None)

    captured = capsys.readouterr()
    assert excinfo.value.code == 0
    assert captured.out == ""
    assert "Closed by user" in captured.err
