from __future__ import annotations

import pytest

from kunrecon.adapters.html_extract import (
    extract_isbn,
    extract_page_count,
    extract_publisher,
    extract_release_date,
    full_size_cover,
    image_source,
    node_text,
    parse_html,
    synopsis_text,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("ISBN : 978-2-505-12037-7\nPrix : 7,20 €", "9782505120377"),
        ("ISBN-10 : 2505120371 ISBN-13 : 978-2505120377", "9782505120377"),
        ("EAN 9782505120377 (broché)", "9782505120377"),
        ("ISBN-10: 2-505-12037-1", "2505120371"),
        ("ISBN : 2-505-12030-X", "250512030X"),
        ("Aucun identifiant", None),
    ],
)
def test_extract_isbn(text: str, expected: str | None) -> None:
    assert extract_isbn(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Date de sortie : 06/03/2024", "2024-03-06"),
        ("Sortie : 1-2-2023", "2023-02-01"),
        ("Paru le 15/11/2023 chez Kana", "2023-11-15"),
        ("Bientôt disponible", None),
        ("Date de sortie : 31/02/2023", None),
        ("Sortie : 32/01/2024, réédition 05/07/2024", "2024-07-05"),
    ],
)
def test_extract_release_date(text: str, expected: str | None) -> None:
    assert extract_release_date(text) == expected


def test_extract_page_count() -> None:
    assert extract_page_count("Nombre de pages : 192 pages") == 192
    assert extract_page_count("1 page") == 1
    assert extract_page_count("Pages : inconnues") is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Éditeur VF : Kana\nPrix : 7 €", "Kana"),
        ("Editeur : Glénat, 2023", "Glénat"),
        ("éditeur Pika", "Pika"),
        ("Auteur : ODA Eiichiro", None),
    ],
)
def test_extract_publisher(text: str, expected: str | None) -> None:
    assert extract_publisher(text) == expected


def test_full_size_cover() -> None:
    base = "https://www.nautiljon.com"

    assert (
        full_size_cover("/images/manga/mini/one-piece.jpg?1700000000", base)
        == "https://www.nautiljon.com/images/manga/one-piece.jpg"
    )
    assert (
        full_size_cover("https://cdn.example.test/cover.jpg", base)
        == "https://cdn.example.test/cover.jpg"
    )
    assert full_size_cover(None, base) is None
    assert full_size_cover("", base) is None


def test_image_source_prefers_src_then_lazy_attribute() -> None:
    soup = parse_html('<img id="a" src="/a.jpg"><img id="b" data-src="/b.jpg"><img id="c">')

    assert image_source(soup.select_one("#a")) == "/a.jpg"
    assert image_source(soup.select_one("#b")) == "/b.jpg"
    assert image_source(soup.select_one("#c")) is None
    assert image_source(None) is None


def test_node_text_collapses_whitespace() -> None:
    soup = parse_html("<p>  One\n   <b>Piece</b>  </p><p> </p>")
    first, blank = soup.select("p")

    assert node_text(first) == "One Piece"
    assert node_text(blank) is None
    assert node_text(None) is None


def test_synopsis_text_drops_fader_and_placeholders() -> None:
    soup = parse_html(
        '<div id="long">Un synopsis   assez long.\n\n\n Deuxième ligne.'
        '<div class="fader">Lire la suite</div></div>'
        '<div id="short">Aucun.</div>'
    )

    assert synopsis_text(soup.select_one("#long")) == "Un synopsis assez long.\n\n Deuxième ligne."
    assert synopsis_text(soup.select_one("#short")) is None
    assert synopsis_text(None) is None
