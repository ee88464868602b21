"""Saved HTML pages of the scraped sites."""

from __future__ import annotations

from pathlib import Path

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def load_page(site: str, name: str) -> str:
    return (DATA_DIR / site / name).read_text(encoding="utf-8")
