#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kunrecon.app import (
    reconcile_isbn,
    reconcile_listing,
    reconcile_listing_html,
    reconcile_listing_url,
)
from kunrecon.config import ConfigurationError, configure_logging
from kunrecon.domain.model import CatalogKind
from kunrecon.domain.reconciliation import InvalidReconciliationInput

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from kunrecon.domain.model import MergedCandidate


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile anime and manga titles against the local catalog"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    listing = subparsers.add_parser("listing", help="Compare listing titles with the catalog")
    listing.add_argument("titles", nargs="*", help="Raw titles to reconcile")
    source = listing.add_mutually_exclusive_group()
    source.add_argument("--html-file", type=Path, help="Saved listing page to extract titles from")
    source.add_argument("--url", help="Nautiljon listing page to download and extract")
    listing.add_argument(
        "--catalog",
        choices=[kind.value for kind in CatalogKind],
        default=CatalogKind.ANIME.value,
        help="Catalog to match against (default: %(default)s)",
    )

    isbn = subparsers.add_parser("isbn", help="Resolve an ISBN against the manga catalog")
    isbn.add_argument("isbn", help="ISBN-10 or ISBN-13, hyphens allowed")

    args = parser.parse_args(list(argv))
    if args.command == "listing" and not (args.titles or args.html_file or args.url):
        parser.error("listing needs titles, --html-file or --url")
    return args


def _run(args: argparse.Namespace) -> list[MergedCandidate]:
    if args.command == "isbn":
        return [reconcile_isbn(args.isbn)]
    kind = CatalogKind(args.catalog)
    if args.html_file is not None:
        html = args.html_file.read_text(encoding="utf-8")
        return reconcile_listing_html(html, catalog_kind=kind)
    if args.url:
        return reconcile_listing_url(args.url, catalog_kind=kind)
    return reconcile_listing(args.titles, catalog_kind=kind)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    signal(SIGINT, sigint_handler)
    parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
    load_dotenv()
    configure_logging(level=parsed_args.log_level)
    try:
        candidates = _run(parsed_args)
    except (InvalidReconciliationInput, ConfigurationError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps([candidate.to_dict() for candidate in candidates], ensure_ascii=False, indent=2))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)", file=sys.stderr)
    sys.exit(0)


if __name__ == "__main__":
    main()
