"""Reconciliation of scraped titles and ISBNs against the local catalog."""

from __future__ import annotations

from .engine import (
    DEFAULT_LISTING_PRIORITY,
    InvalidReconciliationInput,
    ReconciliationEngine,
    validate_isbn,
    validate_title,
)
from .match import CatalogMatcher
from .merge import merge_records, order_by_priority
from .normalize import (
    clean_isbn,
    extract_volume_number,
    is_valid_isbn,
    normalize_title,
    slugify_for_search,
    strip_volume_suffix,
)
from .ranking import rank_by_title
from .vocabulary import (
    VOCABULARY_VERSION,
    annotate_record,
    map_genre,
    map_media_format,
    map_staff_role,
)

__all__ = [
    "DEFAULT_LISTING_PRIORITY",
    "VOCABULARY_VERSION",
    "CatalogMatcher",
    "InvalidReconciliationInput",
    "ReconciliationEngine",
    "annotate_record",
    "clean_isbn",
    "extract_volume_number",
    "is_valid_isbn",
    "map_genre",
    "map_media_format",
    "map_staff_role",
    "merge_records",
    "normalize_title",
    "order_by_priority",
    "rank_by_title",
    "slugify_for_search",
    "strip_volume_suffix",
    "validate_isbn",
    "validate_title",
]
