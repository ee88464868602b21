"""Value objects handed back to the operator reviewing an import queue."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .enums import ConfidenceTier, MatchedField, MatchMethod, SourceName
    from .records import ExternalRecord


@dataclass(slots=True, frozen=True, kw_only=True)
class MatchCandidate:
    """Single best catalog hit for a title, or the absence of one."""

    existing_id: int | None = None
    existing_title: str | None = None
    matched_field: MatchedField | None = None
    confidence_tier: ConfidenceTier | None = None
    method: MatchMethod | None = None
    score: float | None = None

    @property
    def exists(self) -> bool:
        return self.existing_id is not None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


NO_MATCH = MatchCandidate()


@dataclass(slots=True, frozen=True, kw_only=True)
class VocabularyTerm:
    """An external term and the controlled-vocabulary entry it maps to, if any."""

    external_term: str
    canonical_id: int | None = None
    canonical_name: str | None = None

    @property
    def mapped(self) -> bool:
        return self.canonical_id is not None


@dataclass(slots=True, frozen=True, kw_only=True)
class MappedStaffCredit:
    name: str
    role: VocabularyTerm


@dataclass(slots=True, frozen=True, kw_only=True)
class CandidateVocabulary:
    staff: tuple[MappedStaffCredit, ...] = ()
    genres: tuple[VocabularyTerm, ...] = ()
    themes: tuple[VocabularyTerm, ...] = ()
    version: str | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class MergedCandidate:
    """Reconciliation outcome for one raw title or ISBN."""

    raw_title: str
    match: MatchCandidate = NO_MATCH
    merged_fields: ExternalRecord | None = None
    per_source_records: Mapping[SourceName, ExternalRecord] = field(default_factory=dict)
    vocabulary: CandidateVocabulary = field(default_factory=CandidateVocabulary)
    isbn: str | None = None
    volume_number: int | None = None

    @property
    def exists(self) -> bool:
        return self.match.exists

    @property
    def existing_id(self) -> int | None:
        return self.match.existing_id

    def to_dict(self) -> dict[str, object]:
        return {
            "raw_title": self.raw_title,
            "exists": self.exists,
            "existing_id": self.existing_id,
            "match": self.match.to_dict(),
            "merged_fields": self.merged_fields.to_dict() if self.merged_fields else {},
            "per_source_records": {
                str(source): record.to_dict()
                for source, record in sorted(self.per_source_records.items())
            },
            "vocabulary": asdict(self.vocabulary),
            "isbn": self.isbn,
            "volume_number": self.volume_number,
        }
