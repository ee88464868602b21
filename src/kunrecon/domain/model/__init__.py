"""Domain model for catalog reconciliation."""

from __future__ import annotations

from .candidates import (
    NO_MATCH,
    CandidateVocabulary,
    MappedStaffCredit,
    MatchCandidate,
    MergedCandidate,
    VocabularyTerm,
)
from .enums import (
    CatalogKind,
    CharacterRole,
    ConfidenceTier,
    MatchedField,
    MatchMethod,
    SourceName,
    VoiceLanguage,
)
from .records import STUDIO_ROLE, CharacterCredit, ExternalRecord, StaffCredit, VoiceActor

__all__ = [
    "NO_MATCH",
    "STUDIO_ROLE",
    "CandidateVocabulary",
    "CatalogKind",
    "CharacterCredit",
    "CharacterRole",
    "ConfidenceTier",
    "ExternalRecord",
    "MappedStaffCredit",
    "MatchCandidate",
    "MatchMethod",
    "MatchedField",
    "MergedCandidate",
    "SourceName",
    "StaffCredit",
    "VoiceActor",
    "VoiceLanguage",
    "VocabularyTerm",
]
