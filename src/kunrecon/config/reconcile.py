"""Reconciliation defaults."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, optional_env_var
from .errors import ConfigurationError

DEFAULT_SIMILARITY_THRESHOLD = 0.3
DEFAULT_MAX_CONCURRENT_TITLES = 4


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    # Rows pulled from the similarity query before the volume tie-break.
    similarity_candidates: int = 5


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    max_concurrent_titles: int = DEFAULT_MAX_CONCURRENT_TITLES
    batch_budget_seconds: float | None = None


def get_matching_config() -> MatchingConfig:
    threshold = env_float("KUNRECON_SIMILARITY_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD)
    if not 0.0 <= threshold <= 1.0:
        raise ConfigurationError(
            f"KUNRECON_SIMILARITY_THRESHOLD must be within [0, 1], got {threshold}"
        )
    return MatchingConfig(similarity_threshold=threshold)


def get_reconcile_config() -> ReconcileConfig:
    max_concurrent = env_int("KUNRECON_MAX_CONCURRENT_TITLES", DEFAULT_MAX_CONCURRENT_TITLES)
    if max_concurrent < 1:
        raise ConfigurationError("KUNRECON_MAX_CONCURRENT_TITLES must be at least 1")
    budget = (
        env_float("KUNRECON_BATCH_BUDGET_SECONDS", 0.0)
        if optional_env_var("KUNRECON_BATCH_BUDGET_SECONDS")
        else None
    )
    return ReconcileConfig(max_concurrent_titles=max_concurrent, batch_budget_seconds=budget)
