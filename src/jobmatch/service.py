"""Module-level entry points backed by a default container."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterable

from .core import BatchScorer, ScoredCandidate
from .schemas import ScoreResult


@lru_cache(maxsize=1)
def default_scorer() -> BatchScorer:
    from .container import create_container

    return create_container().batch_scorer()


def score_application(job_requirements: Any, candidate_profile: Any) -> ScoreResult:
    """Score one candidate profile against one job's requirements."""
    return default_scorer().engine.score(job_requirements, candidate_profile)


def score_multiple_applications(
    job_requirements: Any,
    candidates: Iterable[Any],
) -> list[ScoredCandidate]:
    """Score and rank many candidates against one job, best fit first."""
    return default_scorer().score_multiple(job_requirements, candidates)
