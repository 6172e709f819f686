"""Core scoring engine components."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

# NOTE: keep imports explicit for export clarity.
from .evaluators import (
    EducationEvaluator,
    ExperienceEvaluator,
    LocationEvaluator,
    SalaryEvaluator,
    SkillMatchEvaluator,
)
from .ranking import (
    BatchItem,
    BatchScorer,
    JobRecommendation,
    ScoredCandidate,
    ScoringFailure,
    ScoringSuccess,
)
from .scoring import EvaluationResult, ScoringEngine


@runtime_checkable
class Evaluator(Protocol):
    """Evaluator contract for computing one or more sub-scores."""

    method: str

    def evaluate(self, candidate: dict, context: dict) -> dict:
        """Return ``{"method", "scores", "metadata"}`` for a candidate; ``context["job"]`` holds the job."""


__all__ = [
    "BatchItem",
    "BatchScorer",
    "EducationEvaluator",
    "EvaluationResult",
    "Evaluator",
    "ExperienceEvaluator",
    "JobRecommendation",
    "LocationEvaluator",
    "SalaryEvaluator",
    "ScoredCandidate",
    "ScoringEngine",
    "ScoringFailure",
    "ScoringSuccess",
    "SkillMatchEvaluator",
]
