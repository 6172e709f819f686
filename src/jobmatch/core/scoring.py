"""Scoring engine orchestration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

import pendulum
import structlog

from ..schemas import SUB_SCORE_NAMES, CandidateProfile, JobRequirements, ScoreResult, SubScores
from .explain import build_metadata


@dataclass(slots=True)
class EvaluationResult:
    """Normalized evaluator output."""

    method: str
    scores: dict[str, float]
    metadata: dict[str, Any] = field(default_factory=dict)


class ScoringEngine:
    """Runs the sub-score evaluators and combines them into one fit score.

    :meth:`score` is the public boundary and never raises: any exception is
    logged and turned into a failed :class:`ScoreResult` with neutral scores.
    """

    DEFAULT_WEIGHTS: Mapping[str, float] = MappingProxyType(
        {
            "skill_match": 0.40,
            "experience_match": 0.25,
            "education_match": 0.15,
            "location_match": 0.10,
            "salary_match": 0.10,
        }
    )

    def __init__(
        self,
        evaluators: Iterable[Any],
        *,
        score_weights: Mapping[str, float] | None = None,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._evaluators = list(evaluators)
        self._score_weights = dict(score_weights or self.DEFAULT_WEIGHTS)
        if not math.isclose(sum(self._score_weights.values()), 1.0, abs_tol=1e-6):
            raise ValueError("Score weights must sum to 1.0")
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    @property
    def score_weights(self) -> dict[str, float]:
        return dict(self._score_weights)

    def score(self, job_requirements: Any, candidate_profile: Any) -> ScoreResult:
        try:
            job = _coerce(JobRequirements, job_requirements)
            candidate = _coerce(CandidateProfile, candidate_profile)
            sub_scores, _ = self.evaluate(job=job, candidate=candidate)
            overall = self._compute_weighted_score(sub_scores)
            scores = SubScores(**sub_scores, overall_fit=round(overall, 2))
            return ScoreResult(
                success=True,
                scores=scores,
                metadata=build_metadata(job, candidate, scores),
                scored_at=self._now_provider(),
            )
        except Exception as exc:  # noqa: BLE001
            self._logger.exception("scoring.failed", error=str(exc))
            return ScoreResult.failed(
                str(exc) or type(exc).__name__,
                scored_at=self._now_provider(),
            )

    def evaluate(
        self,
        *,
        job: JobRequirements,
        candidate: CandidateProfile,
    ) -> tuple[dict[str, float], list[EvaluationResult]]:
        """Run every evaluator and return clamped sub-scores with raw results."""
        serialized_candidate = candidate.model_dump(mode="python")
        context = {"job": job.model_dump(mode="python")}

        evaluations: list[EvaluationResult] = []
        collected: dict[str, float] = {}
        for evaluator in self._evaluators:
            normalized = self._normalize_evaluation_result(
                evaluator.evaluate(serialized_candidate, context)
            )
            evaluations.append(normalized)
            collected.update(normalized.scores)

        missing = [name for name in SUB_SCORE_NAMES if name not in collected]
        if missing:
            raise ValueError(f"Evaluators did not produce sub-scores: {missing}")

        sub_scores = {name: _clamp(collected[name]) for name in SUB_SCORE_NAMES}
        return sub_scores, evaluations

    @staticmethod
    def _normalize_evaluation_result(payload: dict[str, Any]) -> EvaluationResult:
        method = payload.get("method")
        scores = payload.get("scores") or {}
        metadata = payload.get("metadata") or {}
        if method is None:
            raise ValueError("Evaluator result must include 'method'.")
        if not isinstance(scores, dict):
            raise ValueError("Evaluator result 'scores' must be a mapping.")
        return EvaluationResult(
            method=str(method),
            scores={k: float(v) for k, v in scores.items()},
            metadata=dict(metadata),
        )

    def _compute_weighted_score(self, scores: dict[str, float]) -> float:
        return _clamp(
            sum(scores.get(metric, 0.0) * weight for metric, weight in self._score_weights.items())
        )


def _coerce(model: Any, value: Any) -> Any:
    if isinstance(value, model):
        return value
    if value is None:
        return model()
    return model.model_validate(value)


def _clamp(value: float) -> float:
    if math.isnan(value):
        raise ValueError("Sub-score is NaN")
    return min(max(value, 0.0), 1.0)
