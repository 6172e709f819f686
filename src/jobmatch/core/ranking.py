"""Batch scoring and ranking."""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, Union

import structlog
from pydantic import BaseModel

from ..adapters import ApplicationRecordAdapter, ProfileAdapter, job_requirements_from_record
from ..adapters.records import dig
from ..schemas import JobRequirements, ScoreResult
from .explain import generate_match_reasons, recommendation_level
from .scoring import ScoringEngine

DEFAULT_MAX_JOBS = 50
DEFAULT_RECOMMENDATION_LIMIT = 10
ACTIVE_STATUS = "active"


@dataclass(frozen=True, slots=True)
class ScoringSuccess:
    index: int
    record: dict[str, Any]
    result: ScoreResult


@dataclass(frozen=True, slots=True)
class ScoringFailure:
    index: int
    record: dict[str, Any]
    error: str


BatchItem = Union[ScoringSuccess, ScoringFailure]


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    """A copy of the input record decorated with its score."""

    record: dict[str, Any]
    ai_scoring: ScoreResult

    @property
    def overall_fit(self) -> float:
        return self.ai_scoring.overall_fit

    def to_dict(self) -> dict[str, Any]:
        return {**self.record, "aiScoring": self.ai_scoring.to_dict()}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScoredCandidate":
        record = {key: value for key, value in payload.items() if key != "aiScoring"}
        return cls(record=record, ai_scoring=ScoreResult.model_validate(payload["aiScoring"]))


@dataclass(frozen=True, slots=True)
class JobRecommendation:
    job: dict[str, Any]
    match_score: float
    skill_match_score: float
    experience_match_score: float
    match_reasons: list[str] = field(default_factory=list)
    recommendation_level: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "job": self.job,
            "matchScore": self.match_score,
            "skillMatchScore": self.skill_match_score,
            "experienceMatchScore": self.experience_match_score,
            "matchReasons": list(self.match_reasons),
            "recommendationLevel": self.recommendation_level,
        }


class BatchScorer:
    """Score many candidates against one job, or one candidate against many jobs.

    Every item is scored in isolation: a record that cannot be turned into a
    profile becomes a :class:`ScoringFailure` and the rest of the batch still
    completes. Inputs are never mutated; results carry shallow copies.
    """

    def __init__(
        self,
        engine: ScoringEngine,
        *,
        adapter: ProfileAdapter | None = None,
        max_workers: int | None = None,
        max_jobs: int | None = DEFAULT_MAX_JOBS,
        recommendation_limit: int | None = None,
    ) -> None:
        self._engine = engine
        self._adapter = adapter or ApplicationRecordAdapter()
        self._max_workers = max_workers or 1
        self._max_jobs = max_jobs
        self._recommendation_limit = recommendation_limit or DEFAULT_RECOMMENDATION_LIMIT
        self._logger = structlog.get_logger(__name__)

    @property
    def engine(self) -> ScoringEngine:
        return self._engine

    def score_items(self, job_requirements: Any, records: Iterable[Any]) -> list[BatchItem]:
        """Score each record, keeping input order."""
        indexed = list(enumerate(records))
        if self._max_workers > 1 and len(indexed) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                return list(
                    pool.map(lambda item: self._score_one(job_requirements, *item), indexed)
                )
        return [self._score_one(job_requirements, index, record) for index, record in indexed]

    def rank(self, items: Iterable[BatchItem]) -> list[ScoredCandidate]:
        """Sort by overall fit, best first; equal scores keep input order."""
        scored = [self._decorate(item) for item in items]
        return sorted(scored, key=lambda candidate: candidate.overall_fit, reverse=True)

    def score_multiple(self, job_requirements: Any, records: Iterable[Any]) -> list[ScoredCandidate]:
        items = self.score_items(job_requirements, records)
        failures = sum(1 for item in items if isinstance(item, ScoringFailure))
        ranked = self.rank(items)
        self._logger.info("batch.scored", total=len(items), failures=failures)
        return ranked

    def recommend_jobs(
        self,
        candidate_profile: Any,
        jobs: Sequence[Any],
        *,
        limit: int | None = None,
    ) -> list[JobRecommendation]:
        """Best-fitting jobs for one candidate.

        Only active postings are considered, at most ``max_jobs`` of them.
        Records without a ``status`` count as active.
        """
        active = [job for job in jobs if _is_active(job)]
        considered = active if self._max_jobs is None else active[: self._max_jobs]
        recommendations: list[JobRecommendation] = []
        for index, job in enumerate(considered):
            try:
                requirements = job_requirements_from_record(job)
            except Exception as exc:  # noqa: BLE001
                self._logger.warning("batch.item_failed", index=index, error=str(exc))
                continue
            result = self._engine.score(requirements, candidate_profile)
            recommendations.append(
                JobRecommendation(
                    job=_job_summary(job),
                    match_score=result.overall_fit,
                    skill_match_score=result.scores.skill_match,
                    experience_match_score=result.scores.experience_match,
                    match_reasons=generate_match_reasons(result.scores),
                    recommendation_level=recommendation_level(result.overall_fit),
                )
            )

        recommendations.sort(key=lambda item: item.match_score, reverse=True)
        return recommendations[: limit or self._recommendation_limit]

    def _score_one(self, job_requirements: Any, index: int, record: Any) -> BatchItem:
        detached = _detach(record)
        try:
            profile = self._adapter.candidate_profile(record)
            result = self._engine.score(job_requirements, profile)
        except Exception as exc:  # noqa: BLE001
            self._logger.warning("batch.item_failed", index=index, error=str(exc))
            return ScoringFailure(index=index, record=detached, error=str(exc) or type(exc).__name__)
        return ScoringSuccess(index=index, record=detached, result=result)

    @staticmethod
    def _decorate(item: BatchItem) -> ScoredCandidate:
        if isinstance(item, ScoringSuccess):
            return ScoredCandidate(record=item.record, ai_scoring=item.result)
        return ScoredCandidate(record=item.record, ai_scoring=ScoreResult.failed(item.error))


def _is_active(job: Any) -> bool:
    status = dig(job, "status")
    return status is None or status == ACTIVE_STATUS


def _detach(record: Any) -> dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="python", by_alias=True)
    if isinstance(record, Mapping):
        return dict(record)
    return {"record": record}


_JOB_SUMMARY_FIELDS = ("_id", "id", "title", "company", "location", "isRemote", "salary", "createdAt")


def _job_summary(job: Any) -> dict[str, Any]:
    if isinstance(job, JobRequirements):
        return job.model_dump(mode="json", by_alias=True)
    if isinstance(job, BaseModel):
        job = job.model_dump(mode="python", by_alias=True)
    return {key: job[key] for key in _JOB_SUMMARY_FIELDS if key in job}
