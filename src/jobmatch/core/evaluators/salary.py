"""Salary expectation evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import CandidateProfile, JobRequirements


@dataclass
class SalaryConfig:
    """Configuration for salary matching."""

    neutral_score: float = 0.7
    negotiable_score: float = 0.8
    max_fallback_multiplier: float = 1.5
    default_max_salary: float = 1_000_000.0


class SalaryEvaluator:
    """Compare candidate expected salary with the job budget."""

    method = "salary"

    def __init__(self, *, config: SalaryConfig | None = None) -> None:
        self._config = config or SalaryConfig()

    def evaluate(self, candidate: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        profile = CandidateProfile.model_validate(candidate)
        job = JobRequirements.model_validate(context["job"])
        expected = profile.salary_expectation.amount or 0.0

        if not job.salary.min and not expected:
            return self._build_response(
                score=self._config.neutral_score,
                status="not_specified",
                expected=None,
                job_range=None,
            )

        job_range = self._job_range(job)
        if not expected:
            return self._build_response(
                score=self._config.negotiable_score,
                status="negotiable",
                expected=None,
                job_range=job_range,
            )

        job_min, job_max = job_range
        if job_min <= expected <= job_max:
            return self._build_response(
                score=1.0, status="within_range", expected=expected, job_range=job_range
            )

        if expected < job_min:
            difference = (job_min - expected) / job_min
            return self._build_response(
                score=min(1.0, 0.9 + difference * 0.1),
                status="below_range",
                expected=expected,
                job_range=job_range,
                relative_gap=difference,
            )

        excess = (expected - job_max) / job_max
        return self._build_response(
            score=self._above_range_score(excess),
            status="above_range",
            expected=expected,
            job_range=job_range,
            relative_gap=excess,
        )

    def _job_range(self, job: JobRequirements) -> tuple[float, float]:
        job_min = job.salary.min or 0.0
        job_max = (
            job.salary.max
            or job_min * self._config.max_fallback_multiplier
            or self._config.default_max_salary
        )
        return job_min, job_max

    @staticmethod
    def _above_range_score(excess: float) -> float:
        if excess <= 0.1:
            return 0.8
        if excess <= 0.2:
            return 0.6
        return max(0.2, 0.6 - excess * 0.5)

    def _build_response(
        self,
        *,
        score: float,
        status: str,
        expected: float | None,
        job_range: tuple[float, float] | None,
        relative_gap: float | None = None,
    ) -> dict[str, Any]:
        return {
            "method": self.method,
            "scores": {"salary_match": score},
            "metadata": {
                "status": status,
                "expected": expected,
                "job_range": job_range,
                "relative_gap": relative_gap,
            },
        }
