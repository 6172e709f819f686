"""Years-of-experience evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import CandidateProfile, JobRequirements


@dataclass
class ExperienceConfig:
    """Defaults applied when a job leaves its experience range open."""

    default_min_years: float = 0.0
    default_max_years: float = 20.0


class ExperienceEvaluator:
    """Compare candidate years against the required range."""

    method = "experience"

    def __init__(self, *, config: ExperienceConfig | None = None) -> None:
        self._config = config or ExperienceConfig()

    def evaluate(self, candidate: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        profile = CandidateProfile.model_validate(candidate)
        job = JobRequirements.model_validate(context["job"])
        minimum, maximum = self._required_range(job)
        years = profile.experience

        if minimum <= years <= maximum:
            score, status, delta = 1.0, "within_range", 0.0
        elif years < minimum:
            delta = minimum - years
            score, status = self._below_minimum_score(delta), "below_minimum"
        else:
            delta = years - maximum
            score, status = self._above_maximum_score(delta), "above_maximum"

        return {
            "method": self.method,
            "scores": {"experience_match": score},
            "metadata": {
                "required_range": (minimum, maximum),
                "candidate_years": years,
                "status": status,
                "delta_years": delta,
            },
        }

    def _required_range(self, job: JobRequirements) -> tuple[float, float]:
        minimum = job.experience.min
        maximum = job.experience.max
        if minimum is None:
            minimum = self._config.default_min_years
        if not maximum:
            maximum = max(self._config.default_max_years, minimum)
        return minimum, maximum

    @staticmethod
    def _below_minimum_score(gap: float) -> float:
        if gap <= 1:
            return 0.8
        if gap <= 2:
            return 0.6
        return max(0.2, 1 - gap * 0.2)

    @staticmethod
    def _above_maximum_score(excess: float) -> float:
        if excess <= 2:
            return 0.9
        return max(0.7, 1 - excess * 0.05)
