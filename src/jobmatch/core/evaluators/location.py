"""Location compatibility evaluation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ...schemas import CandidateProfile, JobRequirements

_WHITESPACE = re.compile(r"\s+")


@dataclass
class LocationConfig:
    """Score assigned to each level of geographic agreement."""

    remote_score: float = 1.0
    unknown_score: float = 0.5
    city_score: float = 1.0
    state_score: float = 0.7
    country_score: float = 0.4
    mismatch_score: float = 0.2


class LocationEvaluator:
    """Compare job and candidate locations from city down to country."""

    method = "location"

    def __init__(self, *, config: LocationConfig | None = None) -> None:
        self._config = config or LocationConfig()

    def evaluate(self, candidate: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        profile = CandidateProfile.model_validate(candidate)
        job = JobRequirements.model_validate(context["job"])
        job_location = job.location
        candidate_location = profile.location

        if job.is_remote:
            return self._build_response(self._config.remote_score, "remote")
        if not job_location.city or not candidate_location.city:
            return self._build_response(self._config.unknown_score, "insufficient_data")
        if self._same(job_location.city, candidate_location.city):
            return self._build_response(self._config.city_score, "same_city")
        if self._same(job_location.state, candidate_location.state):
            return self._build_response(self._config.state_score, "same_state")
        if self._same(job_location.country, candidate_location.country):
            return self._build_response(self._config.country_score, "same_country")
        return self._build_response(self._config.mismatch_score, "different")

    @staticmethod
    def normalize_location(value: str | None) -> str:
        if not value:
            return ""
        return _WHITESPACE.sub(" ", value.lower()).strip()

    def _same(self, first: str | None, second: str | None) -> bool:
        left = self.normalize_location(first)
        return bool(left) and left == self.normalize_location(second)

    def _build_response(self, score: float, status: str) -> dict[str, Any]:
        return {
            "method": self.method,
            "scores": {"location_match": score},
            "metadata": {"status": status},
        }
