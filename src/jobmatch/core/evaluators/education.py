"""Education level evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from ...schemas import ANY_EDUCATION, EDUCATION_ORDINALS, CandidateProfile, EducationEntry, JobRequirements
from ...skills import normalize_skill

# Checked in order; the first keyword found in a degree decides its level.
DEGREE_KEYWORDS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (5, ("phd", "doctorate")),
    (4, ("master", "mba")),
    (3, ("bachelor", "degree")),
    (2, ("diploma",)),
    (1, ("high school", "12th")),
)


@dataclass
class EducationConfig:
    """Scores and fallbacks for education matching."""

    neutral_score: float = 0.7
    default_level: int = 3


class EducationEvaluator:
    """Compare the candidate's highest degree with the required level."""

    method = "education"

    def __init__(self, *, config: EducationConfig | None = None) -> None:
        self._config = config or EducationConfig()

    def evaluate(self, candidate: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        profile = CandidateProfile.model_validate(candidate)
        job = JobRequirements.model_validate(context["job"])

        if job.education == ANY_EDUCATION or not profile.education:
            return self._build_response(
                score=self._config.neutral_score,
                status="not_constrained" if job.education == ANY_EDUCATION else "no_candidate_data",
            )

        required_level = EDUCATION_ORDINALS.get(job.education, self._config.default_level)
        candidate_level = self._highest_level(profile.education)
        diff = candidate_level - required_level

        if diff == 0:
            score = 1.0
        elif diff > 0:
            score = min(1.0, 0.8 + diff * 0.1)
        else:
            score = max(0.3, 1 + diff * 0.2)

        return self._build_response(
            score=score,
            status="compared",
            required_level=required_level,
            candidate_level=candidate_level,
        )

    def _highest_level(self, entries: Iterable[EducationEntry]) -> int:
        return max(self.degree_level(entry.degree) for entry in entries)

    def degree_level(self, degree: str | None) -> int:
        text = normalize_skill(degree)
        for level, keywords in DEGREE_KEYWORDS:
            if any(keyword in text for keyword in keywords):
                return level
        return self._config.default_level

    def _build_response(
        self,
        *,
        score: float,
        status: str,
        required_level: int | None = None,
        candidate_level: int | None = None,
    ) -> dict[str, Any]:
        return {
            "method": self.method,
            "scores": {"education_match": score},
            "metadata": {
                "status": status,
                "required_level": required_level,
                "candidate_level": candidate_level,
            },
        }
