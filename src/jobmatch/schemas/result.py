"""Score result schema returned by the scoring engine."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

import pendulum
from pydantic import ConfigDict, Field

from .common import WireModel
from .job import ExperienceRange

NEUTRAL_SCORE = 0.5

RecommendationType = Literal[
    "skill_gap",
    "experience_gap",
    "location_mismatch",
    "salary_mismatch",
    "strong_match",
]
Severity = Literal["positive", "medium", "high"]

SUB_SCORE_NAMES: tuple[str, ...] = (
    "skill_match",
    "experience_match",
    "education_match",
    "location_match",
    "salary_match",
)


class FrozenWireModel(WireModel):
    model_config = ConfigDict(frozen=True)


class SubScores(FrozenWireModel):
    """Five sub-scores plus the weighted overall fit, all in [0, 1]."""

    skill_match: float = Field(ge=0.0, le=1.0)
    experience_match: float = Field(ge=0.0, le=1.0)
    education_match: float = Field(ge=0.0, le=1.0)
    location_match: float = Field(ge=0.0, le=1.0)
    salary_match: float = Field(ge=0.0, le=1.0)
    overall_fit: float = Field(ge=0.0, le=1.0)

    @classmethod
    def neutral(cls) -> "SubScores":
        return cls(**{name: NEUTRAL_SCORE for name in (*SUB_SCORE_NAMES, "overall_fit")})

    def sub_scores(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in SUB_SCORE_NAMES}


class SkillMatchDetail(FrozenWireModel):
    required: str
    matched: str
    similarity: float


class SkillsAnalysis(FrozenWireModel):
    required_count: int = 0
    candidate_count: int = 0
    matching_skills: list[SkillMatchDetail] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    additional_skills: list[str] = Field(default_factory=list)


class ExperienceAnalysis(FrozenWireModel):
    required: ExperienceRange = Field(default_factory=ExperienceRange)
    candidate: float = 0.0
    gap: float = 0.0


class Recommendation(FrozenWireModel):
    type: RecommendationType
    message: str
    severity: Severity


class ScoringMetadata(FrozenWireModel):
    skills_analysis: SkillsAnalysis | None = None
    experience_analysis: ExperienceAnalysis | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)


class ScoreResult(FrozenWireModel):
    """Outcome of scoring one candidate against one job.

    Failed results carry neutral scores so callers can sort and average
    them alongside successful ones.
    """

    success: bool = True
    scores: SubScores
    metadata: ScoringMetadata = Field(default_factory=ScoringMetadata)
    scored_at: datetime = Field(default_factory=pendulum.now)
    error: str | None = None

    @classmethod
    def failed(cls, error: str, *, scored_at: datetime | None = None) -> "ScoreResult":
        return cls(
            success=False,
            scores=SubScores.neutral(),
            metadata=ScoringMetadata(),
            scored_at=scored_at or pendulum.now(),
            error=error,
        )

    @property
    def overall_fit(self) -> float:
        return self.scores.overall_fit

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready camelCase payload."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
