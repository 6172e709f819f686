"""Schemas for aggregated scoring analyses."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from .result import FrozenWireModel

Priority = Literal["medium", "high"]


class AverageScores(FrozenWireModel):
    overall_fit: float = 0.0
    skill_match: float = 0.0
    experience_match: float = 0.0
    education_match: float = 0.0
    location_match: float = 0.0
    salary_match: float = 0.0


class ScoreDistribution(FrozenWireModel):
    excellent: int = 0
    good: int = 0
    fair: int = 0
    poor: int = 0


class TopCandidate(FrozenWireModel):
    application_id: Any = None
    candidate_name: str | None = None
    overall_score: float = 0.0
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)


class SkillGap(FrozenWireModel):
    skill: str
    count: int


class JobAdvice(FrozenWireModel):
    type: Literal["skill_requirements", "job_posting"]
    message: str
    priority: Priority


class JobScoringAnalysis(FrozenWireModel):
    total_scored_applications: int = 0
    average_scores: AverageScores = Field(default_factory=AverageScores)
    score_distribution: ScoreDistribution = Field(default_factory=ScoreDistribution)
    top_candidates: list[TopCandidate] = Field(default_factory=list)
    common_skill_gaps: list[SkillGap] = Field(default_factory=list)
    recommendations: list[JobAdvice] = Field(default_factory=list)


class SkillPerformance(FrozenWireModel):
    skill: str
    average_score: float
    application_count: int


class SkillAdvice(FrozenWireModel):
    skill: str
    priority: Priority
    reason: str


class CandidateSkillAnalysis(FrozenWireModel):
    total_applications: int = 0
    skill_analysis: list[SkillPerformance] = Field(default_factory=list)
    skill_recommendations: list[SkillAdvice] = Field(default_factory=list)


class ScoringDashboard(FrozenWireModel):
    total_applications: int = 0
    scored_applications: int = 0
    scoring_coverage: float = 0.0
    average_score: float = 0.0
    average_skill_match: float = 0.0
    average_experience_match: float = 0.0
    high_score_count: int = 0
    low_score_count: int = 0
