"""Pydantic schema definitions for engine inputs and outputs."""

from __future__ import annotations

from .candidate import (
    CandidateLocation,
    CandidateProfile,
    EducationEntry,
    SalaryExpectation,
)
from .job import (
    ANY_EDUCATION,
    EDUCATION_ORDINALS,
    ExperienceRange,
    JobLocation,
    JobRequirements,
    SalaryRange,
)
from .result import (
    NEUTRAL_SCORE,
    SUB_SCORE_NAMES,
    ExperienceAnalysis,
    Recommendation,
    ScoreResult,
    ScoringMetadata,
    SkillMatchDetail,
    SkillsAnalysis,
    SubScores,
)

__all__ = [
    "ANY_EDUCATION",
    "EDUCATION_ORDINALS",
    "NEUTRAL_SCORE",
    "SUB_SCORE_NAMES",
    "CandidateLocation",
    "CandidateProfile",
    "EducationEntry",
    "ExperienceAnalysis",
    "ExperienceRange",
    "JobLocation",
    "JobRequirements",
    "Recommendation",
    "SalaryExpectation",
    "SalaryRange",
    "ScoreResult",
    "ScoringMetadata",
    "SkillMatchDetail",
    "SkillsAnalysis",
    "SubScores",
]
