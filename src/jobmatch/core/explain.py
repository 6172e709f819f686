"""Scoring metadata, recommendations and display labels."""

from __future__ import annotations

from ..schemas import (
    CandidateProfile,
    ExperienceAnalysis,
    JobRequirements,
    Recommendation,
    ScoringMetadata,
    SkillMatchDetail,
    SkillsAnalysis,
    SubScores,
)
from ..skills import best_matches, unmatched_skills

MATCH_THRESHOLD = 0.8

RECOMMENDATION_LEVELS: tuple[tuple[float, str], ...] = (
    (0.9, "Highly Recommended"),
    (0.8, "Recommended"),
    (0.7, "Consider"),
    (0.6, "Maybe"),
)
NOT_RECOMMENDED = "Not Recommended"

MATCH_REASONS: tuple[tuple[str, str], ...] = (
    ("skill_match", "Strong skill match"),
    ("experience_match", "Experience level aligns well"),
    ("location_match", "Location compatibility"),
    ("salary_match", "Salary expectations match"),
)


def analyze_skills(job: JobRequirements, candidate: CandidateProfile) -> SkillsAnalysis:
    matching: list[SkillMatchDetail] = []
    missing: list[str] = []
    for pairing in best_matches(job.skills, candidate.skills):
        if pairing.matched is not None and pairing.similarity >= MATCH_THRESHOLD:
            matching.append(
                SkillMatchDetail(
                    required=pairing.required,
                    matched=pairing.matched,
                    similarity=pairing.similarity,
                )
            )
        else:
            missing.append(pairing.required)

    return SkillsAnalysis(
        required_count=len(job.skills),
        candidate_count=len(candidate.skills),
        matching_skills=matching,
        missing_skills=missing,
        additional_skills=unmatched_skills(
            candidate.skills, job.skills, threshold=MATCH_THRESHOLD
        ),
    )


def analyze_experience(job: JobRequirements, candidate: CandidateProfile) -> ExperienceAnalysis:
    """Negative gaps mean the candidate exceeds the minimum."""
    return ExperienceAnalysis(
        required=job.experience,
        candidate=candidate.experience,
        gap=(job.experience.min or 0.0) - candidate.experience,
    )


def generate_recommendations(scores: SubScores, job: JobRequirements) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    if scores.skill_match < 0.7:
        recommendations.append(
            Recommendation(
                type="skill_gap",
                message="Candidate may need additional technical skills training",
                severity="medium",
            )
        )
    if scores.experience_match < 0.6:
        recommendations.append(
            Recommendation(
                type="experience_gap",
                message="Consider if candidate's experience level aligns with role requirements",
                severity="high",
            )
        )
    if scores.location_match < 0.5 and not job.is_remote:
        recommendations.append(
            Recommendation(
                type="location_mismatch",
                message="Location may require relocation or remote work arrangement",
                severity="medium",
            )
        )
    if scores.salary_match < 0.4:
        recommendations.append(
            Recommendation(
                type="salary_mismatch",
                message="Significant salary expectation gap may require negotiation",
                severity="high",
            )
        )
    if scores.overall_fit >= 0.8:
        recommendations.append(
            Recommendation(
                type="strong_match",
                message="Excellent candidate match - recommend for interview",
                severity="positive",
            )
        )
    return recommendations


def build_metadata(
    job: JobRequirements,
    candidate: CandidateProfile,
    scores: SubScores,
) -> ScoringMetadata:
    return ScoringMetadata(
        skills_analysis=analyze_skills(job, candidate),
        experience_analysis=analyze_experience(job, candidate),
        recommendations=generate_recommendations(scores, job),
    )


def recommendation_level(overall_fit: float) -> str:
    """Display label for an overall fit score."""
    for threshold, label in RECOMMENDATION_LEVELS:
        if overall_fit >= threshold:
            return label
    return NOT_RECOMMENDED


def generate_match_reasons(scores: SubScores) -> list[str]:
    return [reason for name, reason in MATCH_REASONS if getattr(scores, name) >= 0.8]
