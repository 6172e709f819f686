"""Aggregated analyses over stored score results."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from pydantic.alias_generators import to_camel

from ..schemas import SUB_SCORE_NAMES, ScoreResult, SubScores
from ..schemas.analytics import (
    AverageScores,
    CandidateSkillAnalysis,
    JobAdvice,
    JobScoringAnalysis,
    ScoreDistribution,
    ScoringDashboard,
    SkillAdvice,
    SkillGap,
    SkillPerformance,
    TopCandidate,
)
from .ranking import ScoredCandidate
from .scoring import ScoringEngine

STRENGTH_THRESHOLD = 0.8
WEAKNESS_THRESHOLD = 0.5
TOP_CANDIDATES = 5
TOP_SKILL_GAPS = 10
TOP_MISSING_SKILLS = 5


def skill_match_percentage(engine: ScoringEngine, job_requirements: Any, candidate_profile: Any) -> int:
    """Skill match as a whole percentage for quick display."""
    result = engine.score(job_requirements, candidate_profile)
    return round(result.scores.skill_match * 100)


def identify_strengths(scores: SubScores) -> list[str]:
    return [to_camel(name) for name, value in scores.sub_scores().items() if value >= STRENGTH_THRESHOLD]


def identify_weaknesses(scores: SubScores) -> list[str]:
    return [to_camel(name) for name, value in scores.sub_scores().items() if value < WEAKNESS_THRESHOLD]


def identify_common_skill_gaps(results: Iterable[ScoreResult], *, top: int = TOP_SKILL_GAPS) -> list[SkillGap]:
    counts = _missing_skill_counts(results)
    return [SkillGap(skill=skill, count=count) for skill, count in counts.most_common(top)]


def analyze_job_scoring(scored: Sequence[ScoredCandidate | Mapping[str, Any]]) -> JobScoringAnalysis:
    """Summarize every scored application of one job."""
    candidates = sorted(
        (_as_scored(item) for item in scored),
        key=lambda candidate: candidate.overall_fit,
        reverse=True,
    )
    if not candidates:
        return JobScoringAnalysis()

    results = [candidate.ai_scoring for candidate in candidates]
    averages = _average_scores(results)
    distribution = _distribution(results)
    total = len(results)

    advice: list[JobAdvice] = []
    if averages.skill_match < 0.6:
        advice.append(
            JobAdvice(
                type="skill_requirements",
                message="Consider reviewing skill requirements - they may be too specific or demanding",
                priority="medium",
            )
        )
    if distribution.poor > total * 0.7:
        advice.append(
            JobAdvice(
                type="job_posting",
                message="Job posting may need optimization to attract more qualified candidates",
                priority="high",
            )
        )

    return JobScoringAnalysis(
        total_scored_applications=total,
        average_scores=averages,
        score_distribution=distribution,
        top_candidates=[
            TopCandidate(
                application_id=_record_id(candidate.record),
                candidate_name=_candidate_name(candidate.record),
                overall_score=candidate.overall_fit,
                strengths=identify_strengths(candidate.ai_scoring.scores),
                weaknesses=identify_weaknesses(candidate.ai_scoring.scores),
            )
            for candidate in candidates[:TOP_CANDIDATES]
        ],
        common_skill_gaps=identify_common_skill_gaps(results),
        recommendations=advice,
    )


def analyze_candidate_skills(results: Sequence[ScoreResult | Mapping[str, Any]]) -> CandidateSkillAnalysis:
    """How one candidate's skills fared across their scored applications."""
    parsed = [_as_result(item) for item in results]

    similarities: dict[str, list[float]] = defaultdict(list)
    for result in parsed:
        analysis = result.metadata.skills_analysis
        if analysis is None:
            continue
        for match in analysis.matching_skills:
            similarities[match.required].append(match.similarity)

    performance = sorted(
        (
            SkillPerformance(
                skill=skill,
                average_score=sum(values) / len(values),
                application_count=len(values),
            )
            for skill, values in similarities.items()
        ),
        key=lambda item: item.average_score,
        reverse=True,
    )
    advice = [
        SkillAdvice(
            skill=skill,
            priority="high" if count > 3 else "medium",
            reason=f"Missing in {count} job applications",
        )
        for skill, count in _missing_skill_counts(parsed).most_common(TOP_MISSING_SKILLS)
    ]
    return CandidateSkillAnalysis(
        total_applications=len(parsed),
        skill_analysis=performance,
        skill_recommendations=advice,
    )


def scoring_dashboard(
    total_applications: int,
    results: Sequence[ScoreResult | Mapping[str, Any]],
) -> ScoringDashboard:
    parsed = [_as_result(item) for item in results]
    scored = len(parsed)
    if not scored:
        return ScoringDashboard(total_applications=total_applications)

    overall = [result.overall_fit for result in parsed]
    coverage = scored / total_applications * 100 if total_applications > 0 else 0.0
    return ScoringDashboard(
        total_applications=total_applications,
        scored_applications=scored,
        scoring_coverage=round(coverage, 1),
        average_score=sum(overall) / scored,
        average_skill_match=sum(result.scores.skill_match for result in parsed) / scored,
        average_experience_match=sum(result.scores.experience_match for result in parsed) / scored,
        high_score_count=sum(1 for value in overall if value >= 0.8),
        low_score_count=sum(1 for value in overall if value < 0.5),
    )


def _average_scores(results: Sequence[ScoreResult]) -> AverageScores:
    total = len(results)
    names = (*SUB_SCORE_NAMES, "overall_fit")
    return AverageScores(
        **{name: sum(getattr(result.scores, name) for result in results) / total for name in names}
    )


def _distribution(results: Iterable[ScoreResult]) -> ScoreDistribution:
    buckets = Counter()
    for result in results:
        value = result.overall_fit
        if value >= 0.9:
            buckets["excellent"] += 1
        elif value >= 0.7:
            buckets["good"] += 1
        elif value >= 0.5:
            buckets["fair"] += 1
        else:
            buckets["poor"] += 1
    return ScoreDistribution(**buckets)


def _missing_skill_counts(results: Iterable[ScoreResult]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for result in results:
        analysis = result.metadata.skills_analysis
        if analysis is not None:
            counts.update(analysis.missing_skills)
    return counts


def _as_result(item: ScoreResult | ScoredCandidate | Mapping[str, Any]) -> ScoreResult:
    if isinstance(item, ScoreResult):
        return item
    if isinstance(item, ScoredCandidate):
        return item.ai_scoring
    if "aiScoring" in item:
        return ScoreResult.model_validate(item["aiScoring"])
    return ScoreResult.model_validate(item)


def _as_scored(item: ScoredCandidate | Mapping[str, Any]) -> ScoredCandidate:
    if isinstance(item, ScoredCandidate):
        return item
    return ScoredCandidate.from_dict(item)


def _record_id(record: Mapping[str, Any]) -> Any:
    for key in ("_id", "id", "applicationId"):
        if record.get(key) is not None:
            return record[key]
    return None


def _candidate_name(record: Mapping[str, Any]) -> str | None:
    candidate = record.get("candidate")
    if isinstance(candidate, Mapping):
        parts = [candidate.get("firstName"), candidate.get("lastName")]
        name = " ".join(str(part) for part in parts if part)
        if name:
            return name
        if candidate.get("name"):
            return str(candidate["name"])
    name = record.get("candidateName") or record.get("name")
    return str(name) if name else None
