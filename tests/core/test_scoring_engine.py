from __future__ import annotations

import math

import pendulum
import pytest
from structlog.testing import capture_logs

from jobmatch.core import (
    EducationEvaluator,
    ExperienceEvaluator,
    LocationEvaluator,
    SalaryEvaluator,
    ScoringEngine,
    SkillMatchEvaluator,
)
from jobmatch.schemas import CandidateProfile, JobRequirements

FIXED_NOW = pendulum.datetime(2024, 5, 1, 9, 30, tz="UTC")


def default_evaluators() -> list:
    return [
        SkillMatchEvaluator(),
        ExperienceEvaluator(),
        EducationEvaluator(),
        LocationEvaluator(),
        SalaryEvaluator(),
    ]


def build_engine(*extra, score_weights=None) -> ScoringEngine:
    return ScoringEngine(
        [*default_evaluators(), *extra],
        score_weights=score_weights,
        now_provider=lambda: FIXED_NOW,
    )


def strong_job() -> dict:
    return {
        "skills": ["Python", "SQL"],
        "experience": {"min": 2, "max": 5},
        "education": "bachelor",
        "location": {"city": "Austin", "state": "TX"},
        "salary": {"min": 90_000, "max": 120_000},
    }


def strong_candidate() -> dict:
    return {
        "skills": ["Python", "SQL", "Docker"],
        "experience": 4,
        "education": [{"degree": "Bachelor of Science"}],
        "location": {"city": "austin "},
        "salaryExpectation": {"amount": 100_000},
    }


class ExplodingEvaluator:
    method = "exploding"

    def evaluate(self, candidate: dict, context: dict) -> dict:
        raise RuntimeError("evaluator exploded")


class NanEvaluator:
    method = "nan"

    def evaluate(self, candidate: dict, context: dict) -> dict:
        return {"method": self.method, "scores": {"salary_match": math.nan}}


def test_default_weights_sum_to_one():
    assert sum(ScoringEngine.DEFAULT_WEIGHTS.values()) == pytest.approx(1.0)
    assert ScoringEngine.DEFAULT_WEIGHTS["skill_match"] == pytest.approx(0.40)


def test_rejects_weights_not_summing_to_one():
    with pytest.raises(ValueError):
        ScoringEngine(default_evaluators(), score_weights={"skill_match": 0.5})


def test_strong_match_scores_full():
    result = build_engine().score(strong_job(), strong_candidate())

    assert result.success is True
    assert result.error is None
    assert result.scores.sub_scores() == {
        "skill_match": 1.0,
        "experience_match": 1.0,
        "education_match": 1.0,
        "location_match": 1.0,
        "salary_match": 1.0,
    }
    assert result.overall_fit == pytest.approx(1.0)
    assert [item.type for item in result.metadata.recommendations] == ["strong_match"]

    skills = result.metadata.skills_analysis
    assert skills.required_count == 2
    assert skills.candidate_count == 3
    assert [match.matched for match in skills.matching_skills] == ["Python", "SQL"]
    assert skills.missing_skills == []
    assert skills.additional_skills == ["Docker"]
    assert result.metadata.experience_analysis.gap == pytest.approx(-2.0)


def test_weak_match_lists_every_gap():
    job = {
        "skills": ["Kubernetes", "Terraform"],
        "experience": {"min": 8, "max": 12},
        "education": "master",
        "location": {"city": "Berlin", "country": "Germany"},
        "salary": {"min": 50_000, "max": 60_000},
    }
    candidate = {
        "skills": ["Excel"],
        "experience": 2,
        "education": ["High School Diploma"],
        "location": {"city": "Paris", "country": "France"},
        "salaryExpectation": 100_000,
    }

    result = build_engine().score(job, candidate)

    assert result.scores.skill_match == pytest.approx(0.0)
    assert result.scores.experience_match == pytest.approx(0.2)
    assert result.scores.education_match == pytest.approx(0.6)
    assert result.scores.location_match == pytest.approx(0.2)
    assert result.scores.salary_match == pytest.approx(0.6 - (40_000 / 60_000) * 0.5)
    assert result.overall_fit == pytest.approx(0.19)
    assert [item.type for item in result.metadata.recommendations] == [
        "skill_gap",
        "experience_gap",
        "location_mismatch",
        "salary_mismatch",
    ]
    assert result.metadata.skills_analysis.missing_skills == ["Kubernetes", "Terraform"]


def test_empty_inputs_score_without_error():
    result = build_engine().score({}, {})

    assert result.success is True
    assert result.scores.skill_match == pytest.approx(0.5)
    assert result.scores.experience_match == pytest.approx(1.0)
    assert result.scores.education_match == pytest.approx(0.7)
    assert result.scores.location_match == pytest.approx(0.5)
    assert result.scores.salary_match == pytest.approx(0.7)
    assert result.overall_fit == pytest.approx(0.675, abs=0.006)


def test_accepts_models_and_none():
    engine = build_engine()

    from_models = engine.score(JobRequirements(), CandidateProfile())
    from_none = engine.score(None, None)

    assert from_models == from_none


@pytest.mark.parametrize(
    "candidate_location",
    [{"city": "Lagos"}, {}, "Tokyo", {"city": "Austin", "country": "USA"}],
)
def test_remote_jobs_always_match_location(candidate_location):
    job = {**strong_job(), "location": {"city": "Austin", "isRemote": True}}

    result = build_engine().score(job, {**strong_candidate(), "location": candidate_location})

    assert result.scores.location_match == 1.0
    assert "location_mismatch" not in [item.type for item in result.metadata.recommendations]


def test_failure_returns_neutral_result_and_logs():
    engine = build_engine(ExplodingEvaluator())

    with capture_logs() as logs:
        result = engine.score(strong_job(), strong_candidate())

    assert result.success is False
    assert result.error == "evaluator exploded"
    assert result.overall_fit == 0.5
    assert set(result.scores.sub_scores().values()) == {0.5}
    assert result.metadata.recommendations == []
    assert result.scored_at == FIXED_NOW
    assert logs[0]["event"] == "scoring.failed"
    assert logs[0]["log_level"] == "error"


def test_missing_sub_score_is_a_failure():
    engine = ScoringEngine([SkillMatchEvaluator(), ExperienceEvaluator()])

    result = engine.score(strong_job(), strong_candidate())

    assert result.success is False
    assert "salary_match" in result.error


def test_nan_sub_score_is_a_failure():
    result = build_engine(NanEvaluator()).score(strong_job(), strong_candidate())

    assert result.success is False


def test_invalid_input_type_is_a_failure():
    result = build_engine().score(["not", "a", "job"], strong_candidate())

    assert result.success is False
    assert result.error


def test_scoring_is_deterministic():
    first = build_engine().score(strong_job(), strong_candidate())
    second = build_engine().score(strong_job(), strong_candidate())

    assert first == second
    assert first.scored_at == FIXED_NOW


def test_custom_weights_change_overall():
    weights = {
        "skill_match": 1.0,
        "experience_match": 0.0,
        "education_match": 0.0,
        "location_match": 0.0,
        "salary_match": 0.0,
    }
    engine = build_engine(score_weights=weights)

    result = engine.score({"skills": ["javascript", "python"]}, {"skills": ["JavaScript", "Django"]})

    assert result.overall_fit == pytest.approx(0.5)
    assert engine.score_weights == weights


def test_to_dict_uses_camel_case():
    payload = build_engine().score(strong_job(), strong_candidate()).to_dict()

    assert set(payload["scores"]) == {
        "skillMatch",
        "experienceMatch",
        "educationMatch",
        "locationMatch",
        "salaryMatch",
        "overallFit",
    }
    assert payload["metadata"]["skillsAnalysis"]["requiredCount"] == 2
    assert payload["scoredAt"].startswith("2024-05-01T09:30:00")
    assert "error" not in payload
