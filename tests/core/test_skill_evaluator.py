from __future__ import annotations

import pytest

from jobmatch.core.evaluators import SkillMatchEvaluator
from jobmatch.core.evaluators.skills import SkillMatchConfig
from jobmatch.schemas import CandidateProfile, JobRequirements


def build_candidate(skills) -> dict:
    return CandidateProfile(skills=skills).model_dump(mode="python")


def build_job(skills) -> dict:
    return JobRequirements(skills=skills).model_dump(mode="python")


def evaluate(job_skills, candidate_skills, config: SkillMatchConfig | None = None) -> dict:
    evaluator = SkillMatchEvaluator(config=config)
    return evaluator.evaluate(build_candidate(candidate_skills), {"job": build_job(job_skills)})


def test_exact_match_and_unrelated_skill_score_half():
    result = evaluate(["javascript", "python"], ["JavaScript", "Django"])

    assert result["method"] == "skills"
    assert result["scores"]["skill_match"] == pytest.approx(0.5)
    assert result["metadata"]["missing"] == ["python"]
    assert result["metadata"]["bonus"] == 0.0


def test_no_requirements_rewards_any_skills():
    assert evaluate([], ["Python", "SQL", "Git"])["scores"]["skill_match"] == pytest.approx(0.8)
    assert evaluate([], [])["scores"]["skill_match"] == pytest.approx(0.5)


def test_partial_match_counts_half():
    result = evaluate(["mysql"], ["MSSQL"])

    assert result["scores"]["skill_match"] == pytest.approx(0.5)
    assert result["metadata"]["partial_matches"][0]["matched"] == "MSSQL"


def test_extra_skills_add_small_bonus():
    result = evaluate(["mysql", "python"], ["MSSQL", "Python", "Docker", "Git"])

    assert result["metadata"]["bonus"] == pytest.approx(0.04)
    assert result["scores"]["skill_match"] == pytest.approx(0.79)


def test_score_is_capped_at_one():
    result = evaluate(["python"], ["Python", "Docker", "Git", "Linux", "Bash", "Go", "Rust", "SQL"])

    assert result["scores"]["skill_match"] == pytest.approx(1.0)


def test_synonyms_count_as_full_match():
    result = evaluate(["JavaScript", "PostgreSQL"], ["node.js", "Postgres"])

    assert result["scores"]["skill_match"] == pytest.approx(1.0)
    assert len(result["metadata"]["full_matches"]) == 2


def test_thresholds_are_configurable():
    strict = SkillMatchConfig(partial_match_threshold=0.95, full_match_threshold=0.99)

    result = evaluate(["mysql"], ["MSSQL"], config=strict)

    assert result["scores"]["skill_match"] == pytest.approx(0.0)
