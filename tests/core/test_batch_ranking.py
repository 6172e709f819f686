from __future__ import annotations

import copy

import pytest

from jobmatch.core import (
    BatchScorer,
    EducationEvaluator,
    ExperienceEvaluator,
    LocationEvaluator,
    SalaryEvaluator,
    ScoredCandidate,
    ScoringEngine,
    ScoringFailure,
    ScoringSuccess,
    SkillMatchEvaluator,
)
from jobmatch.schemas import CandidateProfile, ScoreResult, SubScores


class ExperienceAsFitEngine:
    """Scores every candidate at a tenth of their years of experience."""

    def score(self, job_requirements, candidate_profile) -> ScoreResult:
        fit = candidate_profile.experience / 10
        values = dict.fromkeys(
            ("skill_match", "experience_match", "education_match", "location_match", "salary_match"),
            fit,
        )
        return ScoreResult(scores=SubScores(**values, overall_fit=fit))


def build_engine() -> ScoringEngine:
    return ScoringEngine(
        [
            SkillMatchEvaluator(),
            ExperienceEvaluator(),
            EducationEvaluator(),
            LocationEvaluator(),
            SalaryEvaluator(),
        ]
    )


def test_ranks_best_fit_first():
    scorer = BatchScorer(ExperienceAsFitEngine())
    records = [
        {"id": "A", "experience": 4},
        {"id": "B", "experience": 9},
        {"id": "C", "experience": 7},
    ]

    ranked = scorer.score_multiple({}, records)

    assert [item.record["id"] for item in ranked] == ["B", "C", "A"]
    assert [item.overall_fit for item in ranked] == pytest.approx([0.9, 0.7, 0.4])


def test_equal_scores_keep_input_order():
    scorer = BatchScorer(ExperienceAsFitEngine())
    records = [{"id": name, "experience": 5} for name in ("first", "second", "third", "fourth")]

    ranked = scorer.score_multiple({}, records)

    assert [item.record["id"] for item in ranked] == ["first", "second", "third", "fourth"]


def test_bad_record_does_not_abort_batch():
    scorer = BatchScorer(ExperienceAsFitEngine())
    records = [{"id": "A", "experience": 4}, "not-a-record", {"id": "C", "experience": 7}]

    items = scorer.score_items({}, records)

    assert [type(item) for item in items] == [ScoringSuccess, ScoringFailure, ScoringSuccess]
    assert items[1].index == 1
    assert "Unsupported application record type" in items[1].error

    ranked = scorer.rank(items)
    assert [item.ai_scoring.success for item in ranked] == [True, False, True]
    assert ranked[1].record == {"record": "not-a-record"}
    assert ranked[1].overall_fit == 0.5


def test_inputs_are_not_mutated():
    scorer = BatchScorer(build_engine())
    records = [
        {"_id": "app-1", "candidate": {"skills": ["Python"], "experience": {"totalYears": 3}}},
        {"_id": "app-2", "resume": {"skills": {"technical": ["SQL"]}, "totalExperience": 1}},
    ]
    snapshot = copy.deepcopy(records)

    ranked = scorer.score_multiple({"skills": ["Python"]}, records)

    assert records == snapshot
    assert all("aiScoring" not in record for record in records)
    assert ranked[0].record["_id"] == "app-1"
    assert ranked[0].to_dict()["aiScoring"]["success"] is True


def test_parallel_scoring_matches_sequential():
    records = [{"id": index, "experience": index % 7} for index in range(20)]

    sequential = BatchScorer(ExperienceAsFitEngine()).score_multiple({}, records)
    parallel = BatchScorer(ExperienceAsFitEngine(), max_workers=4).score_multiple({}, records)

    assert [item.record["id"] for item in parallel] == [item.record["id"] for item in sequential]


def test_empty_batch():
    assert BatchScorer(ExperienceAsFitEngine()).score_multiple({}, []) == []


def test_scored_candidate_round_trips_through_dict():
    scorer = BatchScorer(build_engine())
    ranked = scorer.score_multiple({"skills": ["Python"]}, [{"_id": "x", "skills": ["Python"]}])

    payload = ranked[0].to_dict()
    restored = ScoredCandidate.from_dict(payload)

    assert restored.record == {"_id": "x", "skills": ["Python"]}
    assert restored.overall_fit == ranked[0].overall_fit


def jobs() -> list[dict]:
    return [
        {
            "_id": "job-ops",
            "title": "Platform Engineer",
            "skills": ["Kubernetes", "Terraform"],
            "location": {"city": "Berlin"},
        },
        {
            "_id": "job-backend",
            "title": "Backend Engineer",
            "company": "Acme",
            "skills": ["Python", "SQL"],
            "experience": {"min": 2, "max": 5},
            "location": {"city": "Austin"},
            "salary": {"min": 90_000, "max": 120_000},
        },
        {
            "_id": "job-remote",
            "title": "Data Engineer",
            "skills": ["Python", "Spark"],
            "isRemote": True,
        },
    ]


def candidate() -> CandidateProfile:
    return CandidateProfile(skills=["Python", "SQL"], experience=3, location={"city": "Austin"})


def test_recommend_jobs_orders_by_match():
    recommendations = BatchScorer(build_engine()).recommend_jobs(candidate(), jobs())

    assert recommendations[0].job["_id"] == "job-backend"
    assert recommendations[0].job["company"] == "Acme"
    assert recommendations[0].recommendation_level == "Highly Recommended"
    assert "Strong skill match" in recommendations[0].match_reasons
    assert recommendations[-1].job["_id"] == "job-ops"
    assert set(recommendations[0].to_dict()) == {
        "job",
        "matchScore",
        "skillMatchScore",
        "experienceMatchScore",
        "matchReasons",
        "recommendationLevel",
    }


def test_recommend_jobs_caps_considered_jobs_and_limit():
    scorer = BatchScorer(build_engine(), max_jobs=2)

    considered = scorer.recommend_jobs(candidate(), jobs())
    limited = scorer.recommend_jobs(candidate(), jobs(), limit=1)

    assert {item.job["_id"] for item in considered} == {"job-ops", "job-backend"}
    assert [item.job["_id"] for item in limited] == ["job-backend"]


def test_recommend_jobs_skips_unreadable_jobs():
    recommendations = BatchScorer(build_engine()).recommend_jobs(candidate(), ["garbage", *jobs()])

    assert len(recommendations) == 3


def test_recommend_jobs_skips_inactive_postings_before_cap():
    postings = [
        {"_id": "closed", "status": "closed", "skills": ["Python"]},
        {"_id": "draft", "status": "draft", "skills": ["Python"]},
        {"_id": "open", "status": "active", "skills": ["Python"]},
        {"_id": "unlabelled", "skills": ["Python"]},
    ]

    recommendations = BatchScorer(build_engine(), max_jobs=2).recommend_jobs(candidate(), postings)

    assert [item.job["_id"] for item in recommendations] == ["open", "unlabelled"]
