from __future__ import annotations

import pytest

from jobmatch.skills import (
    SKILL_SYNONYMS,
    best_matches,
    dedupe_skills,
    extract_skills,
    normalize_skill,
    skill_similarity,
    unmatched_skills,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Node.js ", "nodejs"),
        ("C++", "c"),
        ("Machine   Learning", "machine learning"),
        ("CI/CD", "cicd"),
        ("snake_case", "snakecase"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_skill(raw, expected):
    assert normalize_skill(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["React.JS", "  Amazon   Web Services!! ", "Ruby-on-Rails", "日本語 スキル", "\tGo\n", "#!$%"],
)
def test_normalize_skill_is_idempotent(raw):
    once = normalize_skill(raw)
    assert normalize_skill(once) == once


def test_extract_skills_accepts_every_shape():
    assert extract_skills(["Python", "SQL"]) == ["Python", "SQL"]
    assert extract_skills([{"name": "Python", "level": "expert"}, {"level": "none"}]) == ["Python"]
    assert extract_skills("Python, SQL;Docker|Git\nLinux") == ["Python", "SQL", "Docker", "Git", "Linux"]
    assert extract_skills(None) == []
    assert extract_skills(42) == []
    assert extract_skills(["Python", "", "   ", None, 3]) == ["Python"]


def test_synonym_table_is_read_only():
    with pytest.raises(TypeError):
        SKILL_SYNONYMS["python"] = frozenset({"snake"})  # type: ignore[index]


def test_skill_similarity_checks_in_precision_order():
    assert skill_similarity("python", "python") == 1.0
    assert skill_similarity("javascript", "js") == 1.0
    assert skill_similarity("nodejs", "javascript") == 1.0
    assert skill_similarity("react", "react native") == pytest.approx(0.9)
    assert skill_similarity("python", "django") < 0.6
    assert skill_similarity("", "python") == 0.0


@pytest.mark.parametrize(
    ("first", "second"),
    [("python", "django"), ("mysql", "mssql"), ("excel", "kubernetes"), ("rust", "ruby")],
)
def test_skill_similarity_is_symmetric(first, second):
    assert skill_similarity(first, second) == skill_similarity(second, first)
    assert 0.0 <= skill_similarity(first, second) <= 1.0


def test_best_matches_prefers_highest_similarity():
    pairings = best_matches(["JavaScript", "Python"], ["Django", "JS"])

    assert pairings[0].required == "JavaScript"
    assert pairings[0].matched == "JS"
    assert pairings[0].similarity == 1.0
    assert pairings[1].similarity < 0.6


def test_best_matches_without_candidate_skills():
    pairings = best_matches(["Python"], [])

    assert pairings[0].matched is None
    assert pairings[0].similarity == 0.0


def test_unmatched_skills_lists_extras():
    extras = unmatched_skills(["Python", "Figma", "Docker"], ["python", "kubernetes"], threshold=0.8)

    assert extras == ["Figma"]


def test_dedupe_skills_collapses_normalized_duplicates():
    assert dedupe_skills(["Python", "python ", "PYTHON!", "SQL"]) == ["Python", "SQL"]
