"""Skill normalization, extraction and pairwise similarity."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from rapidfuzz.distance import JaroWinkler

_STRIP_PATTERN = re.compile(r"[^\w\s]|_")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_DELIMITER_PATTERN = re.compile(r"[,;|\n]")

EXACT_SIMILARITY = 1.0
SUBSTRING_SIMILARITY = 0.9


def normalize_skill(skill: Any) -> str:
    """Lower-case, drop punctuation and collapse whitespace."""
    if not skill:
        return ""
    text = _STRIP_PATTERN.sub("", str(skill).lower())
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def extract_skills(value: Any) -> list[str]:
    """Flatten the accepted skill shapes into a list of skill names.

    Accepts a delimited string, a sequence of strings, a sequence of
    ``{"name": ...}`` mappings (or objects with a ``name`` attribute) and
    ``None``. Blank and unrecognised entries are dropped.
    """
    if not value:
        return []
    if isinstance(value, str):
        return [part.strip() for part in _DELIMITER_PATTERN.split(value) if part.strip()]
    if isinstance(value, Mapping):
        value = [value]
    if not isinstance(value, Iterable):
        return []

    skills: list[str] = []
    for item in value:
        if isinstance(item, str):
            name = item
        elif isinstance(item, Mapping):
            name = item.get("name")
        else:
            name = getattr(item, "name", None)
        if isinstance(name, str) and name.strip():
            skills.append(name.strip())
    return skills


def _build_synonyms(raw: Mapping[str, Iterable[str]]) -> Mapping[str, frozenset[str]]:
    return MappingProxyType(
        {
            normalize_skill(canonical): frozenset(normalize_skill(alias) for alias in aliases)
            for canonical, aliases in raw.items()
        }
    )


# Keys and aliases are stored normalized, so "react.js" is held as "reactjs".
SKILL_SYNONYMS: Mapping[str, frozenset[str]] = _build_synonyms(
    {
        "javascript": ["js", "node", "nodejs", "es6", "es2015", "typescript", "ts"],
        "python": ["py", "python3", "cpython"],
        "java": ["spring", "springboot", "hibernate", "maven", "gradle"],
        "react": ["reactjs", "jsx", "react.js", "nextjs", "next.js"],
        "angular": ["angularjs", "angular2", "ng", "typescript"],
        "vue": ["vuejs", "vue.js", "nuxt", "nuxtjs"],
        "aws": ["amazon web services", "ec2", "s3", "lambda", "cloudformation"],
        "docker": ["containerization", "containers", "kubernetes", "k8s"],
        "mongodb": ["mongo", "nosql", "document database"],
        "mysql": ["sql", "relational database", "rdbms"],
        "postgresql": ["postgres", "psql", "relational database"],
        "golang": ["go"],
        "machine learning": ["ml", "deep learning"],
        "ci cd": ["ci/cd", "continuous integration", "continuous delivery"],
    }
)


def skill_similarity(
    first: str,
    second: str,
    *,
    synonyms: Mapping[str, frozenset[str]] = SKILL_SYNONYMS,
) -> float:
    """Similarity of two normalized skills in [0, 1].

    Checks run from most to least precise: exact, synonym table, substring
    containment, then Jaro-Winkler.
    """
    if not first or not second:
        return 0.0
    if first == second:
        return EXACT_SIMILARITY
    if second in synonyms.get(first, ()) or first in synonyms.get(second, ()):
        return EXACT_SIMILARITY
    if first in second or second in first:
        return SUBSTRING_SIMILARITY
    return float(JaroWinkler.similarity(first, second))


@dataclass(frozen=True, slots=True)
class SkillPairing:
    """Best candidate skill found for one required skill."""

    required: str
    matched: str | None
    similarity: float


def best_matches(
    required_skills: Iterable[str],
    candidate_skills: Iterable[str],
    *,
    synonyms: Mapping[str, frozenset[str]] = SKILL_SYNONYMS,
) -> list[SkillPairing]:
    """Pair every required skill with its most similar candidate skill.

    Ties keep the earliest candidate skill.
    """
    candidates = [(skill, normalize_skill(skill)) for skill in candidate_skills]
    pairings: list[SkillPairing] = []
    for required in required_skills:
        normalized_required = normalize_skill(required)
        best_score = 0.0
        best_skill: str | None = None
        for raw, normalized in candidates:
            score = skill_similarity(normalized_required, normalized, synonyms=synonyms)
            if score > best_score:
                best_score = score
                best_skill = raw
        pairings.append(SkillPairing(required=required, matched=best_skill, similarity=best_score))
    return pairings


def unmatched_skills(
    candidate_skills: Iterable[str],
    required_skills: Iterable[str],
    *,
    threshold: float,
    synonyms: Mapping[str, frozenset[str]] = SKILL_SYNONYMS,
) -> list[str]:
    """Candidate skills that reach ``threshold`` against no required skill."""
    required = [normalize_skill(skill) for skill in required_skills]
    extra: list[str] = []
    for skill in candidate_skills:
        normalized = normalize_skill(skill)
        if not any(
            skill_similarity(item, normalized, synonyms=synonyms) >= threshold
            for item in required
        ):
            extra.append(skill)
    return extra


def dedupe_skills(skills: Iterable[str]) -> list[str]:
    """Drop skills whose normalized form was already seen, keeping order."""
    seen: set[str] = set()
    unique: list[str] = []
    for skill in skills:
        key = normalize_skill(skill)
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(skill)
    return unique


__all__ = [
    "SKILL_SYNONYMS",
    "SkillPairing",
    "best_matches",
    "dedupe_skills",
    "extract_skills",
    "normalize_skill",
    "skill_similarity",
    "unmatched_skills",
]
