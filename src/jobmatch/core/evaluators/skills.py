"""Skill coverage evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...schemas import CandidateProfile, JobRequirements
from ...skills import best_matches


@dataclass
class SkillMatchConfig:
    """Thresholds and weights for skill coverage."""

    full_match_threshold: float = 0.9
    partial_match_threshold: float = 0.6
    partial_match_weight: float = 0.5
    extra_skill_bonus: float = 0.02
    max_extra_bonus: float = 0.1
    unconstrained_with_skills: float = 0.8
    unconstrained_without_skills: float = 0.5


class SkillMatchEvaluator:
    """Score how well candidate skills cover the required skills."""

    method = "skills"

    def __init__(self, *, config: SkillMatchConfig | None = None) -> None:
        self._config = config or SkillMatchConfig()

    def evaluate(self, candidate: dict[str, Any], context: dict[str, Any]) -> dict[str, Any]:
        profile = CandidateProfile.model_validate(candidate)
        job = JobRequirements.model_validate(context["job"])
        required = job.skills
        candidate_skills = profile.skills

        if not required:
            score = (
                self._config.unconstrained_with_skills
                if candidate_skills
                else self._config.unconstrained_without_skills
            )
            return self._build_response(score=score, status="no_requirements")

        full: list[dict[str, Any]] = []
        partial: list[dict[str, Any]] = []
        missing: list[str] = []
        for pairing in best_matches(required, candidate_skills):
            entry = {
                "required": pairing.required,
                "matched": pairing.matched,
                "similarity": pairing.similarity,
            }
            if pairing.similarity >= self._config.full_match_threshold:
                full.append(entry)
            elif pairing.similarity >= self._config.partial_match_threshold:
                partial.append(entry)
            else:
                missing.append(pairing.required)

        matched_weight = len(full) + len(partial) * self._config.partial_match_weight
        base_score = matched_weight / len(required)
        bonus = self._extra_skill_bonus(len(candidate_skills) - len(required))

        return self._build_response(
            score=min(1.0, base_score + bonus),
            status="scored",
            full_matches=full,
            partial_matches=partial,
            missing=missing,
            base_score=base_score,
            bonus=bonus,
        )

    def _extra_skill_bonus(self, extra_count: int) -> float:
        if extra_count <= 0:
            return 0.0
        return min(self._config.max_extra_bonus, extra_count * self._config.extra_skill_bonus)

    def _build_response(
        self,
        *,
        score: float,
        status: str,
        full_matches: list[dict[str, Any]] | None = None,
        partial_matches: list[dict[str, Any]] | None = None,
        missing: list[str] | None = None,
        base_score: float | None = None,
        bonus: float = 0.0,
    ) -> dict[str, Any]:
        return {
            "method": self.method,
            "scores": {"skill_match": score},
            "metadata": {
                "status": status,
                "full_matches": full_matches or [],
                "partial_matches": partial_matches or [],
                "missing": missing or [],
                "base_score": base_score,
                "bonus": bonus,
            },
        }
