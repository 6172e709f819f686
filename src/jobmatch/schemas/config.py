"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .result import SUB_SCORE_NAMES


class CoreConfig(BaseModel):
    score_weights: dict[str, float] | None = None

    @field_validator("score_weights")
    @classmethod
    def _weights_sum_to_one(cls, value: dict[str, float] | None) -> dict[str, float] | None:
        if value is None:
            return value
        unknown = set(value) - set(SUB_SCORE_NAMES)
        if unknown:
            raise ValueError(f"Unknown score weights: {sorted(unknown)}")
        if any(weight < 0 for weight in value.values()):
            raise ValueError("Score weights must be non-negative")
        if not math.isclose(sum(value.values()), 1.0, abs_tol=1e-6):
            raise ValueError("Score weights must sum to 1.0")
        return value


class BatchConfig(BaseModel):
    max_workers: int = Field(default=1, ge=1)
    max_jobs: int | None = Field(default=50, ge=1)
    recommendation_limit: int = Field(default=10, ge=1)


class EvaluatorConfig(BaseModel):
    skills: dict[str, Any] | None = None
    experience: dict[str, Any] | None = None
    education: dict[str, Any] | None = None
    location: dict[str, Any] | None = None
    salary: dict[str, Any] | None = None


class AppConfig(BaseModel):
    core: CoreConfig = Field(default_factory=CoreConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    evaluators: EvaluatorConfig = Field(default_factory=EvaluatorConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        if self.core.score_weights:
            settings["core"] = self.core.model_dump(exclude_none=True)
        settings["batch"] = self.batch.model_dump()
        evaluator_settings = self.evaluators.model_dump(exclude_none=True)
        if evaluator_settings:
            settings["evaluators"] = evaluator_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config must be a mapping")
    return AppConfig.model_validate(raw)
