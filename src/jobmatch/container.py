"""Dependency injection container for the scoring engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .adapters import ApplicationRecordAdapter
from .core import (
    BatchScorer,
    EducationEvaluator,
    ExperienceEvaluator,
    LocationEvaluator,
    SalaryEvaluator,
    ScoringEngine,
    SkillMatchEvaluator,
)
from .core.evaluators import (
    EducationConfig,
    ExperienceConfig,
    LocationConfig,
    SalaryConfig,
    SkillMatchConfig,
)
from .pipeline import ScoringPipeline
from .schemas.config import load_config


class ScoringContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    application_adapter = providers.Singleton(ApplicationRecordAdapter)

    skill_evaluator = providers.Singleton(SkillMatchEvaluator)
    experience_evaluator = providers.Singleton(ExperienceEvaluator)
    education_evaluator = providers.Singleton(EducationEvaluator)
    location_evaluator = providers.Singleton(LocationEvaluator)
    salary_evaluator = providers.Singleton(SalaryEvaluator)

    evaluators = providers.List(
        skill_evaluator,
        experience_evaluator,
        education_evaluator,
        location_evaluator,
        salary_evaluator,
    )

    scoring_engine = providers.Singleton(
        ScoringEngine,
        evaluators=evaluators,
        score_weights=config.core.score_weights,
    )

    batch_scorer = providers.Singleton(
        BatchScorer,
        engine=scoring_engine,
        adapter=application_adapter,
        max_workers=config.batch.max_workers,
        max_jobs=config.batch.max_jobs,
        recommendation_limit=config.batch.recommendation_limit,
    )

    pipeline = providers.Factory(ScoringPipeline, scorer=batch_scorer)


# settings key -> (provider name, evaluator class, config dataclass)
_EVALUATOR_OVERRIDES: dict[str, tuple[str, type, type]] = {
    "skills": ("skill_evaluator", SkillMatchEvaluator, SkillMatchConfig),
    "experience": ("experience_evaluator", ExperienceEvaluator, ExperienceConfig),
    "education": ("education_evaluator", EducationEvaluator, EducationConfig),
    "location": ("location_evaluator", LocationEvaluator, LocationConfig),
    "salary": ("salary_evaluator", SalaryEvaluator, SalaryConfig),
}


def create_container(*, settings: dict[str, Any] | None = None) -> ScoringContainer:
    """Instantiate the container, validating and applying optional overrides."""

    resolved = load_config(settings or {}).to_settings()

    container = ScoringContainer()
    container.config.from_dict(
        {
            "core": resolved.get("core", {}),
            "batch": resolved["batch"],
        }
    )

    for key, evaluator_settings in resolved.get("evaluators", {}).items():
        provider_name, evaluator_cls, config_cls = _EVALUATOR_OVERRIDES[key]
        getattr(container, provider_name).override(
            providers.Singleton(evaluator_cls, config=config_cls(**evaluator_settings))
        )

    return container
