"""Sub-score evaluators for the scoring engine."""

from .education import EducationConfig, EducationEvaluator
from .experience import ExperienceConfig, ExperienceEvaluator
from .location import LocationConfig, LocationEvaluator
from .salary import SalaryConfig, SalaryEvaluator
from .skills import SkillMatchConfig, SkillMatchEvaluator

__all__ = [
    "EducationConfig",
    "EducationEvaluator",
    "ExperienceConfig",
    "ExperienceEvaluator",
    "LocationConfig",
    "LocationEvaluator",
    "SalaryConfig",
    "SalaryEvaluator",
    "SkillMatchConfig",
    "SkillMatchEvaluator",
]
