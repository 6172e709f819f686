"""Job requirement schema consumed by the scoring engine."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from ..skills import dedupe_skills, extract_skills
from .common import WireModel, coerce_flag, coerce_mapping, coerce_number, coerce_text

ANY_EDUCATION = "any"

EDUCATION_ORDINALS: dict[str, int] = {
    "high-school": 1,
    "diploma": 2,
    "bachelor": 3,
    "master": 4,
    "phd": 5,
}


class ExperienceRange(WireModel):
    """Required years of experience."""

    min: float | None = None
    max: float | None = None

    @field_validator("min", "max", mode="before")
    @classmethod
    def _coerce_years(cls, value: Any) -> float | None:
        return coerce_number(value)

    @model_validator(mode="after")
    def _order_bounds(self) -> "ExperienceRange":
        # A zero maximum means the posting left the range open.
        if self.min is not None and self.max and self.max < self.min:
            self.max = self.min
        return self


class JobLocation(WireModel):
    """Where the job is performed."""

    city: str | None = None
    state: str | None = None
    country: str | None = None
    is_remote: bool = False

    @field_validator("city", "state", "country", mode="before")
    @classmethod
    def _coerce_place(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("is_remote", mode="before")
    @classmethod
    def _coerce_remote(cls, value: Any) -> bool:
        return coerce_flag(value)


class SalaryRange(WireModel):
    """Budgeted salary range in the posting's currency."""

    min: float | None = None
    max: float | None = None

    @field_validator("min", "max", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float | None:
        return coerce_number(value)


class JobRequirements(WireModel):
    """Requirements of one job posting.

    ``skills`` is a set in meaning: duplicates (after normalization) collapse
    and only the first spelling is kept. ``education`` is one of
    :data:`EDUCATION_ORDINALS` or ``"any"``; unknown levels are kept verbatim
    and scored as a bachelor requirement.
    """

    skills: list[str] = Field(default_factory=list)
    experience: ExperienceRange = Field(default_factory=ExperienceRange)
    education: str = ANY_EDUCATION
    location: JobLocation = Field(default_factory=JobLocation)
    salary: SalaryRange = Field(default_factory=SalaryRange)

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> list[str]:
        return dedupe_skills(extract_skills(value))

    @field_validator("experience", "location", "salary", mode="before")
    @classmethod
    def _coerce_section(cls, value: Any) -> dict[str, Any]:
        return coerce_mapping(value)

    @field_validator("education", mode="before")
    @classmethod
    def _coerce_education(cls, value: Any) -> str:
        text = coerce_text(value)
        if text is None or text.lower() in {ANY_EDUCATION, "none"}:
            return ANY_EDUCATION
        return text.lower().replace("_", "-").replace(" ", "-")

    @property
    def is_remote(self) -> bool:
        return self.location.is_remote
