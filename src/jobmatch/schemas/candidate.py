"""Candidate profile schema consumed by the scoring engine."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from ..skills import extract_skills
from .common import WireModel, coerce_mapping, coerce_number, coerce_text


class EducationEntry(WireModel):
    """One education record; only ``degree`` feeds scoring."""

    degree: str | None = None
    institution: str | None = None
    field_of_study: str | None = None
    graduation_year: int | None = None

    @field_validator("degree", "institution", "field_of_study", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("graduation_year", mode="before")
    @classmethod
    def _coerce_year(cls, value: Any) -> int | None:
        number = coerce_number(value)
        return int(number) if number is not None else None


class CandidateLocation(WireModel):
    city: str | None = None
    state: str | None = None
    country: str | None = None

    @field_validator("city", "state", "country", mode="before")
    @classmethod
    def _coerce_place(cls, value: Any) -> str | None:
        return coerce_text(value)


class SalaryExpectation(WireModel):
    amount: float | None = None
    currency: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float | None:
        return coerce_number(value)

    @field_validator("currency", mode="before")
    @classmethod
    def _coerce_currency(cls, value: Any) -> str | None:
        return coerce_text(value)


class CandidateProfile(WireModel):
    """Profile of one candidate as seen by the scorers.

    Skills may arrive as strings, ``{"name", "level"}`` pairs or a delimited
    string. Education may be a list of records or plain degree strings. A
    bare location string is read as the city, and a bare number as the
    salary expectation amount.
    """

    skills: list[str] = Field(default_factory=list)
    experience: float = 0.0
    education: list[EducationEntry] = Field(default_factory=list)
    location: CandidateLocation = Field(default_factory=CandidateLocation)
    salary_expectation: SalaryExpectation = Field(default_factory=SalaryExpectation)

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> list[str]:
        return extract_skills(value)

    @field_validator("experience", mode="before")
    @classmethod
    def _coerce_experience(cls, value: Any) -> float:
        return coerce_number(value) or 0.0

    @field_validator("education", mode="before")
    @classmethod
    def _coerce_education(cls, value: Any) -> list[dict[str, Any]]:
        if value is None:
            return []
        if isinstance(value, (str, dict)) or not isinstance(value, (list, tuple)):
            value = [value]
        entries: list[dict[str, Any]] = []
        for item in value:
            if isinstance(item, str):
                entries.append({"degree": item})
            elif isinstance(item, EducationEntry):
                entries.append(item.model_dump())
            elif isinstance(item, dict):
                entries.append(item)
        return entries

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> dict[str, Any]:
        if isinstance(value, str):
            return {"city": value}
        return coerce_mapping(value)

    @field_validator("salary_expectation", mode="before")
    @classmethod
    def _coerce_salary(cls, value: Any) -> dict[str, Any]:
        if isinstance(value, (int, float, str)) and not isinstance(value, bool):
            return {"amount": value}
        return coerce_mapping(value)
