"""Adapters shaping portal records into engine inputs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..schemas import CandidateProfile, JobRequirements

DEFAULT_MIN_YEARS = 0
DEFAULT_MAX_YEARS = 20


def dig(record: Any, *path: str) -> Any:
    """Follow ``path`` through nested mappings or attributes, None if absent."""
    current = record
    for key in path:
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(key)
        else:
            current = getattr(current, key, None)
    return current


def first_present(*values: Any) -> Any:
    """First truthy value, mirroring the portal's ``a || b || c`` fallbacks."""
    for value in values:
        if value:
            return value
    return None


def _years(value: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get("totalYears", value.get("total_years"))
    return value


def job_requirements_from_record(job: Any) -> JobRequirements:
    """Build requirements from a job posting record."""
    if isinstance(job, JobRequirements):
        return job
    if not isinstance(job, (Mapping, BaseModel)):
        raise TypeError(f"Unsupported job record type: {type(job).__name__}")

    location = dig(job, "location")
    is_remote = first_present(
        dig(job, "isRemote"),
        dig(job, "is_remote"),
        dig(location, "isRemote") if isinstance(location, Mapping) else None,
    )
    return JobRequirements.model_validate(
        {
            "skills": dig(job, "skills") or [],
            "experience": {
                "min": dig(job, "experience", "min") or DEFAULT_MIN_YEARS,
                "max": dig(job, "experience", "max") or DEFAULT_MAX_YEARS,
            },
            "education": first_present(
                dig(job, "requirements", "education"),
                dig(job, "education"),
            )
            or "any",
            "location": {
                "city": dig(location, "city"),
                "state": dig(location, "state"),
                "country": dig(location, "country"),
                "isRemote": bool(is_remote),
            },
            "salary": {
                "min": dig(job, "salary", "min"),
                "max": dig(job, "salary", "max"),
            },
        }
    )


def candidate_profile_from_user(user: Any) -> CandidateProfile:
    """Build a profile from a user account record."""
    if isinstance(user, CandidateProfile):
        return user
    if not isinstance(user, (Mapping, BaseModel)):
        raise TypeError(f"Unsupported user record type: {type(user).__name__}")
    return CandidateProfile.model_validate(
        {
            "skills": dig(user, "skills") or [],
            "experience": _years(dig(user, "experience")) or 0,
            "education": dig(user, "education") or [],
            "location": dig(user, "location") or {},
            "salaryExpectation": first_present(
                dig(user, "salaryExpectation"),
                dig(user, "preferences", "expectedSalary"),
            )
            or {},
        }
    )


class ApplicationRecordAdapter:
    """Resolve a candidate profile from a job application record.

    Profile fields come from the populated ``candidate`` first, then the
    attached ``resume``. Records carrying neither are read as a bare profile.
    """

    source = "application"

    def candidate_profile(self, application: Any) -> CandidateProfile:
        if isinstance(application, CandidateProfile):
            return application
        if not isinstance(application, (Mapping, BaseModel)):
            raise TypeError(
                f"Unsupported application record type: {type(application).__name__}"
            )

        candidate = dig(application, "candidate")
        resume = dig(application, "resume")
        if candidate is None and resume is None:
            return CandidateProfile.model_validate(application)

        stored = first_present(dig(resume, "resumeId"), resume)
        return CandidateProfile.model_validate(
            {
                "skills": first_present(
                    dig(candidate, "skills"),
                    dig(stored, "skills", "technical"),
                    dig(stored, "parsedData", "extractedSkills"),
                    dig(stored, "skills"),
                )
                or [],
                "experience": first_present(
                    _years(dig(candidate, "experience")),
                    dig(stored, "totalExperience"),
                    dig(stored, "parsedData", "extractedExperience"),
                )
                or 0,
                "education": first_present(
                    dig(candidate, "education"),
                    dig(stored, "education"),
                )
                or [],
                "location": first_present(
                    dig(candidate, "location"),
                    dig(stored, "personalInfo", "location"),
                )
                or {},
                "salaryExpectation": first_present(
                    dig(application, "salaryExpectation"),
                    dig(candidate, "preferences", "expectedSalary"),
                )
                or {},
            }
        )
