"""Record adapters feeding the scoring engine."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..schemas import CandidateProfile
from .records import (
    ApplicationRecordAdapter,
    candidate_profile_from_user,
    job_requirements_from_record,
)


@runtime_checkable
class ProfileAdapter(Protocol):
    """Record adapter contract.

    Implementations turn a stored record (application, user, resume) into
    the provider-neutral :class:`CandidateProfile` the scorers consume.
    """

    source: str

    def candidate_profile(self, record: Any) -> CandidateProfile:
        """Return the candidate profile described by ``record``."""


__all__ = [
    "ApplicationRecordAdapter",
    "ProfileAdapter",
    "candidate_profile_from_user",
    "job_requirements_from_record",
]
