"""Explainable candidate/job matching engine."""

from __future__ import annotations

__version__ = "0.1.0"

from .service import score_application, score_multiple_applications  # noqa: E402

__all__ = ["__version__", "score_application", "score_multiple_applications"]
