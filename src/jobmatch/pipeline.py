"""File-driven scoring pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
import structlog

from . import __version__
from .adapters import candidate_profile_from_user, job_requirements_from_record
from .core import BatchScorer, ScoredCandidate
from .core.analytics import analyze_job_scoring


class RecordLoadError(ValueError):
    """Raised when a JSON lines file contains invalid records."""

    def __init__(self, errors: list[str], partial: list[dict[str, Any]]):
        super().__init__("Record loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Record loading failed: {self.errors}"


class RecordLoader:
    """Load one JSON object per line, collecting per-line errors."""

    def load(self, path: Path) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: expected a JSON object")
                    continue
                records.append(record)
        if errors:
            raise RecordLoadError(errors, records)
        return records


class DocumentLoader:
    """Load a single JSON document."""

    def load(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            try:
                return json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc


class OutputWriter:
    """Persist pipeline output."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")


class ScoringPipeline:
    """Reads portal records from disk, scores them and writes the results."""

    def __init__(
        self,
        *,
        scorer: BatchScorer,
        record_loader: RecordLoader | None = None,
        document_loader: DocumentLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._scorer = scorer
        self._records = record_loader or RecordLoader()
        self._documents = document_loader or DocumentLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        job_path: Path,
        candidates_path: Path,
        output_path: Path,
        audit_logger: AuditLogger | None = None,
    ) -> list[dict[str, Any]]:
        """Rank the applications in ``candidates_path`` against one job."""
        job_record = self._documents.load(job_path)
        requirements = job_requirements_from_record(job_record)
        applications, load_errors = self._load_records(candidates_path)

        ranked = self._scorer.score_multiple(requirements, applications)
        results = [candidate.to_dict() for candidate in ranked]

        for candidate in ranked:
            scoring = candidate.ai_scoring
            if audit_logger:
                audit_logger.append(
                    {
                        "job_id": _record_id(job_record),
                        "application_id": _record_id(candidate.record),
                        "success": scoring.success,
                        "scores": scoring.scores.model_dump(mode="json", by_alias=True),
                        "error": scoring.error,
                        "scored_at": scoring.to_dict()["scoredAt"],
                    }
                )
            self._logger.info(
                "pipeline.result",
                job_id=_record_id(job_record),
                application_id=_record_id(candidate.record),
                success=scoring.success,
                overall_fit=scoring.scores.overall_fit,
            )

        self._writer.write(
            output_path,
            {
                "metadata": self._metadata(
                    job_id=_record_id(job_record),
                    candidate_count=len(applications),
                    errors=load_errors,
                ),
                "results": results,
            },
        )
        return results

    def recommend(
        self,
        *,
        candidate_path: Path,
        jobs_path: Path,
        output_path: Path,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Recommend the best-fitting jobs in ``jobs_path`` for one candidate."""
        user_record = self._documents.load(candidate_path)
        profile = candidate_profile_from_user(user_record)
        jobs, load_errors = self._load_records(jobs_path)

        recommendations = [
            item.to_dict() for item in self._scorer.recommend_jobs(profile, jobs, limit=limit)
        ]
        self._writer.write(
            output_path,
            {
                "metadata": self._metadata(
                    candidate_id=_record_id(user_record),
                    job_count=len(jobs),
                    errors=load_errors,
                ),
                "recommendations": recommendations,
            },
        )
        return recommendations

    def analyze(self, *, results_path: Path, output_path: Path) -> dict[str, Any]:
        """Summarize the output of a previous :meth:`run`."""
        document = self._documents.load(results_path)
        entries = document.get("results", []) if isinstance(document, dict) else document
        scored = [ScoredCandidate.from_dict(entry) for entry in entries]
        analysis = analyze_job_scoring(scored).model_dump(mode="json", by_alias=True)
        self._writer.write(output_path, analysis)
        return analysis

    def _load_records(self, path: Path) -> tuple[list[dict[str, Any]], list[str]]:
        try:
            return self._records.load(path), []
        except RecordLoadError as exc:
            self._logger.warning("records.partial_load", path=str(path), errors=exc.errors)
            return exc.partial, list(exc.errors)

    @staticmethod
    def _metadata(**fields: Any) -> dict[str, Any]:
        return {
            **fields,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }


def _record_id(record: Any) -> Any:
    if not isinstance(record, dict):
        return None
    for key in ("_id", "id", "applicationId", "jobId", "candidateId"):
        if record.get(key) is not None:
            return record[key]
    return None
