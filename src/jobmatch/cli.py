"""Typer CLI entrypoint for the scoring pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import ScoringContainer, create_container
from .logging import configure_logging
from .pipeline import AuditLogger

app = typer.Typer(help="Candidate/job matching and scoring CLI.")


def _build_container(config: Optional[Path], log_level: str) -> ScoringContainer:
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise typer.BadParameter("Config file must be a YAML object", param_name="config")
        settings = loaded

    configure_logging(log_level)

    try:
        return create_container(settings=settings)
    except (ValidationError, TypeError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


_CONFIG_OPTION = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path.")
_LOG_LEVEL_OPTION = typer.Option("INFO", help="Log level for structured logging.")


@app.command()
def score(
    job: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job posting JSON path."),
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Applications JSONL path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    config: Optional[Path] = _CONFIG_OPTION,
    log_level: str = _LOG_LEVEL_OPTION,
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Score and rank applications against one job."""
    container = _build_container(config, log_level)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    results = pipeline.run(
        job_path=job,
        candidates_path=candidates,
        output_path=output,
        audit_logger=audit_logger,
    )
    typer.echo(f"Scored {len(results)} applications. Results saved to {output}.")


@app.command()
def recommend(
    candidate: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidate JSON path."),
    jobs: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Job postings JSONL path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    limit: Optional[int] = typer.Option(None, min=1, help="Number of recommendations to keep."),
    config: Optional[Path] = _CONFIG_OPTION,
    log_level: str = _LOG_LEVEL_OPTION,
) -> None:
    """Recommend the best-fitting jobs for one candidate."""
    container = _build_container(config, log_level)
    recommendations = container.pipeline().recommend(
        candidate_path=candidate,
        jobs_path=jobs,
        output_path=output,
        limit=limit,
    )
    typer.echo(f"Found {len(recommendations)} recommendations. Results saved to {output}.")


@app.command()
def analyze(
    results: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Output of the score command."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Analysis JSON path."),
    log_level: str = _LOG_LEVEL_OPTION,
) -> None:
    """Summarize a previous scoring run."""
    container = _build_container(None, log_level)
    analysis = container.pipeline().analyze(results_path=results, output_path=output)
    typer.echo(
        f"Analyzed {analysis['totalScoredApplications']} applications. Results saved to {output}."
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
