"""Typer CLI entrypoint for batch candidate matching."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .core import RequirementMode
from .logging import configure_logging
from .pipeline import AuditLogger
from .schemas.config import load_config

app = typer.Typer(help="Evaluate game candidates against client match criteria.")


@app.command()
def run(
    data_dir: Path = typer.Option(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        help="Directory holding the trait, candidate and client JSON files.",
    ),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    mode: Optional[RequirementMode] = typer.Option(
        None, case_sensitive=False, help="How Required trait requirements are enforced."
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    candidate: Optional[List[str]] = typer.Option(None, help="Only evaluate these candidate ids."),
    client: Optional[List[str]] = typer.Option(None, help="Only evaluate these client ids."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Evaluate every selected candidate for every selected client."""
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        try:
            settings = load_config(loaded).to_settings()
        except ValidationError as exc:
            raise typer.BadParameter(f"Invalid config: {exc}", param_name="config") from exc

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    results = pipeline.run(
        data_dir=data_dir,
        output_path=output,
        mode=mode,
        candidate_ids=candidate,
        client_ids=client,
        audit_logger=audit_logger,
    )
    matches = sum(1 for entry in results if entry["evaluation"]["is_match"])
    typer.echo(
        f"Evaluated {len(results)} pairs ({matches} matches). Results saved to {output}."
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
