"""Command-line interface for the fapiao line-item extractor."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer

from .batch import items_from_paths
from .classifier import ClassifierStrategy
from .columns import COLUMN_NAMES
from .config import load_config
from .runtime import build_runtime

app = typer.Typer(add_completion=False, help="Fapiao line-item extractor")


@app.command("extract")
def extract_command(
    pdfs: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Invoice PDF files"),
    strategy: Optional[ClassifierStrategy] = typer.Option(
        None,
        "--strategy",
        help="Column classifier strategy (default: $CLASSIFIER_STRATEGY or content_span)",
    ),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Concurrent documents"),
) -> None:
    config = load_config()
    if strategy is not None:
        config = replace(config, strategy=strategy)
    if workers is not None:
        config = replace(config, batch_max_workers=workers)

    runtime = build_runtime(config)
    results = runtime.run_batch(items_from_paths(pdfs))

    typer.echo(json.dumps([r.to_dict(list(COLUMN_NAMES)) for r in results], ensure_ascii=False, indent=2))
    if any(not r.ok for r in results):
        raise typer.Exit(code=1)


@app.command("service")
def service_command(
    host: str = typer.Option("0.0.0.0", "--host", help="Service bind host"),
    port: int = typer.Option(8000, "--port", help="Service port"),
) -> None:
    import uvicorn

    uvicorn.run(
        "fapiao_lines.app:create_app",
        host=host,
        port=port,
        factory=True,
        log_level="info",
    )


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
