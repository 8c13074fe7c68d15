"""CLI entry point for note2anki.

  note2anki [--config PATH] [--dry-run] [--verbose] INPUT OUTPUT

Extracts text from INPUT (PDF/DOCX/MD), generates flashcards with Claude,
and writes them to OUTPUT (.csv for CSV, anything else tab-separated).
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from note2anki.config import load_config
from note2anki.errors import Note2AnkiError, UnsupportedFormatError
from note2anki.extract import SUPPORTED_EXTENSIONS, select_extractor
from note2anki.service import PipelineResult, run_pipeline

app = typer.Typer(
    name="note2anki",
    help="Convert study notes (PDF/DOCX/MD) to Anki flashcards using Claude AI.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

_EPILOG = (
    "Supported input formats: PDF, DOCX, MD. "
    "Supported output formats: TXT/TSV (tab-separated), CSV.\n\n"
    "Example: note2anki notes.pdf flashcards.txt"
)


def _print_preview(result: PipelineResult) -> None:
    """Print front/back of the previewed cards."""
    console.print(f"\n[bold]Preview (first {len(result.preview)} cards):[/bold]")
    for i, card in enumerate(result.preview, start=1):
        console.print(f"\n[bold]Card {i}:[/bold]")
        console.print(f"  Front: {escape(card.front)}")
        console.print(f"  Back: {escape(card.back)}")


def _print_summary(result: PipelineResult, elapsed: float) -> None:
    """Print a rich summary table to console."""
    table = Table(title="note2anki Summary", show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Subject", escape(result.subject))
    table.add_row("Input format", result.file_type)
    table.add_row("Characters extracted", f"{result.char_count:,}")
    table.add_row("Cards generated", str(result.card_count))
    if result.output_path is not None and result.output_format is not None:
        table.add_row("Output", escape(str(result.output_path)))
        table.add_row("Format", result.output_format.value)
    else:
        table.add_row("Output", "(dry run, nothing written)")
    table.add_row("Elapsed", f"{elapsed:.2f}s")

    console.print(table)


@app.command(epilog=_EPILOG)
def convert(
    ctx: typer.Context,
    input_path: str | None = typer.Argument(
        None, help="Input file (PDF/DOCX/MD)", show_default=False
    ),
    output_path: str | None = typer.Argument(
        None, help="Output file (.txt/.tsv or .csv)", show_default=False
    ),
    config_path: str | None = typer.Option(
        None, "--config", help="Path to configuration file (JSON or YAML)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Preview flashcards without saving"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Enable debug logging"
    ),
) -> None:
    """Convert a study-notes document to Anki flashcards."""
    if input_path is None or output_path is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    _log_fmt = "%(name)s %(levelname)s: %(message)s"
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_log_fmt)

    source = Path(input_path)
    if not source.is_file():
        console.print(f"[red]Error:[/red] Input file does not exist: {escape(input_path)}")
        raise typer.Exit(code=1)

    try:
        select_extractor(source)
        config = load_config(config_path)
    except UnsupportedFormatError as e:
        supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        console.print(f"[red]Error:[/red] {escape(str(e))} (supported: {supported})")
        raise typer.Exit(code=1) from e
    except Note2AnkiError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    console.print(f"Processing: [cyan]{escape(source.name)}[/cyan]")
    start = time.perf_counter()

    try:
        with console.status("Extracting text and generating flashcards with Claude..."):
            result = run_pipeline(
                source,
                output_path,
                config=config,
                dry_run=dry_run,
            )
    except Note2AnkiError as e:
        console.print(f"[red]Processing failed:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    elapsed = time.perf_counter() - start

    if result.dry_run:
        _print_preview(result)
    else:
        console.print(
            f"[green]Saved {result.card_count} flashcards to[/green] "
            f"{escape(str(result.output_path))}"
        )

    _print_summary(result, elapsed)
