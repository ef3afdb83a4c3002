"""CLI for note-synth: process / ingest / export / templates commands."""

from __future__ import annotations

import asyncio
import mimetypes
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from note_synth.core.config import AppSettings, ObservabilityConfig
from note_synth.core.logging_config import setup_logging
from note_synth.core.startup_checks import validate_settings
from note_synth.models import ExportFailure, ExportFormat, PlainTextContent, UploadedDocument, UseCase
from note_synth.services.document_ingestor import DocumentIngestor, append_to_input
from note_synth.services.result_serializer import ResultSerializer
from note_synth.services.submission_service import SubmissionService

app = typer.Typer(name="note-synth", help="Route clinical text to configured assistants")
console = Console()


def _build_settings(endpoint: Optional[str], api_key: Optional[str]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    if endpoint:
        settings.assistants.endpoint = endpoint
    if api_key:
        settings.assistants.api_key = api_key
    return settings


def _configure_logging(verbose: bool) -> None:
    setup_logging(ObservabilityConfig(log_level="DEBUG" if verbose else "WARNING"))


def _load_upload(path: Path) -> UploadedDocument:
    content_type, _ = mimetypes.guess_type(path.name)
    return UploadedDocument(filename=path.name, data=path.read_bytes(), content_type=content_type or "")


@app.command()
def process(
    input_file: Optional[Path] = typer.Argument(None, help="Text or .docx file; stdin when omitted"),
    use_case: UseCase = typer.Option(UseCase.DISCHARGE, "--use-case", "-u", help="Use case to route to"),
    assistant_id: Optional[str] = typer.Option(None, "--assistant", help="Assistant for template use cases"),
    export_format: Optional[ExportFormat] = typer.Option(None, "--export", help="Also export the result"),
    output_dir: Path = typer.Option(Path("."), "--output-dir", help="Directory for exported files"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Assistant service endpoint"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Assistant service API key"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Process text with the assistant for a use case."""
    _configure_logging(verbose)
    settings = _build_settings(endpoint, api_key)
    try:
        validate_settings(settings)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2) from e

    if input_file is None:
        text = sys.stdin.read()
    else:
        content = DocumentIngestor(settings.ingestion).extract_text(_load_upload(input_file))
        if content.is_degraded:
            console.print(f"[yellow]{content.degraded_reason}[/yellow]")
        text = content.text

    if not text.strip():
        console.print("[red]Input is empty[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{use_case.heading}[/bold]")
    with console.status("Processing..."):
        result = asyncio.run(SubmissionService(settings).submit(text, use_case, assistant_id))

    if not result.ok:
        console.print(f"[red]{result.text}[/red]")
        raise typer.Exit(code=1)
    console.print(result.text)

    if export_format is not None:
        _write_export(ResultSerializer(settings.pdf), result.text, export_format, output_dir)


@app.command()
def ingest(
    path: Path = typer.Argument(..., help="File to convert"),
    output: Optional[Path] = typer.Option(None, help="Write the converted content here"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Convert a document the way the upload control does."""
    _configure_logging(verbose)
    content = DocumentIngestor(AppSettings().ingestion).ingest(_load_upload(path))

    if isinstance(content, PlainTextContent) and content.is_degraded:
        console.print(f"[yellow]Degraded: {content.degraded_reason}[/yellow]")
    elif not isinstance(content, PlainTextContent):
        for message in content.messages:
            console.print(f"[dim]{message}[/dim]")

    rendered = content.as_input_text()
    if output:
        output.write_text(rendered, encoding="utf-8")
        console.print(f"[green]{content.kind} content saved to {output}[/green]")
    else:
        console.print(rendered, markup=False)


@app.command()
def export(
    text_file: Path = typer.Argument(..., help="Result text file"),
    export_format: ExportFormat = typer.Option(ExportFormat.PDF, "--format", "-f"),
    output_dir: Path = typer.Option(Path("."), "--output-dir"),
    append: Optional[Path] = typer.Option(None, help="Append this upload's text before exporting"),
) -> None:
    """Export result text as txt, md, pdf or docx."""
    settings = AppSettings()
    text = text_file.read_text(encoding="utf-8")
    if append is not None:
        text = append_to_input(text, DocumentIngestor(settings.ingestion).extract_text(_load_upload(append)))
    _write_export(ResultSerializer(settings.pdf), text, export_format, output_dir)


@app.command()
def templates(
    endpoint: Optional[str] = typer.Option(None, "--endpoint"),
    api_key: Optional[str] = typer.Option(None, "--api-key"),
) -> None:
    """List template assistants available for the template use case."""
    settings = _build_settings(endpoint, api_key)
    found = asyncio.run(SubmissionService(settings).list_templates())
    if not found:
        console.print("[yellow]No templates available[/yellow]")
        return

    table = Table(title="Template assistants")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    for assistant in found:
        table.add_row(assistant.id, assistant.name or "")
    console.print(table)


def _write_export(serializer: ResultSerializer, text: str, fmt: ExportFormat, output_dir: Path) -> None:
    result = serializer.serialize(text, fmt)
    if isinstance(result, ExportFailure):
        console.print(f"[red]{result.reason}[/red]")
        raise typer.Exit(code=1)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / result.filename
    path.write_bytes(result.data)
    console.print(f"[green]Saved {path}[/green]")


if __name__ == "__main__":
    app()
