"""CLI application using Typer for the medical discovery pipeline."""

import json
import sys
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from rich.table import Table

from ..config.settings import settings
from ..core.errors import SnapshotError
from ..detection.detector import medical_detector
from ..detection.noise import noise_matches
from ..discovery.models import SourceDocument
from ..discovery.pipeline import DiscoveryPipeline
from ..discovery.validator import compute_statistics, schema_validator
from ..io.snapshot import export_files_csv, load_snapshot, read_snapshot_data, save_snapshot
from ..utils.logging import get_logger

app = typer.Typer(
    name="mdp",
    help="Medical Discovery Pipeline - rule-based medical relevance detection",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

TEXT_SUFFIXES = (".txt", ".md")


def _read_text(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        console.print(f"[red]Error: file not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8", errors="replace")


@app.command()
def analyze(
    path: Path = typer.Argument(..., help="UTF-8 text file to analyze, or '-' for stdin"),
    json_output: bool = typer.Option(False, "--json", help="Print the analysis as JSON"),
):
    """Analyze a single text for medical relevance."""
    text = _read_text(path)
    result = medical_detector.analyze(text)
    if json_output:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2, sort_keys=True))
        return

    table = Table(title=f"Concept hits: {path}")
    table.add_column("Concept", style="cyan")
    table.add_column("Weighted hits", style="green", justify="right")
    table.add_column("Matched forms")
    for name, score in sorted(result.concept_hits.items(), key=lambda kv: kv[1], reverse=True):
        forms = medical_detector.matcher.matched_forms(text, name)
        table.add_row(name, f"{score:.2f}", ", ".join(forms))
    console.print(table)

    console.print(f"Document type: [bold]{result.doc_type.value}[/bold]")
    console.print(
        f"Citations: DOI={result.citations.has_doi} PMID={result.citations.has_pmid} "
        f"arXiv={result.citations.has_arxiv}"
    )
    if result.dates:
        console.print(f"Dates: {', '.join(sorted(result.dates))}")
    console.print(f"Signal: {result.signal:.2f}")
    console.print(f"Confidence: [bold]{result.confidence:.2f}[/bold]")
    if result.is_noise:
        console.print(f"[yellow]⚠ Noise phrases: {', '.join(noise_matches(text))}[/yellow]")


@app.command()
def profile(
    path: Path = typer.Argument(..., help="UTF-8 text file to profile, or '-' for stdin"),
    json_output: bool = typer.Option(False, "--json", help="Print the profile as JSON"),
):
    """Show the intent of a document and the entities it mentions."""
    text = _read_text(path)
    intent = medical_detector.classify_intent(text)
    entities = medical_detector.extract_entities(text)
    if json_output:
        typer.echo(json.dumps({"intent": intent.value, "entities": entities.model_dump()}, indent=2))
        return

    console.print(f"Intent: [bold]{intent.value}[/bold]")
    table = Table(title=f"Entities: {path}")
    table.add_column("Kind", style="cyan")
    table.add_column("Values")
    for kind, values in entities.model_dump().items():
        table.add_row(kind, ", ".join(values) or "-")
    console.print(table)


@app.command()
def discover(
    input_dir: Path = typer.Argument(..., help="Directory of extracted .txt/.md documents"),
    source: str = typer.Option(..., "--source", "-s", help="Source name recorded on every file"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="URL prefix used to build file_url"),
    min_confidence: float = typer.Option(settings.min_confidence, "--min-confidence", min=0.0, max=1.0),
    max_files: int = typer.Option(settings.max_files, "--max-files", min=1),
    snapshot_dir: Optional[Path] = typer.Option(None, "--snapshot-dir", "-o", help="Where to write the snapshot"),
):
    """Analyze a directory of documents and write a discovery snapshot."""
    if not input_dir.is_dir():
        console.print(f"[red]Error: not a directory: {input_dir}[/red]")
        raise typer.Exit(1)

    paths = sorted(p for p in input_dir.rglob("*") if p.is_file() and p.suffix.lower() in TEXT_SUFFIXES)
    console.print(f"[bold blue]Analyzing {len(paths)} documents from {input_dir}[/bold blue]")
    documents: List[SourceDocument] = []
    for p in paths:
        relative = p.relative_to(input_dir).as_posix()
        documents.append(
            SourceDocument(
                file_url=f"{base_url.rstrip('/')}/{relative}" if base_url else p.resolve().as_uri(),
                source=source,
                title=p.stem,
                text=p.read_text(encoding="utf-8", errors="replace"),
            )
        )

    pipeline = DiscoveryPipeline(min_confidence=min_confidence, max_files=max_files)
    run = pipeline.run(documents)
    path = save_snapshot(run.result, snapshot_dir)

    _print_statistics(run.result.statistics.model_dump(), title="Discovery Summary")
    console.print(f"[green]✓ {run.result.total_files_found}/{run.documents_seen} documents kept[/green]")
    if run.validation_errors:
        console.print(f"[yellow]⚠ {len(run.validation_errors)} validation errors[/yellow]")
    console.print(f"Snapshot saved to: {path}")


@app.command()
def validate(
    snapshot: Path = typer.Argument(..., help="Discovery snapshot JSON file"),
    show_warnings: bool = typer.Option(True, "--warnings/--no-warnings", help="List warnings"),
):
    """Validate a discovery snapshot against the record schema."""
    try:
        data = read_snapshot_data(snapshot)
    except SnapshotError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)

    result = schema_validator.validate_discovery_result(data)
    for error in result.errors:
        console.print(f"[red]✗ {error.path}: {error.message}[/red]")
    if show_warnings:
        for warning in result.warnings:
            console.print(f"[yellow]⚠ {warning.path}: {warning.message}[/yellow] ({warning.suggestion})")

    console.print(f"Errors: {len(result.errors)}  Warnings: {len(result.warnings)}")
    if not result.valid:
        console.print("[bold red]✗ Snapshot invalid[/bold red]")
        raise typer.Exit(1)
    console.print("[bold green]✓ Snapshot valid[/bold green]")


@app.command()
def stats(
    snapshot: Path = typer.Argument(..., help="Discovery snapshot JSON file"),
):
    """Recompute statistics for a discovery snapshot."""
    try:
        result = load_snapshot(snapshot)
    except SnapshotError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)
    _print_statistics(compute_statistics(result.files).model_dump(), title=f"Statistics: {snapshot.name}")


@app.command()
def export(
    snapshot: Path = typer.Argument(..., help="Discovery snapshot JSON file"),
    output_file: Path = typer.Argument(..., help="CSV file to write"),
):
    """Export snapshot files to CSV."""
    try:
        result = load_snapshot(snapshot)
    except SnapshotError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)
    export_files_csv(result, output_file)
    console.print(f"[green]✓ Exported {len(result.files)} files to {output_file}[/green]")


def _print_statistics(statistics: dict, title: str) -> None:
    for key, label in (("by_source", "Source"), ("by_concept", "Concept"), ("by_doc_type", "Doc type")):
        counts = statistics.get(key) or {}
        if not counts:
            continue
        table = Table(title=f"{title} - by {label.lower()}")
        table.add_column(label, style="cyan")
        table.add_column("Files", style="green", justify="right")
        for name, count in sorted(counts.items(), key=lambda kv: kv[1], reverse=True):
            table.add_row(str(name), str(count))
        console.print(table)
    console.print(f"Average confidence: {statistics.get('avg_confidence', 0.0):.2f}")
    console.print(f"Cited files: {statistics.get('cited_files', 0)}")


if __name__ == "__main__":
    app()
