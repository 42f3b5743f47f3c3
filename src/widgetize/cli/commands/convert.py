"""Recognize and export command implementations."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape

from widgetize.cli.commands.render import component_tree
from widgetize.core.dom.capture import load_snapshot
from widgetize.core.export.base import ExportError
from widgetize.core.service import ConversionService

if TYPE_CHECKING:
    from pathlib import Path

    from widgetize.core.dom.models import DOMSnapshot
    from widgetize.core.models.config import Config

console = Console()


def _load(path: Path) -> DOMSnapshot:
    if not path.exists():
        console.print(f"[red]Snapshot file not found: {escape(str(path))}[/red]")
        raise typer.Exit(1)
    try:
        return load_snapshot(path)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Invalid snapshot {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e


def run_recognize(config: Config, snapshot_file: Path, json_output: bool = False) -> None:
    """Run the recognize command."""
    snapshot = _load(snapshot_file)
    result = ConversionService(config).recognize(snapshot)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    console.print(component_tree(result, title=snapshot.title or snapshot.url or str(snapshot_file)))
    console.print()
    console.print(
        f"[bold]{len(result.components)}[/bold] components from "
        f"[bold]{result.nodes_visited}[/bold] nodes in {result.duration_ms:.1f}ms"
    )
    if result.partial:
        console.print(f"[yellow]Partial: {len(result.accessor_faults)} subtrees could not be read[/yellow]")
    if result.truncated:
        console.print("[yellow]Truncated: depth or node limit reached[/yellow]")
    if result.predicate_faults:
        console.print(f"[yellow]{len(result.predicate_faults)} pattern predicates failed[/yellow]")


def run_export(
    config: Config,
    snapshot_file: Path,
    output: Path | None = None,
    title: str | None = None,
) -> None:
    """Run the export command."""
    snapshot = _load(snapshot_file)
    try:
        result = ConversionService(config).convert(snapshot, title=title)
    except ExportError as e:
        console.print(f"[red]Export failed: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    text = json.dumps(result.document, indent=2)
    if output is None:
        typer.echo(text)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(
        f"[green]Exported {result.stats.widgets} widgets in "
        f"{result.stats.sections} sections to {escape(str(output))}[/green]"
    )
    if result.partial:
        console.print("[yellow]Some subtrees could not be read; the export is partial[/yellow]")
