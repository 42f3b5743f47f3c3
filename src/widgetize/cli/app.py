"""Main CLI application."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from widgetize import __version__
from widgetize.core.log import configure_logging
from widgetize.core.models.config import Config

# Create main app
app = typer.Typer(
    name="widgetize",
    help="Recognize page components and export Elementor widgets",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def load_config(path: Path | None) -> Config:
    """Load configuration from a YAML file, or defaults."""
    if path is None:
        return Config()
    try:
        return Config.from_yaml(path)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        fail(f"Invalid config {path}: {e}")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Widgetize[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file path"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Override log level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
) -> None:
    """Widgetize - semantic component recognition for rendered web pages."""
    cfg = load_config(config)
    if log_level:
        level = log_level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            fail(f"Unknown log level: {log_level}")
        cfg.logs.level = level
    configure_logging(cfg.logs)
    ctx.obj = cfg


@app.command()
def recognize(
    ctx: typer.Context,
    snapshot: Annotated[
        Path,
        typer.Argument(help="Snapshot JSON file"),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the component tree as JSON"),
    ] = False,
) -> None:
    """Recognize components in a captured page."""
    from widgetize.cli.commands.convert import run_recognize

    run_recognize(ctx.obj, snapshot, json_output=json_output)


@app.command()
def export(
    ctx: typer.Context,
    snapshot: Annotated[
        Path,
        typer.Argument(help="Snapshot JSON file"),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file; stdout when omitted"),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Page title"),
    ] = None,
) -> None:
    """Export a captured page as an Elementor document."""
    from widgetize.cli.commands.convert import run_export

    run_export(ctx.obj, snapshot, output=output, title=title)


@app.command()
def patterns(
    ctx: typer.Context,
    type_name: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Only show patterns for this component type"),
    ] = None,
) -> None:
    """List the recognition pattern catalogue."""
    from widgetize.cli.commands.render import pattern_table
    from widgetize.core.recognition.registry import UnknownComponentTypeError
    from widgetize.core.service import ConversionService

    registry = ConversionService(ctx.obj).registry
    if type_name:
        try:
            selected = registry.all_patterns_for(registry.resolve_type(type_name))
        except UnknownComponentTypeError:
            fail(f"Unknown component type: {type_name}")
    else:
        selected = registry.all_patterns()

    console.print(pattern_table(selected))
    console.print(f"\n[bold]{len(selected)}[/bold] patterns")


@app.command()
def config(
    ctx: typer.Context,
    action: Annotated[
        str,
        typer.Argument(help="Action: show, validate, init"),
    ],
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Config file"),
    ] = None,
) -> None:
    """Manage configuration."""
    if action == "show":
        cfg = load_config(file) if file else ctx.obj

        console.print("[bold]Current Configuration:[/bold]")
        console.print_json(data=cfg.to_dict())

    elif action == "validate":
        if not file:
            fail("validate needs --file")
        load_config(file)
        console.print(f"[green]Config file {file} is valid![/green]")

    elif action == "init":
        output_path = file or Path("./config/widgetize.yaml")
        Config().to_yaml(output_path)
        console.print(f"[green]Config initialized at {output_path}[/green]")

    else:
        fail(f"Unknown action: {action}. Available actions: show, validate, init")


def main() -> None:
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
