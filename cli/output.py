"""Rendering of schema snapshots for the CLI."""

import sys
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax

from snapshot.models import SchemaSnapshot

OUTPUT_FORMATS = ("json", "yaml")

console = Console()


def render_snapshot(snapshot: SchemaSnapshot, output_format: str = "json", pretty: bool = False) -> str:
    """Serialise a snapshot in the requested format.

    Keys use the snapshot's aliases (``schema`` rather than ``schema_name``) and
    keep the model's field order, so the output is stable across runs.

    Args:
        snapshot: Snapshot to render
        output_format: ``json`` or ``yaml``
        pretty: Indent JSON output (YAML is always block style)

    Returns:
        Rendered text ending without a trailing newline

    Raises:
        ValueError: If the format is not one of OUTPUT_FORMATS
    """
    match output_format:
        case "json":
            return snapshot.model_dump_json(by_alias=True, indent=2 if pretty else None)
        case "yaml":
            data = snapshot.model_dump(mode="json", by_alias=True)
            return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False).rstrip("\n")
        case _:
            raise ValueError(f"Unknown output format: {output_format} (expected one of {', '.join(OUTPUT_FORMATS)})")


def output_snapshot(
    snapshot: SchemaSnapshot,
    output_path: Path | None = None,
    output_format: str = "json",
    pretty: bool = False,
) -> None:
    """Write a snapshot to a file or stdout.

    Piped stdout gets the rendered text unchanged so code generators can parse
    it. Only an interactive terminal gets syntax highlighting.
    """
    try:
        output_str = render_snapshot(snapshot, output_format=output_format, pretty=pretty)
    except ValueError as e:
        error_message(str(e))
        raise typer.Exit(1) from e

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output_str + "\n", encoding="utf-8")
        typer.secho(f"✓ Snapshot of {len(snapshot.tables)} tables written to {output_path}", fg=typer.colors.GREEN)
    elif sys.stdout.isatty():
        console.print(Syntax(output_str, output_format, theme="monokai", line_numbers=False), soft_wrap=True)
    else:
        typer.echo(output_str)


def error_message(message: str, hint: str | None = None) -> None:
    """Print error message.

    Args:
        message: Error message
        hint: Optional hint for user
    """
    typer.secho(f"✗ Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.secho(f"  Hint: {hint}", fg=typer.colors.YELLOW, err=True)
