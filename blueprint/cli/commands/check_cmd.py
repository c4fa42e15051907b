"""Build a blueprint from a YAML file to check it against the schema."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.table import Table

from blueprint.builder import build
from blueprint.cli.utils import print_output, resolve_type
from blueprint.result import Err

console = Console()


def check(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Blueprint class as 'module:Class'")],
    yaml_file: Annotated[
        Path,
        typer.Argument(
            help="YAML file holding a mapping of field values",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
) -> None:
    """Build ``target`` from the mapping in ``yaml_file``.

    Exits with status 1 when the file is not a mapping or the values do not
    satisfy the schema.

    Examples
    --------
    blueprint check myapp.settings:ServerSettings settings.yaml
    """
    cls = resolve_type(target)

    try:
        with yaml_file.open() as f:
            values = yaml.safe_load(f)
    except yaml.YAMLError as e:
        console.print(f"[red]✗ YAML Syntax Error:[/red] {e}")
        raise typer.Exit(1) from e

    if values is None:
        values = {}
    if not isinstance(values, dict):
        console.print(f"[red]✗[/red] {yaml_file} must contain a mapping of field values")
        raise typer.Exit(1)

    result = build(cls, values)
    if isinstance(result, Err):
        reason = result.reason
        message = str(reason) if isinstance(reason, BaseException) else repr(reason)
        console.print(f"[red]✗ Unable to build {target}:[/red] {message}")
        raise typer.Exit(1)

    record = dataclasses.asdict(result.value)
    output_format = (ctx.obj or {}).get("output_format", "pretty")
    if output_format != "pretty":
        print_output(record, output_format)
        return

    console.print(f"[green]✓ {yaml_file} is a valid {target}[/green]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")
    for name, value in record.items():
        table.add_row(name, repr(value))
    console.print(table)
