"""Print the field documentation of a declared blueprint."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from blueprint.cli.utils import print_output, resolve_type

console = Console()


def docs(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Blueprint class as 'module:Class'")],
) -> None:
    """Print one line per schema field: name, type tag and doc string.

    Examples
    --------
    blueprint docs myapp.settings:ServerSettings
    blueprint --json docs myapp.settings:ServerSettings
    """
    cls = resolve_type(target)
    schema = getattr(cls, "__blueprint_schema__", None)
    if schema is None:
        console.print(f"[red]✗[/red] {target} is not a declared blueprint")
        raise typer.Exit(1)

    validator = cls.__blueprint_validator__  # type: ignore[attr-defined]
    output_format = (ctx.obj or {}).get("output_format", "pretty")
    if output_format == "pretty":
        typer.echo(validator.docs(schema), nl=False)
        return

    print_output(
        {
            "type": target,
            "validator": validator.name,
            "fields": [
                {
                    "name": name,
                    "type": spec.get("type", "any"),
                    "required": bool(spec.get("required")),
                    "default": spec.get("default"),
                    "doc": spec.get("doc"),
                }
                for name, spec in validator.fields(schema)
            ],
        },
        output_format,
    )
