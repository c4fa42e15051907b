"""CLI helper utilities for blueprint commands."""

from __future__ import annotations

import importlib
import json
from typing import Any

import typer
import yaml
from rich.console import Console

console = Console()


def resolve_type(path: str) -> type:
    """Import a class from ``package.module:Class`` or ``package.module.Class``.

    Raises
    ------
    typer.BadParameter
        If the module cannot be imported or the attribute is not a class
    """
    module_name, sep, attribute = path.partition(":")
    if not sep:
        module_name, _, attribute = path.rpartition(".")
    if not module_name or not attribute:
        raise typer.BadParameter(f"Expected 'module:Class', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import module {module_name!r}: {e}") from e

    target = module
    for part in attribute.split("."):
        target = getattr(target, part, None)
        if target is None:
            raise typer.BadParameter(f"{module_name!r} has no attribute {attribute!r}")
    if not isinstance(target, type):
        raise typer.BadParameter(f"{path!r} is not a class")
    return target


def print_output(obj: Any, output_format: str = "pretty") -> None:
    """Print ``obj`` as JSON, YAML or via rich."""
    if output_format == "json":
        typer.echo(json.dumps(obj, default=str, indent=2))
    elif output_format == "yaml":
        typer.echo(yaml.safe_dump(obj, sort_keys=False))
    elif isinstance(obj, (str, int, float)):
        typer.echo(str(obj))
    else:
        console.print(obj)
