"""Command line interface for blueprint."""

from blueprint.cli.main import app, main

__all__ = ["app", "main"]
