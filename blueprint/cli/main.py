"""Blueprint CLI - main entrypoint."""

from __future__ import annotations

import typer
from rich.console import Console

from blueprint.cli.commands import check_cmd, docs_cmd
from blueprint.cli.utils import print_output
from blueprint.config import load_config
from blueprint.logging import configure_logging
from blueprint.options import get_validator

app = typer.Typer(
    name="blueprint",
    help="Inspect blueprint schemas and check configuration files against them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command("docs", help="Print the field documentation of a blueprint")(docs_cmd.docs)
app.command("check", help="Build a blueprint from a YAML file")(check_cmd.check)


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_out: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
    yaml_out: bool = typer.Option(False, "--yaml", help="Output machine-readable YAML"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warning|error"
    ),
) -> None:
    """Blueprint CLI. Global flags are stored on ``ctx.obj`` for subcommands."""
    if ctx.obj is None:
        ctx.obj = {}

    output_format = "pretty"
    if json_out:
        output_format = "json"
    elif yaml_out:
        output_format = "yaml"
    ctx.obj["output_format"] = output_format

    logging_config = load_config().logging
    configure_logging(
        level=(log_level or logging_config.level).upper(),  # type: ignore[arg-type]
        format=logging_config.format,  # type: ignore[arg-type]
        output_file=logging_config.output_file,
    )


@app.command("info")
def info(ctx: typer.Context) -> None:
    """Show which schema validator is active."""
    config = load_config()
    payload = {"validator": get_validator().name, "configured": config.validator}
    if ctx.obj and ctx.obj.get("output_format") in ("json", "yaml"):
        print_output(payload, ctx.obj["output_format"])
        return
    console.print(
        f"Active validator: [bold green]{payload['validator']}[/bold green] "
        f"(configured: {payload['configured']})"
    )


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
