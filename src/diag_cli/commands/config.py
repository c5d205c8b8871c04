"""``diag config``: inspect and change the grading defaults."""

from __future__ import annotations

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from diag_cli.config import DiagCLIConfig

console = Console()


@click.group()
def config() -> None:
    """Inspect and change the defaults used by ``diag grade``."""


@config.command("set")
@click.argument("key", type=click.Choice(sorted(DiagCLIConfig.model_fields)), metavar="KEY")
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set KEY to VALUE.

    Example:
        diag config set output_format json
        diag config set complete_missing false
    """
    try:
        updated = ctx.obj["config_manager"].set(key, value)
    except ValidationError as e:
        reason = e.errors()[0]["msg"]
        raise click.BadParameter(f"Invalid value {value!r} for {key}: {reason}", param_hint="VALUE") from e
    console.print(f"[green]✓[/green] {key} = {getattr(updated, key)}")


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the effective defaults."""
    current = ctx.obj["config_manager"].load()

    table = Table(title="diag grade defaults")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Meaning", style="dim")
    for key, field in DiagCLIConfig.model_fields.items():
        table.add_row(key, str(getattr(current, key)), field.description or "")

    console.print(table)
