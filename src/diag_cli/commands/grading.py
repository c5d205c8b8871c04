"""Grading commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from diag_core.exceptions import DiagError
from diag_core.grading import GradingEngine, normalize_status
from diag_core.models import Finding
from diag_core.obligations import list_obligations, obligation_ids
from diag_core.remediation import build_remediation_plan, grade_band

console = Console()

_BAND_STYLES = {"strong": "green", "moderate": "yellow", "weak": "red"}


def _load_findings(path: Path) -> list[dict[str, Any]]:
    """Read findings from a JSON file: a list, or an object with a ``findings`` list."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("findings", [])
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a list of findings")
    return data


@click.command("grade")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), help="Output format")
@click.option(
    "--complete-missing/--no-complete-missing",
    default=None,
    help="Grade catalogue obligations without a finding as not started",
)
@click.pass_context
def grade(ctx: click.Context, path: Path, output_format: str | None, complete_missing: bool | None) -> None:
    """Grade the findings in a JSON file.

    Example:
        diag grade findings.json --format json
    """
    config = ctx.obj["config_manager"].load()
    output_format = output_format or config.output_format
    if complete_missing is None:
        complete_missing = config.complete_missing

    engine = GradingEngine(reject_duplicates=config.reject_duplicates)
    try:
        result = engine.evaluate(
            _load_findings(path),
            expected_obligations=obligation_ids() if complete_missing else None,
        )
    except DiagError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        click.echo(result.model_dump_json(indent=2))
        return

    style = _BAND_STYLES[grade_band(result.grade)]
    console.print(f"Grade: [bold {style}]{result.grade}[/bold {style}]")
    console.print(f"Score: {result.points}/{result.max_points} ({result.percentage:.1%})")
    if result.capped:
        console.print(f"Percentage grade {result.base_grade} capped by overrides")

    table = Table(title="Status counts")
    table.add_column("Status", style="cyan")
    table.add_column("Count", justify="right")
    for key, value in result.tally.model_dump(exclude={"human_oversight_status"}).items():
        table.add_row(key, str(value))
    console.print(table)

    for override in result.overrides:
        console.print(f"[yellow]![/yellow] {override.description}")


@click.command("remediation")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def remediation(path: Path) -> None:
    """Print the prioritised remediation roadmap for a findings file.

    Example:
        diag remediation findings.json
    """
    findings: list[Finding] = []
    try:
        for item in _load_findings(path):
            if not isinstance(item, dict):
                raise click.ClickException(f"Finding entries must be objects, got {item!r}")
            raw_status = item["status"] if "status" in item else item.get("score")
            status = normalize_status(raw_status, item.get("obligation_id"))
            findings.append(Finding(**{**item, "status": status}))
    except (DiagError, PydanticValidationError) as e:
        raise click.ClickException(str(e)) from e

    plan = build_remediation_plan(findings)
    if not plan:
        console.print("[green]No remediation required[/green]")
        return

    table = Table(title="Remediation roadmap")
    table.add_column("Priority", style="bold")
    table.add_column("Obligation", style="cyan")
    table.add_column("Status")
    table.add_column("Target")
    table.add_column("Action")
    for item in plan:
        table.add_row(item.priority, item.obligation_name, item.status, item.target, item.action or "—")
    console.print(table)


@click.command("obligations")
def obligations() -> None:
    """List the obligation catalogue."""
    table = Table(title="EU AI Act obligations")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Article")
    for ob in list_obligations():
        table.add_row(ob.id, ob.name, ob.article_ref)
    console.print(table)
