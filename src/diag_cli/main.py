"""Diagnostics CLI main entry point."""

from __future__ import annotations

import logging

import click

from diag_cli.commands import config as config_cmd
from diag_cli.commands import grading as grading_cmd
from diag_cli.config import ConfigManager


@click.group()
@click.version_option(version="0.1.0", prog_name="diag")
@click.option("-v", "--verbose", is_flag=True, help="Log grading details to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """EU AI Act diagnostics command-line interface.

    Grade findings files, print remediation roadmaps and browse the obligation catalogue.
    """
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    ctx.ensure_object(dict)
    ctx.obj.setdefault("config_manager", ConfigManager())


cli.add_command(config_cmd.config)
cli.add_command(grading_cmd.grade)
cli.add_command(grading_cmd.remediation)
cli.add_command(grading_cmd.obligations)


if __name__ == "__main__":
    cli()
