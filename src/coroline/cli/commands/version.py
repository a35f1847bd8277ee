# topmark:header:start
#
#   project      : Coroline
#   file         : version.py
#   file_relpath : src/coroline/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroline `version` command.

Prints the Coroline version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from coroline.constants import COROLINE_VERSION


@click.command(
    name="version",
    help="Show the current version of Coroline.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the current version of Coroline."""
    ctx.ensure_object(dict)
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    if vlevel > 0:
        click.echo(click.style("Coroline version:\n", bold=True, underline=True))
        click.echo(f"    {click.style(COROLINE_VERSION, bold=True)}")
    else:
        click.echo(COROLINE_VERSION)
