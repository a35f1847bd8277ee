# topmark:header:start
#
#   project      : Coroline
#   file         : main.py
#   file_relpath : src/coroline/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point for the ``coroline`` command.

Group-level options are resolved once and placed into ``ctx.obj``:

- ``verbosity_level``: program-output verbosity from ``-v``/``-q``;
- ``log_level``: internal logging level from ``COROLINE_LOG_LEVEL``.
"""

from __future__ import annotations

import click

from coroline.cli.commands.config import config_command
from coroline.cli.commands.version import version_command
from coroline.cli.options import common_verbose_options, resolve_verbosity
from coroline.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int) -> None:
    """Initialize shared verbosity and logging state on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` is populated.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
    """
    ctx.obj = ctx.obj or {}
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)
    logger.debug(
        "verbosity level: %d, log level: %s", ctx.obj["verbosity_level"], level_env
    )


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Coroline CLI",
)
@common_verbose_options
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int) -> None:
    """Entry point for the Coroline CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet)

    if ctx.invoked_subcommand is None:
        click.echo("Hint: use 'coroline config' to show the effective engine configuration.")
        click.echo()
        click.echo(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

if __name__ == "__main__":
    cli()
