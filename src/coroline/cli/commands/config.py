# topmark:header:start
#
#   project      : Coroline
#   file         : config.py
#   file_relpath : src/coroline/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroline `config` command.

Prints the effective engine configuration for a directory, after layering
``pyproject.toml``, ``coroline.toml`` and ``COROLINE_*`` environment variables
over the built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from coroline.cli.errors import CorolineConfigError
from coroline.cli.options import OutputFormat
from coroline.config.io import to_toml
from coroline.config.logging import get_logger
from coroline.config.model import describe, load_engine_config
from coroline.errors import ConfigError

if TYPE_CHECKING:
    from coroline.config.logging import CorolineLogger
    from coroline.config.model import EngineConfig

logger: CorolineLogger = get_logger(__name__)


@click.command(
    name="config",
    help="Show the effective engine configuration.",
)
@click.option(
    "--root",
    "root",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory to look for pyproject.toml and coroline.toml in (default: CWD).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OutputFormat.keys(), case_sensitive=False),
    default=OutputFormat.TOML.key,
    show_default=True,
    help="Output format.",
)
@click.pass_context
def config_command(ctx: click.Context, root: Path | None, output_format: str) -> None:
    """Show the effective engine configuration.

    Args:
        ctx (click.Context): Click context carrying the verbosity level.
        root (Path | None): Directory searched for configuration files.
        output_format (str): ``toml`` or ``json``.

    Raises:
        CorolineConfigError: If a configuration value is invalid.
    """
    ctx.ensure_object(dict)
    vlevel: int = ctx.obj.get("verbosity_level", 0)

    try:
        config: EngineConfig = load_engine_config(root)
    except ConfigError as exc:
        raise CorolineConfigError(str(exc)) from exc
    logger.debug("effective configuration: %r", config)

    fmt = OutputFormat.parse(output_format) or OutputFormat.TOML
    if fmt is OutputFormat.JSON:
        click.echo(json.dumps(describe(config), indent=2))
        return

    if vlevel > 0:
        if config.config_files:
            for path in config.config_files:
                click.echo(f"# source: {path}")
        else:
            click.echo("# source: built-in defaults")
    click.echo(to_toml(config.to_toml_dict()), nl=False)
