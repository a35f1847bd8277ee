# topmark:header:start
#
#   project      : Coroline
#   file         : options.py
#   file_relpath : src/coroline/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared Click options and their resolution helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import click

from coroline.cli.errors import CorolineUsageError
from coroline.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from collections.abc import Callable

F = TypeVar("F", bound="Callable[..., object]")


class OutputFormat(KeyedStrEnum):
    """Machine or human output format for commands that print data."""

    TOML = ("toml", "TOML document", ())
    JSON = ("json", "JSON object", ())


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity level.

    Args:
        verbose_count (int): Number of ``-v`` flags.
        quiet_count (int): Number of ``-q`` flags.

    Returns:
        int: ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        CorolineUsageError: If both verbose and quiet flags are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CorolineUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return verbose_count
    return -quiet_count


def common_verbose_options(f: F) -> F:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options to a command."""
    f = click.option(
        "--verbose",
        "-v",
        "verbose",
        count=True,
        help="Increase program output verbosity (repeatable).",
    )(f)
    f = click.option(
        "--quiet",
        "-q",
        "quiet",
        count=True,
        help="Decrease program output (repeatable).",
    )(f)
    return f
