# topmark:header:start
#
#   project      : Coroline
#   file         : errors.py
#   file_relpath : src/coroline/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes and exceptions for the Coroline CLI.

Exit codes follow the BSD ``sysexits`` convention where practical so that
other tooling can interpret failures consistently.
"""

from __future__ import annotations

from enum import IntEnum

import click


class ExitCode(IntEnum):
    """Standardized exit codes.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure.
        USAGE_ERROR: Invalid flags or arguments. Mirrors BSD ``EX_USAGE (64)``.
        CONFIG_ERROR: Invalid engine configuration. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 64  # EX_USAGE
    CONFIG_ERROR = 78  # EX_CONFIG


class CorolineCliError(click.ClickException):
    """Base class for all Coroline CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the error message, in bright red when colour is enabled."""
        return click.style(str(self.message), fg="bright_red")


class CorolineUsageError(CorolineCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class CorolineConfigError(CorolineCliError):
    """Error for invalid engine configuration (bad value in a file or the environment)."""

    exit_code = ExitCode.CONFIG_ERROR
