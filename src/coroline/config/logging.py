# topmark:header:start
#
#   project      : Coroline
#   file         : logging.py
#   file_relpath : src/coroline/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroline logging with a TRACE level and fiber-aware records.

Fiber transfers happen far too often to be logged at DEBUG, so this module adds
a TRACE level below DEBUG and a logger class exposing ``trace()``.

Every record emitted through the handler installed by
[`setup_logging`][coroline.config.logging.setup_logging] carries a ``fiber``
attribute naming the greenlet that was running when the record was created
(``main`` outside any fiber). At DEBUG and below it is part of the output,
which makes interleaved coroutine logs readable.

Logs go to stderr so they never mix with command output on stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any, Final, cast

from greenlet import getcurrent
from yachalk import chalk

from coroline.constants import ENV_LOG_LEVEL

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

logging.addLevelName(TRACE_LEVEL, "TRACE")


class CorolineLogger(logging.Logger):
    """Logger class with a ``trace()`` method for the TRACE level."""

    def trace(self, msg: object, *args: object, **kwargs: Any) -> None:
        """Log ``msg % args`` at TRACE level; keyword arguments as for ``debug()``."""
        if self.isEnabledFor(TRACE_LEVEL):
            kwargs.setdefault("stacklevel", 2)
            self._log(TRACE_LEVEL, msg, args, **kwargs)


logging.setLoggerClass(CorolineLogger)


LOG_FORMAT: Final[str] = "%(levelname)-7s %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "%(levelname)-7s [%(fiber)s] %(name)s:%(lineno)d %(message)s"

# Handlers installed by setup_logging() carry this name so a later call
# replaces them without touching handlers owned by the host application.
HANDLER_NAME: Final[str] = "coroline"


def describe_fiber() -> str:
    """Name the greenlet currently running: ``main`` or ``fiber@0x...``."""
    current = getcurrent()
    if current.parent is None:
        return "main"
    return f"fiber@{id(current):#x}"


class FiberFilter(logging.Filter):
    """Stamp each record with the running fiber (see `describe_fiber`)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "fiber"):
            record.fiber = describe_fiber()
        return True


# Lowest level first; a record takes the style of the highest threshold it reaches.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (TRACE_LEVEL, chalk.blue),
    (logging.DEBUG, chalk.gray),
    (logging.INFO, chalk.green),
    (logging.WARNING, chalk.yellow),
    (logging.ERROR, chalk.red),
    (logging.CRITICAL, chalk.red_bright),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors log records by severity."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then color the whole line by its level.

        Args:
            record (logging.LogRecord): The record to format.

        Returns:
            str: The colored line.
        """
        if not hasattr(record, "fiber"):
            record.fiber = describe_fiber()
        message = super().format(record)
        style: Callable[[str], str] = chalk.dim
        for threshold, candidate in _LEVEL_STYLES:
            if record.levelno >= threshold:
                style = candidate
        return style(message)


_LEVEL_NAMES: Final[dict[str, int]] = {
    name: getattr(logging, name)
    for name in ("NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}
_LEVEL_NAMES.update(TRACE=TRACE_LEVEL, WARN=logging.WARNING, FATAL=logging.CRITICAL)


def resolve_env_log_level(environ: Mapping[str, str] | None = None) -> int | None:
    """Read the log level from ``COROLINE_LOG_LEVEL``.

    Accepts a level name (``TRACE``, ``debug``, ``warn``...) or a number.

    Args:
        environ (Mapping[str, str] | None): Environment to read; defaults to
            ``os.environ``.

    Returns:
        int | None: The level, or None when unset or not recognized.
    """
    raw = (os.environ if environ is None else environ).get(ENV_LOG_LEVEL, "")
    token = raw.strip().upper()
    if token.isdigit():
        return int(token)
    return _LEVEL_NAMES.get(token)


def setup_logging(level: int | None = None) -> None:
    """Install a colored stderr handler on the root logger.

    With ``level`` None the environment decides (see
    [`resolve_env_log_level`][coroline.config.logging.resolve_env_log_level]),
    falling back to CRITICAL so a library user sees nothing by default.
    Calling it again replaces the handler installed by the previous call.
    """
    if level is None:
        level = resolve_env_log_level()
    if level is None:
        level = logging.CRITICAL

    root = logging.getLogger()
    root.setLevel(level)
    for old in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.addFilter(FiberFilter())
    handler.setFormatter(ChalkFormatter(DEBUG_LOG_FORMAT if level < logging.INFO else LOG_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> CorolineLogger:
    """Return the `CorolineLogger` called ``name``."""
    return cast("CorolineLogger", logging.getLogger(name))
