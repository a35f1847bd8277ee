# topmark:header:start
#
#   project      : Coroline
#   file         : keys.py
#   file_relpath : src/coroline/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for the engine configuration.

Keys defined here are external configuration API: renaming or removing one is
a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by `coroline.toml` and `[tool.coroline]`."""

    # pyproject.toml nesting
    SECTION_TOOL: Final[str] = "tool"
    SECTION_COROLINE: Final[str] = "coroline"

    # [tool.coroline] / coroline.toml top level
    KEY_DEBUG: Final[str] = "debug"
    KEY_TASK_QUEUE: Final[str] = "task_queue"
    KEY_MAX_CONCURRENCY: Final[str] = "max_concurrency"
    KEY_TRACE: Final[str] = "trace"
