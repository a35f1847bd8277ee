# topmark:header:start
#
#   project      : Coroline
#   file         : constants.py
#   file_relpath : src/coroline/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroline Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

COROLINE_VERSION: str = get_version("coroline")

# Configuration sources, in increasing order of precedence
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
COROLINE_TOML_NAME: Final[str] = "coroline.toml"

# Environment overrides
ENV_LOG_LEVEL: Final[str] = "COROLINE_LOG_LEVEL"
ENV_DEBUG: Final[str] = "COROLINE_DEBUG"
ENV_TASK_QUEUE: Final[str] = "COROLINE_TASK_QUEUE"
ENV_MAX_CONCURRENCY: Final[str] = "COROLINE_MAX_CONCURRENCY"
ENV_TRACE: Final[str] = "COROLINE_TRACE"
