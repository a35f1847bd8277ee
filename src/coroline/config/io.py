# topmark:header:start
#
#   project      : Coroline
#   file         : io.py
#   file_relpath : src/coroline/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and value getters for the engine configuration.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
Getters are lenient: a missing key yields ``None`` and a value of the wrong
shape is logged and ignored rather than aborting configuration loading.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from coroline.config.keys import Toml
from coroline.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from coroline.config.logging import CorolineLogger

TomlTable = dict[str, Any]

logger: CorolineLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_pyproject_table(data: TomlTable) -> TomlTable | None:
    """Return the ``[tool.coroline]`` table of a parsed pyproject, or None."""
    tool = data.get(Toml.SECTION_TOOL)
    if not isinstance(tool, dict):
        return None
    table = cast("dict[str, Any]", tool).get(Toml.SECTION_COROLINE)
    return cast("TomlTable", table) if isinstance(table, dict) else None


def to_toml(data: TomlTable) -> str:
    """Render a plain dict as a TOML document."""
    return tomlkit.dumps(data)


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean, coercing integers; None when absent or invalid."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    logger.warning("Expected bool for '%s', got %s: %r", key, type(value).__name__, value)
    return None


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Extract an optional integer; None when absent or invalid."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Expected int for '%s', got %s: %r", key, type(value).__name__, value)
    return None


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string; None when absent or invalid."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Expected string for '%s', got %s: %r", key, type(value).__name__, value)
    return None
