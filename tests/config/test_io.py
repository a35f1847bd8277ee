# topmark:header:start
#
#   project      : Coroline
#   file         : test_io.py
#   file_relpath : tests/config/test_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for TOML loading and the lenient value getters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest

from coroline.config.io import (
    extract_pyproject_table,
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    load_toml_dict,
    to_toml,
)
from tests.conftest import parametrize

if TYPE_CHECKING:
    from pathlib import Path


def test_load_toml_dict_parses_plain_dicts(tmp_path: Path) -> None:
    path = tmp_path / "c.toml"
    path.write_text('a = 1\n[t]\nb = "x"\n', encoding="utf-8")

    data = load_toml_dict(path)
    assert data == {"a": 1, "t": {"b": "x"}}
    assert type(data["t"]) is dict


def test_missing_file_yields_empty_table(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        assert load_toml_dict(tmp_path / "absent.toml") == {}
    assert any("Error loading TOML" in r.getMessage() for r in caplog.records)


def test_malformed_file_yields_empty_table(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("a = = 1\n", encoding="utf-8")

    with caplog.at_level(logging.ERROR):
        assert load_toml_dict(path) == {}
    assert any("Error decoding TOML" in r.getMessage() for r in caplog.records)


@parametrize(
    "data, expected",
    [
        ({"tool": {"coroline": {"debug": True}}}, {"debug": True}),
        ({"tool": {"other": {}}}, None),
        ({"tool": "nope"}, None),
        ({}, None),
    ],
)
def test_extract_pyproject_table(data: dict[str, Any], expected: dict[str, Any] | None) -> None:
    assert extract_pyproject_table(data) == expected


@parametrize(
    "value, expected",
    [(True, True), (False, False), (1, True), (0, False), (None, None), ("true", None)],
)
def test_get_bool(value: Any, expected: bool | None) -> None:
    assert get_bool_value_or_none({"k": value}, "k") is expected


@parametrize("value, expected", [(3, 3), (True, None), ("3", None), (1.5, None)])
def test_get_int(value: Any, expected: int | None) -> None:
    assert get_int_value_or_none({"k": value}, "k") == expected


def test_get_string() -> None:
    assert get_string_value_or_none({"k": "v"}, "k") == "v"
    assert get_string_value_or_none({"k": 1}, "k") is None
    assert get_string_value_or_none({}, "k") is None


def test_to_toml_renders_scalars() -> None:
    text = to_toml({"debug": True, "task_queue": "local"})
    assert "debug = true" in text
    assert 'task_queue = "local"' in text
