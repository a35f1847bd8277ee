# topmark:header:start
#
#   project      : Coroline
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the engine configuration model and its layering.

Tests respect the immutable/mutable split: build with `MutableEngineConfig`,
then `freeze()`. To tweak a frozen `EngineConfig`, `thaw()` it first.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from coroline.config.model import (
    EngineConfig,
    MutableEngineConfig,
    describe,
    load_engine_config,
)
from coroline.errors import ConfigError
from coroline.scheduling.queue import TaskQueueKind
from tests.conftest import parametrize

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults(tmp_path: Path) -> None:
    config = load_engine_config(tmp_path, environ={})

    assert config == EngineConfig()
    assert config.debug is False
    assert config.task_queue is TaskQueueKind.LOCAL
    assert config.max_concurrency is None
    assert config.trace is False
    assert config.config_files == ()


def test_pyproject_table_is_read(tmp_path: Path) -> None:
    pyproject = _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "demo"\n\n[tool.coroline]\ndebug = true\nmax_concurrency = 4\n',
    )

    config = load_engine_config(tmp_path, environ={})
    assert config.debug is True
    assert config.max_concurrency == 4
    assert config.config_files == (pyproject,)


def test_pyproject_without_table_is_ignored(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')

    config = load_engine_config(tmp_path, environ={})
    assert config.config_files == ()


def test_coroline_toml_overrides_pyproject(tmp_path: Path) -> None:
    pyproject = _write(
        tmp_path / "pyproject.toml", '[tool.coroline]\ntask_queue = "asyncio"\ntrace = true\n'
    )
    own = _write(tmp_path / "coroline.toml", 'task_queue = "local"\n')

    config = load_engine_config(tmp_path, environ={})
    assert config.task_queue is TaskQueueKind.LOCAL
    assert config.trace is True
    assert config.config_files == (pyproject, own)


def test_environment_overrides_files(tmp_path: Path) -> None:
    _write(tmp_path / "coroline.toml", "debug = true\nmax_concurrency = 2\n")

    config = load_engine_config(
        tmp_path,
        environ={
            "COROLINE_DEBUG": "off",
            "COROLINE_MAX_CONCURRENCY": "8",
            "COROLINE_TASK_QUEUE": "aio",
            "COROLINE_TRACE": "Yes",
        },
    )
    assert config.debug is False
    assert config.max_concurrency == 8
    assert config.task_queue is TaskQueueKind.ASYNCIO
    assert config.trace is True


def test_load_defaults_to_cwd_and_process_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(tmp_path / "coroline.toml", "trace = true\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COROLINE_DEBUG", "1")

    config = load_engine_config()
    assert config.trace is True
    assert config.debug is True


@parametrize(
    "environ",
    [
        {"COROLINE_DEBUG": "maybe"},
        {"COROLINE_MAX_CONCURRENCY": "many"},
    ],
)
def test_malformed_environment_values_are_ignored(
    tmp_path: Path, environ: dict[str, str], caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        config = load_engine_config(tmp_path, environ=environ)

    assert config == EngineConfig()
    assert any("Ignoring" in r.getMessage() for r in caplog.records)


def test_unknown_task_queue_is_a_config_error(tmp_path: Path) -> None:
    _write(tmp_path / "coroline.toml", 'task_queue = "threads"\n')

    with pytest.raises(ConfigError, match="threads"):
        load_engine_config(tmp_path, environ={})


@parametrize("value", [0, -1])
def test_max_concurrency_must_be_positive(value: int) -> None:
    draft = MutableEngineConfig.from_defaults()
    draft.max_concurrency = value

    with pytest.raises(ConfigError, match="max_concurrency"):
        draft.freeze()


def test_wrongly_typed_and_unknown_keys_are_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    _write(tmp_path / "coroline.toml", 'debug = "yes"\nmax_concurrency = "2"\nflavour = 1\n')

    with caplog.at_level(logging.WARNING):
        config = load_engine_config(tmp_path, environ={})

    assert config.debug is False
    assert config.max_concurrency is None
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "flavour" in messages
    assert "Expected bool" in messages
    assert "Expected int" in messages


def test_merge_only_overrides_set_fields() -> None:
    base = MutableEngineConfig(debug=True, max_concurrency=3)
    layer = MutableEngineConfig(trace=True)

    merged = base.merge_with(layer)
    assert merged is base
    assert merged.debug is True
    assert merged.max_concurrency == 3
    assert merged.trace is True


def test_apply_env_layers_in_place() -> None:
    draft = MutableEngineConfig.from_defaults()
    assert draft.apply_env({"COROLINE_TRACE": "true"}) is draft
    assert draft.trace is True


def test_thaw_freeze_round_trip() -> None:
    config = EngineConfig(debug=True, task_queue=TaskQueueKind.ASYNCIO, max_concurrency=5)
    draft = config.thaw()
    assert draft.freeze() == config

    draft.trace = True
    assert draft.freeze().trace is True
    assert config.trace is False


def test_to_toml_dict_omits_unset_limit() -> None:
    assert EngineConfig().to_toml_dict() == {
        "debug": False,
        "task_queue": "local",
        "trace": False,
    }
    assert EngineConfig(max_concurrency=2).to_toml_dict()["max_concurrency"] == 2


def test_describe_lists_sources(tmp_path: Path) -> None:
    own = _write(tmp_path / "coroline.toml", "debug = true\n")
    view = describe(load_engine_config(tmp_path, environ={}))

    assert view["debug"] is True
    assert view["max_concurrency"] is None
    assert view["config_files"] == [str(own)]
