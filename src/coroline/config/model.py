# topmark:header:start
#
#   project      : Coroline
#   file         : model.py
#   file_relpath : src/coroline/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Engine configuration model and merge policy.

This module defines:
    - `EngineConfig`: an immutable snapshot a pipeline is built from.
    - `MutableEngineConfig`: a mutable builder used while layering sources; it
      can be frozen into `EngineConfig` and thawed back for edits.

Layering (lowest to highest precedence):
    1. built-in defaults;
    2. ``[tool.coroline]`` in ``pyproject.toml``;
    3. ``coroline.toml`` (keys at top level);
    4. ``COROLINE_*`` environment variables.

In the mutable builder ``None`` means "inherit"; `MutableEngineConfig.merge_with`
only overrides fields the other layer actually sets.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from coroline.config.io import (
    extract_pyproject_table,
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    load_toml_dict,
)
from coroline.config.keys import Toml
from coroline.config.logging import get_logger
from coroline.constants import (
    COROLINE_TOML_NAME,
    ENV_DEBUG,
    ENV_MAX_CONCURRENCY,
    ENV_TASK_QUEUE,
    ENV_TRACE,
    PYPROJECT_TOML_NAME,
)
from coroline.errors import ConfigError
from coroline.scheduling.queue import TaskQueueKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from coroline.config.io import TomlTable
    from coroline.config.logging import CorolineLogger

logger: CorolineLogger = get_logger(__name__)

_TRUE_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "off", ""})


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine configuration.

    Attributes:
        debug (bool): Enable contract checks (enter/leave ownership, fiber release
            and resume preconditions).
        task_queue (TaskQueueKind): Task queue implementation deferred work goes to.
        max_concurrency (int | None): Admit at most this many coroutines at once
            (applies the ``max_concurrency`` mod); None for no limit.
        trace (bool): Apply the ``tracing`` mod.
        config_files (tuple[Path, ...]): Files the configuration was read from.
    """

    debug: bool = False
    task_queue: TaskQueueKind = TaskQueueKind.LOCAL
    max_concurrency: int | None = None
    trace: bool = False
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableEngineConfig:
        """Return a mutable copy of this frozen config."""
        return MutableEngineConfig(
            debug=self.debug,
            task_queue=self.task_queue,
            max_concurrency=self.max_concurrency,
            trace=self.trace,
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> TomlTable:
        """Return the configuration as a TOML-ready table (sources omitted)."""
        table: TomlTable = {
            Toml.KEY_DEBUG: self.debug,
            Toml.KEY_TASK_QUEUE: self.task_queue.key,
            Toml.KEY_TRACE: self.trace,
        }
        if self.max_concurrency is not None:
            table[Toml.KEY_MAX_CONCURRENCY] = self.max_concurrency
        return table


# ------------------ Mutable builder ------------------


@dataclass
class MutableEngineConfig:
    """Mutable builder for `EngineConfig`; ``None`` fields inherit."""

    debug: bool | None = None
    task_queue: TaskQueueKind | str | None = None
    max_concurrency: int | None = None
    trace: bool | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    @classmethod
    def from_defaults(cls) -> MutableEngineConfig:
        """Return a builder populated with the built-in defaults."""
        return EngineConfig().thaw()

    @classmethod
    def from_toml_dict(
        cls, table: TomlTable, *, config_file: Path | None = None
    ) -> MutableEngineConfig:
        """Build a layer from a parsed engine table.

        Unknown keys are logged and ignored.
        """
        known = {Toml.KEY_DEBUG, Toml.KEY_TASK_QUEUE, Toml.KEY_MAX_CONCURRENCY, Toml.KEY_TRACE}
        for key in sorted(set(table) - known):
            logger.warning("Ignoring unknown configuration key '%s' in %s", key, config_file)
        return cls(
            debug=get_bool_value_or_none(table, Toml.KEY_DEBUG),
            task_queue=get_string_value_or_none(table, Toml.KEY_TASK_QUEUE),
            max_concurrency=get_int_value_or_none(table, Toml.KEY_MAX_CONCURRENCY),
            trace=get_bool_value_or_none(table, Toml.KEY_TRACE),
            config_files=[config_file] if config_file is not None else [],
        )

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableEngineConfig | None:
        """Load a layer from ``coroline.toml`` or the ``[tool.coroline]`` of a pyproject.

        Returns:
            MutableEngineConfig | None: The layer, or None if a ``pyproject.toml``
                has no ``[tool.coroline]`` table.
        """
        data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_TOML_NAME:
            table = extract_pyproject_table(data)
            if table is None:
                logger.debug("No [tool.coroline] table in %s", path)
                return None
            data = table
        logger.debug("Loaded engine configuration from %s", path)
        return cls.from_toml_dict(data, config_file=path)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MutableEngineConfig:
        """Build a layer from ``COROLINE_*`` environment variables."""
        env: Mapping[str, str] = os.environ if environ is None else environ
        max_concurrency: int | None = None
        raw_max = env.get(ENV_MAX_CONCURRENCY)
        if raw_max:
            try:
                max_concurrency = int(raw_max.strip())
            except ValueError:
                logger.warning("Ignoring non-integer %s=%r", ENV_MAX_CONCURRENCY, raw_max)
        return cls(
            debug=_env_bool(env, ENV_DEBUG),
            task_queue=env.get(ENV_TASK_QUEUE) or None,
            max_concurrency=max_concurrency,
            trace=_env_bool(env, ENV_TRACE),
        )

    def apply_env(self, environ: Mapping[str, str] | None = None) -> MutableEngineConfig:
        """Layer ``COROLINE_*`` overrides on top of self (in place) and return self."""
        return self.merge_with(MutableEngineConfig.from_env(environ))

    def merge_with(self, other: MutableEngineConfig) -> MutableEngineConfig:
        """Override fields set in ``other`` (in place) and return self."""
        if other.debug is not None:
            self.debug = other.debug
        if other.task_queue is not None:
            self.task_queue = other.task_queue
        if other.max_concurrency is not None:
            self.max_concurrency = other.max_concurrency
        if other.trace is not None:
            self.trace = other.trace
        self.config_files.extend(other.config_files)
        return self

    def freeze(self) -> EngineConfig:
        """Validate and freeze into an `EngineConfig`.

        Raises:
            ConfigError: If the task queue kind is unknown or ``max_concurrency`` < 1.
        """
        kind: TaskQueueKind | None
        if self.task_queue is None:
            kind = TaskQueueKind.LOCAL
        elif isinstance(self.task_queue, TaskQueueKind):
            kind = self.task_queue
        else:
            kind = TaskQueueKind.parse(self.task_queue)
        if kind is None:
            raise ConfigError(
                f"Unknown task queue kind: {self.task_queue!r} "
                f"(expected one of {TaskQueueKind.expected()})"
            )
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ConfigError(f"max_concurrency must be >= 1, got {self.max_concurrency}")
        return EngineConfig(
            debug=bool(self.debug),
            task_queue=kind,
            max_concurrency=self.max_concurrency,
            trace=bool(self.trace),
            config_files=tuple(self.config_files),
        )


def _env_bool(env: Mapping[str, str], name: str) -> bool | None:
    raw = env.get(name)
    if raw is None:
        return None
    token = raw.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    logger.warning("Ignoring non-boolean %s=%r", name, raw)
    return None


def load_engine_config(
    root: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> EngineConfig:
    """Resolve the effective engine configuration.

    Args:
        root (Path | None): Directory searched for ``pyproject.toml`` and
            ``coroline.toml``. Defaults to the current working directory.
        environ (Mapping[str, str] | None): Environment to read overrides from.
            Defaults to ``os.environ``.

    Returns:
        EngineConfig: The frozen configuration.
    """
    base: Path = root if root is not None else Path.cwd()
    draft = MutableEngineConfig.from_defaults()
    for name in (PYPROJECT_TOML_NAME, COROLINE_TOML_NAME):
        path = base / name
        if not path.is_file():
            continue
        layer = MutableEngineConfig.from_toml_file(path)
        if layer is not None:
            draft.merge_with(layer)
    return draft.apply_env(environ).freeze()


def describe(config: EngineConfig) -> dict[str, Any]:
    """Return a JSON-friendly view of ``config`` including its sources."""
    view: dict[str, Any] = dict(config.to_toml_dict())
    view["max_concurrency"] = config.max_concurrency
    view["config_files"] = [str(p) for p in config.config_files]
    return view
