# topmark:header:start
#
#   project      : Coroline
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Coroline test suite.

Provides typed `parametrize` and `hookimpl` wrappers, a recording protocol
that logs every call the engine makes into it, and a debug-mode pipeline
driven by a local task queue.

Notes:
    Engine work is always deferred: after ``co.enter()`` nothing has run yet.
    Drive the queue explicitly with ``pipeline.task_queue.run_once()`` (one
    turn) or ``run_until_idle()`` (until cleanups are done).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from coroline.config import logging
from coroline.config.model import EngineConfig
from coroline.core.signals import Suspend
from coroline.pipeline.registry import Pipeline, set_pipeline
from coroline.scheduling.queue import LocalTaskQueue

if TYPE_CHECKING:
    from collections.abc import Iterator

    from coroline.core.signals import YieldOutcome

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


class RecordingProtocol:
    """Protocol double recording every engine call as ``(kind, payload)``.

    Args:
        on_yield (Callable | None): Decides the outcome of ``yield_``. Defaults to
            suspending with the yielded value.
    """

    def __init__(
        self,
        on_yield: Callable[[dict[str, Any], Any], YieldOutcome] | None = None,
    ) -> None:
        self.events: list[tuple[str, Any]] = []
        self.contexts: list[dict[str, Any]] = []
        self.on_yield = on_yield

    def yield_(self, context: dict[str, Any], value: Any) -> YieldOutcome:
        self.events.append(("yield", value))
        self.contexts.append(context)
        if self.on_yield is None:
            return Suspend(value)
        return self.on_yield(context, value)

    def return_(self, context: dict[str, Any], result: Any) -> None:
        self.events.append(("return", result))
        self.contexts.append(context)

    def throw(self, context: dict[str, Any], error: BaseException) -> None:
        self.events.append(("throw", error))
        self.contexts.append(context)

    @property
    def kinds(self) -> list[str]:
        """Event kinds, in call order."""
        return [kind for kind, _ in self.events]

    @property
    def outcomes(self) -> list[tuple[str, Any]]:
        """Only the ``return``/``throw`` events."""
        return [e for e in self.events if e[0] in ("return", "throw")]


def make_pipeline(**overrides: Any) -> Pipeline:
    """Return a pipeline over a fresh `LocalTaskQueue` (debug on unless overridden).

    Args:
        **overrides (Any): `EngineConfig` field overrides.

    Returns:
        Pipeline: An unlocked pipeline with default operations.
    """
    params: dict[str, Any] = {"debug": True}
    params.update(overrides)
    return Pipeline(EngineConfig(**params), task_queue=LocalTaskQueue())


def drain(pipeline: Pipeline) -> int:
    """Run the pipeline's local task queue until idle and return the callback count."""
    queue = pipeline.task_queue
    assert isinstance(queue, LocalTaskQueue)
    return queue.run_until_idle()


def turn(pipeline: Pipeline) -> int:
    """Run exactly one turn of the pipeline's local task queue."""
    queue = pipeline.task_queue
    assert isinstance(queue, LocalTaskQueue)
    return queue.run_once()


@pytest.fixture
def pipeline() -> Pipeline:
    """Debug-mode pipeline over a local task queue."""
    return make_pipeline()


@pytest.fixture
def protocol() -> RecordingProtocol:
    """Recording protocol that suspends on every yield."""
    return RecordingProtocol()


@pytest.fixture(autouse=True)
def isolate_engine_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep ``COROLINE_*`` variables and the process-wide pipeline out of tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to clear environment overrides.

    Yields:
        None: Control returns to the test; the global pipeline is reset afterwards.
    """
    for name in (
        "COROLINE_LOG_LEVEL",
        "COROLINE_DEBUG",
        "COROLINE_TASK_QUEUE",
        "COROLINE_MAX_CONCURRENCY",
        "COROLINE_TRACE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    set_pipeline(None)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set Coroline logging to TRACE for the whole run.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)
