# topmark:header:start
#
#   project      : Coroline
#   file         : tracing.py
#   file_relpath : src/coroline/mods/tracing.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Instrumentation mod: counts acquisitions and releases and logs them at TRACE.

Example:
    ```python
    stats = TraceStats()
    pipeline.use(tracing(stats))
    ...
    assert stats.live_coroutines == 0
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from coroline.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from coroline.config.logging import CorolineLogger
    from coroline.coroutine import Coroutine
    from coroline.fiber.model import Fiber
    from coroline.pipeline.ops import FiberBody, Mod, PipelineOps
    from coroline.pipeline.registry import Pipeline
    from coroline.protocol import CoroProtocol

logger: CorolineLogger = get_logger(__name__)


@dataclass
class TraceStats:
    """Running counters maintained by the `tracing` mod."""

    coroutines_acquired: int = 0
    coroutines_released: int = 0
    fibers_acquired: int = 0
    fibers_released: int = 0
    bodies_created: int = 0

    @property
    def live_coroutines(self) -> int:
        """Coroutines acquired and not yet released."""
        return self.coroutines_acquired - self.coroutines_released

    @property
    def live_fibers(self) -> int:
        """Fibers acquired and not yet released."""
        return self.fibers_acquired - self.fibers_released


def tracing(stats: TraceStats | None = None) -> Mod:
    """Return a mod wrapping every operation with counting and TRACE logging.

    Args:
        stats (TraceStats | None): Counters to update; a fresh one is used when None.

    Returns:
        Mod: The mod to apply with ``Pipeline.use``. Its ``stats`` attribute
        exposes the counters.
    """
    counters: TraceStats = stats if stats is not None else TraceStats()

    def mod(base: PipelineOps) -> dict[str, Callable[..., Any]]:
        def acquire_coro(
            pipeline: Pipeline,
            protocol: CoroProtocol,
            body_func: Callable[..., Any],
            body_args: Sequence[Any],
            body_this: Any,
            body_kwargs: Mapping[str, Any],
        ) -> Coroutine:
            co = base.acquire_coro(pipeline, protocol, body_func, body_args, body_this, body_kwargs)
            counters.coroutines_acquired += 1
            logger.trace("acquire_coro %r (live=%d)", co, counters.live_coroutines)
            return co

        def release_coro(pipeline: Pipeline, co: Coroutine) -> None:
            logger.trace("release_coro %r", co)
            base.release_coro(pipeline, co)
            counters.coroutines_released += 1

        def acquire_fiber(pipeline: Pipeline, body: Callable[[], Any]) -> Fiber:
            fiber = base.acquire_fiber(pipeline, body)
            counters.fibers_acquired += 1
            logger.trace("acquire_fiber %r (live=%d)", fiber, counters.live_fibers)
            return fiber

        def release_fiber(pipeline: Pipeline, fiber: Fiber) -> None:
            logger.trace("release_fiber %r", fiber)
            base.release_fiber(pipeline, fiber)
            counters.fibers_released += 1

        def create_fiber_body(
            pipeline: Pipeline,
            protocol: CoroProtocol,
            get_coro: Callable[[], Coroutine],
        ) -> FiberBody:
            counters.bodies_created += 1
            return base.create_fiber_body(pipeline, protocol, get_coro)

        return {
            "acquire_coro": acquire_coro,
            "release_coro": release_coro,
            "acquire_fiber": acquire_fiber,
            "release_fiber": release_fiber,
            "create_fiber_body": create_fiber_body,
        }

    mod.__qualname__ = mod.__name__ = "tracing"
    mod.stats = counters  # type: ignore[attr-defined]
    return mod
