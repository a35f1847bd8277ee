# topmark:header:start
#
#   project      : Coroline
#   file         : registry.py
#   file_relpath : src/coroline/pipeline/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The pipeline registry: overridable operations, mods and lock.

A [`Pipeline`][coroline.pipeline.registry.Pipeline] owns everything the engine
needs at runtime:

- the table of the five overridable operations (`PipelineOps`);
- the ordered list of applied mods and the lock flag;
- the fiber host (which fiber is current) and the task queue.

Mods may only be applied while the pipeline is unlocked. The pipeline locks
itself on the first ``acquire_coro`` call: an extension must be fully
configured before any asynchronous work begins.

Typical usage:
    ```python
    from coroline.pipeline import get_pipeline
    from coroline.mods import tracing

    pipeline = get_pipeline()
    pipeline.use(tracing())
    co = pipeline.acquire_coro(protocol, work, (1, 2))
    co.enter()
    pipeline.task_queue.run_until_idle()
    ```

Warning:
    ``reset()`` exists for test isolation. It is not safe to call while
    coroutines are alive.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from coroline.config.logging import get_logger
from coroline.config.model import EngineConfig, load_engine_config
from coroline.errors import PipelineLockedError
from coroline.fiber.host import GreenletFiberHost
from coroline.pipeline.defaults import DEFAULT_OPS
from coroline.pipeline.ops import PipelineOps
from coroline.scheduling.queue import make_task_queue

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from coroline.config.logging import CorolineLogger
    from coroline.coroutine import Coroutine
    from coroline.fiber.contracts import FiberHost
    from coroline.fiber.model import Fiber
    from coroline.pipeline.ops import FiberBody, Mod
    from coroline.protocol import CoroProtocol
    from coroline.scheduling.queue import TaskQueue

logger: CorolineLogger = get_logger(__name__)


class Pipeline:
    """Registry of overridable engine operations plus scheduler introspection.

    Args:
        config (EngineConfig | None): Engine configuration; defaults are used when None.
        fiber_host (FiberHost | None): Stack-switching host. Defaults to a
            `GreenletFiberHost` honoring ``config.debug``.
        task_queue (TaskQueue | None): Queue for deferred work. Defaults to the
            kind selected by ``config.task_queue``.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        fiber_host: FiberHost | None = None,
        task_queue: TaskQueue | None = None,
    ) -> None:
        if config is None:
            config = EngineConfig()
        self.config: EngineConfig = config
        if fiber_host is None:
            fiber_host = GreenletFiberHost(debug=config.debug)
        if task_queue is None:
            task_queue = make_task_queue(config.task_queue)
        self.fiber_host: FiberHost = fiber_host
        self.task_queue: TaskQueue = task_queue
        self._ops: PipelineOps = DEFAULT_OPS
        self._mods: list[Mod] = []
        self._is_locked: bool = False

    @classmethod
    def from_config(cls, config: EngineConfig) -> Pipeline:
        """Build a pipeline and apply the mods ``config`` asks for.

        ``max_concurrency`` is applied before ``trace`` so that tracing observes
        the admitted coroutines.
        """
        pipeline = cls(config)
        if config.max_concurrency is not None:
            from coroline.mods.max_concurrency import max_concurrency

            pipeline.use(max_concurrency(config.max_concurrency))
        if config.trace:
            from coroline.mods.tracing import tracing

            pipeline.use(tracing())
        return pipeline

    # --- State ---

    @property
    def debug(self) -> bool:
        """Whether contract checks are active."""
        return self.config.debug

    @property
    def ops(self) -> PipelineOps:
        """The current (possibly modded) operation table."""
        return self._ops

    @property
    def mods(self) -> tuple[Mod, ...]:
        """Applied mods, in registration order."""
        return tuple(self._mods)

    @property
    def is_locked(self) -> bool:
        """True once the pipeline started servicing coroutines."""
        return self._is_locked

    def lock(self) -> None:
        """Refuse further mods until `reset()`."""
        if not self._is_locked:
            logger.debug("pipeline locked with %d mod(s)", len(self._mods))
        self._is_locked = True

    def use(self, mod: Mod) -> None:
        """Apply ``mod`` on top of the mods applied so far.

        ``mod`` receives the current `PipelineOps` and returns either a mapping
        of operation name to replacement, a complete `PipelineOps`, or None.

        Raises:
            PipelineLockedError: If the pipeline is locked. Operations are unchanged.
            UnknownOperationError: If the mod names an unknown operation. Operations
                are unchanged.
        """
        if self._is_locked:
            raise PipelineLockedError(
                f"use: cannot apply {_mod_name(mod)} once the pipeline is servicing coroutines"
            )
        result = mod(self._ops)
        if isinstance(result, PipelineOps):
            new_ops = result
        elif result is None:
            new_ops = self._ops
        else:
            new_ops = self._ops.with_overrides(result)
        self._ops = new_ops
        self._mods.append(mod)
        logger.info("applied mod %s", _mod_name(mod))

    def reset(self) -> None:
        """Restore default operations, forget all mods and unlock (tests only)."""
        self._ops = DEFAULT_OPS
        self._mods = []
        self._is_locked = False
        logger.debug("pipeline reset")

    # --- Overridable operations ---

    def acquire_coro(
        self,
        protocol: CoroProtocol,
        body_func: Callable[..., Any],
        body_args: Sequence[Any] = (),
        body_this: Any = None,
        body_kwargs: Mapping[str, Any] | None = None,
    ) -> Coroutine:
        """Create a coroutine for ``body_func``; locks the pipeline."""
        self.lock()
        return self._ops.acquire_coro(
            self, protocol, body_func, body_args, body_this, body_kwargs or {}
        )

    def release_coro(self, co: Coroutine) -> None:
        """Dispose of ``co`` once its fiber has exited."""
        self._ops.release_coro(self, co)

    def acquire_fiber(self, body: Callable[[], Any]) -> Fiber:
        """Create a fiber over ``body``."""
        return self._ops.acquire_fiber(self, body)

    def release_fiber(self, fiber: Fiber) -> None:
        """Dispose of ``fiber`` once it has exited."""
        self._ops.release_fiber(self, fiber)

    def create_fiber_body(
        self, protocol: CoroProtocol, get_coro: Callable[[], Coroutine]
    ) -> FiberBody:
        """Build the closure a coroutine's fiber runs."""
        return self._ops.create_fiber_body(self, protocol, get_coro)

    # --- Scheduler introspection (not overridable) ---

    def current_coro(self) -> Coroutine | None:
        """Return the coroutine whose fiber is running, or None."""
        fiber = self.fiber_host.current()
        return None if fiber is None else fiber.owner

    def suspend_coro(self, value: Any = None) -> Any:
        """Suspend the running coroutine's fiber with ``value``.

        Returns:
            Any: The value the coroutine is resumed with.
        """
        return self.fiber_host.suspend_current(value)

    def is_current(self, co: Coroutine) -> bool:
        """Return True iff ``co`` is the coroutine whose fiber is running."""
        current = self.current_coro()
        return current is not None and co.context is not None and current.context is co.context


def _mod_name(mod: Mod) -> str:
    return getattr(mod, "__qualname__", None) or repr(mod)


_default_pipeline: Pipeline | None = None


def get_pipeline() -> Pipeline:
    """Return the process-wide pipeline, building it from the environment on first use."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = Pipeline.from_config(load_engine_config())
    return _default_pipeline


def set_pipeline(pipeline: Pipeline | None) -> Pipeline | None:
    """Replace the process-wide pipeline; None rebuilds it lazily on next use.

    Returns:
        Pipeline | None: The previous process-wide pipeline.
    """
    global _default_pipeline
    previous, _default_pipeline = _default_pipeline, pipeline
    return previous
