# topmark:header:start
#
#   project      : Coroline
#   file         : defaults.py
#   file_relpath : src/coroline/pipeline/defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in implementations of the overridable pipeline operations.

`DEFAULT_OPS` is what a fresh pipeline starts with and what
``Pipeline.reset()`` restores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from coroline.config.logging import get_logger
from coroline.core.signals import ContinueInline, Signal, Suspend
from coroline.coroutine import Coroutine
from coroline.errors import ProtocolError, ensure_contract
from coroline.pipeline.fiber_body import create_fiber_body
from coroline.pipeline.ops import PipelineOps

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from coroline.config.logging import CorolineLogger
    from coroline.fiber.model import Fiber
    from coroline.pipeline.registry import Pipeline
    from coroline.protocol import CoroProtocol

logger: CorolineLogger = get_logger(__name__)


def acquire_coro(
    pipeline: Pipeline,
    protocol: CoroProtocol,
    body_func: Callable[..., Any],
    body_args: Sequence[Any],
    body_this: Any,
    body_kwargs: Mapping[str, Any],
) -> Coroutine:
    """Create a coroutine running ``body_func`` under ``protocol``.

    The fiber body needs the coroutine and the coroutine needs the fiber, so the
    body is given a lookup closure that resolves once both exist.
    """
    co: Coroutine | None = None

    def get_coro() -> Coroutine:
        assert co is not None, "fiber started before its coroutine was bound"
        return co

    fiber_body = pipeline.create_fiber_body(protocol, get_coro)
    fiber = pipeline.acquire_fiber(fiber_body)

    co = Coroutine(protocol)
    co.fiber = fiber
    co.body_func = body_func
    co.body_args = tuple(body_args)
    co.body_kwargs = dict(body_kwargs)
    co.body_this = body_this
    co.context = {}
    fiber.owner = co
    bound: Coroutine = co

    def deliver_error(error: BaseException) -> None:
        fiber = bound.fiber
        if fiber is not None and not fiber.started:
            bound.pending_error = error
            pipeline.fiber_host.resume(fiber)
        elif fiber is not None:
            pipeline.fiber_host.throw_into(fiber, error)

    def enter(error: BaseException | None = None, value: Any = None) -> None:
        ensure_contract(
            pipeline.debug,
            not pipeline.is_current(bound),
            "enter: must not be called from the currently executing coroutine",
        )
        if error is not None:
            pipeline.task_queue.call_soon(deliver_error, error)
        else:
            pipeline.task_queue.call_soon(pipeline.fiber_host.resume, bound.fiber, value)

    def leave(value: Any = None) -> Any:
        ensure_contract(
            pipeline.debug,
            pipeline.is_current(bound),
            "leave: may only be called from the currently executing coroutine",
        )
        outcome = protocol.yield_(bound.context, value)  # type: ignore[arg-type]
        if outcome is Signal.CONTINUE_AFTER_YIELD:
            return None
        if isinstance(outcome, ContinueInline):
            return outcome.value
        if outcome is Signal.NOT_HANDLED:
            raise ProtocolError(f"{type(protocol).__name__}.yield_ did not handle {value!r}")
        if isinstance(outcome, Suspend):
            outcome = outcome.value
        return pipeline.suspend_coro(outcome)

    co.enter = enter
    co.leave = leave
    return co


def release_coro(pipeline: Pipeline, co: Coroutine) -> None:
    """Break references held by ``co`` and mark it unusable."""
    co.enter = None
    co.leave = None
    co.context = None
    co.pending_error = None


def acquire_fiber(pipeline: Pipeline, body: Callable[[], Any]) -> Fiber:
    """Create a fiber over ``body`` through the pipeline's fiber host."""
    return pipeline.fiber_host.acquire(body)


def release_fiber(pipeline: Pipeline, fiber: Fiber) -> None:
    """Hand ``fiber`` back to the pipeline's fiber host."""
    pipeline.fiber_host.release(fiber)


DEFAULT_OPS: PipelineOps = PipelineOps(
    acquire_coro=acquire_coro,
    release_coro=release_coro,
    acquire_fiber=acquire_fiber,
    release_fiber=release_fiber,
    create_fiber_body=create_fiber_body,
)
