# topmark:header:start
#
#   project      : Coroline
#   file         : fiber_body.py
#   file_relpath : src/coroline/pipeline/fiber_body.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default ``create_fiber_body`` operation: the closure a fiber runs.

The body wrapper:
  1. resolves its coroutine lazily (it does not exist yet when the wrapper is
     built, see ``acquire_coro``);
  2. runs the body function;
  3. routes the outcome to exactly one of ``protocol.return_`` or
     ``protocol.throw``;
  4. always schedules the release of the fiber and then of the coroutine on
     the task queue, so the fiber has left its stack before it is released.

An exception raised by ``protocol.return_`` is not re-routed to
``protocol.throw``; it propagates out of the fiber to its resumer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from coroline.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from coroline.config.logging import CorolineLogger
    from coroline.coroutine import Coroutine
    from coroline.pipeline.ops import FiberBody
    from coroline.pipeline.registry import Pipeline
    from coroline.protocol import CoroProtocol

logger: CorolineLogger = get_logger(__name__)


def run_body(co: Coroutine) -> Any:
    """Invoke the coroutine's body with its arguments and receiver."""
    if co.pending_error is not None:
        # Injected by enter(error) before the fiber ever ran.
        error, co.pending_error = co.pending_error, None
        raise error

    func = co.body_func
    assert func is not None, "coroutine has no body"
    if not (co.body_args or co.body_kwargs or co.body_this is not None):
        return func()
    if co.body_this is not None:
        return func(co.body_this, *co.body_args, **co.body_kwargs)
    return func(*co.body_args, **co.body_kwargs)


def release_after_exit(pipeline: Pipeline, co: Coroutine) -> None:
    """Release the fiber, then the coroutine. Runs on the task queue."""
    fiber = co.fiber
    if fiber is not None:
        pipeline.release_fiber(fiber)
    pipeline.release_coro(co)


def create_fiber_body(
    pipeline: Pipeline,
    protocol: CoroProtocol,
    get_coro: Callable[[], Coroutine],
) -> FiberBody:
    """Build the closure executed inside a fiber.

    Args:
        pipeline (Pipeline): Owning pipeline (task queue and release operations).
        protocol (CoroProtocol): Calling convention receiving the outcome.
        get_coro (Callable[[], Coroutine]): Deferred lookup of the coroutine.

    Returns:
        FiberBody: Zero-argument closure suitable for ``acquire_fiber``.
    """

    def fiber_body() -> None:
        co: Coroutine = get_coro()
        context = co.context
        try:
            result = run_body(co)
        except Exception as exc:
            logger.trace("%r raised, routing to protocol.throw", co)
            protocol.throw(context, exc)  # type: ignore[arg-type]
        else:
            logger.trace("%r returned, routing to protocol.return_", co)
            protocol.return_(context, result)  # type: ignore[arg-type]
        finally:
            pipeline.task_queue.call_soon(release_after_exit, pipeline, co)

    return fiber_body
