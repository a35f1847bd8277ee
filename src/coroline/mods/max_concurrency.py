# topmark:header:start
#
#   project      : Coroline
#   file         : max_concurrency.py
#   file_relpath : src/coroline/mods/max_concurrency.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Admission-control mod limiting how many coroutines run at once.

A coroutine is *admitted* on its first ``enter``. While ``limit`` coroutines
are admitted, entering a new one queues the call instead; when an admitted
coroutine is released the oldest queued call is replayed. Entering an
admitted coroutine again (to resume it) is never delayed.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any

from coroline.config.logging import get_logger
from coroline.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from coroline.config.logging import CorolineLogger
    from coroline.coroutine import Coroutine, EnterFn
    from coroline.pipeline.ops import Mod, PipelineOps
    from coroline.pipeline.registry import Pipeline
    from coroline.protocol import CoroProtocol

logger: CorolineLogger = get_logger(__name__)


def max_concurrency(limit: int) -> Mod:
    """Return a mod admitting at most ``limit`` coroutines at once.

    Raises:
        ConfigError: If ``limit`` is smaller than 1.
    """
    if limit < 1:
        raise ConfigError(f"max_concurrency: limit must be >= 1, got {limit}")

    def mod(base: PipelineOps) -> dict[str, Callable[..., Any]]:
        # Fresh per use(): a mod reused after reset() or on another pipeline
        # starts with nothing admitted.
        admitted: set[Coroutine] = set()
        pending: deque[tuple[Coroutine, EnterFn, BaseException | None, Any]] = deque()

        def admit_next() -> None:
            while pending and (len(admitted) < limit or pending[0][0] in admitted):
                co, inner_enter, error, value = pending.popleft()
                admitted.add(co)
                logger.debug("max_concurrency: admitting %r (%d queued)", co, len(pending))
                inner_enter(error, value)

        def acquire_coro(
            pipeline: Pipeline,
            protocol: CoroProtocol,
            body_func: Callable[..., Any],
            body_args: Sequence[Any],
            body_this: Any,
            body_kwargs: Mapping[str, Any],
        ) -> Coroutine:
            co = base.acquire_coro(pipeline, protocol, body_func, body_args, body_this, body_kwargs)
            inner_enter = co.enter
            assert inner_enter is not None

            def enter(error: BaseException | None = None, value: Any = None) -> None:
                if co in admitted:
                    inner_enter(error, value)
                elif len(admitted) < limit and not pending:
                    admitted.add(co)
                    inner_enter(error, value)
                else:
                    pending.append((co, inner_enter, error, value))
                    logger.debug("max_concurrency: queued %r (%d queued)", co, len(pending))

            co.enter = enter
            return co

        def release_coro(pipeline: Pipeline, co: Coroutine) -> None:
            admitted.discard(co)
            base.release_coro(pipeline, co)
            admit_next()

        return {"acquire_coro": acquire_coro, "release_coro": release_coro}

    mod.__qualname__ = mod.__name__ = f"max_concurrency({limit})"
    mod.limit = limit  # type: ignore[attr-defined]
    return mod
