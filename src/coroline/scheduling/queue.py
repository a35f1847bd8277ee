# topmark:header:start
#
#   project      : Coroline
#   file         : queue.py
#   file_relpath : src/coroline/scheduling/queue.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single-threaded task queues.

Every coroutine resumption and every post-completion cleanup is deferred
through a task queue, never run synchronously. This guarantees that a
coroutine is never resumed on the call stack of the ``enter()`` that triggered
it, and that a fiber has fully left its stack before it is released.

Two implementations are provided:

- `LocalTaskQueue`: an in-process FIFO driven explicitly by the host
  application (or the test suite) through `run_once()` / `run_until_idle()`.
- `AsyncioTaskQueue`: delegates to an asyncio event loop's ``call_soon``.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import TYPE_CHECKING, Any, Protocol

from coroline.config.logging import get_logger
from coroline.core.enum_mixins import KeyedStrEnum
from coroline.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable

    from coroline.config.logging import CorolineLogger

logger: CorolineLogger = get_logger(__name__)


class TaskQueue(Protocol):
    """Protocol for the FIFO queue the engine defers work to."""

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)`` to run on a later turn, after earlier entries."""
        ...


class LocalTaskQueue:
    """In-process FIFO task queue.

    A *turn* runs exactly the entries that were queued when it started;
    entries scheduled during a turn run on the next one. An exception raised by
    a callback propagates to the caller of `run_once()` and leaves the
    remaining entries of that turn queued.
    """

    def __init__(self) -> None:
        self._entries: deque[tuple[Callable[..., Any], tuple[Any, ...]]] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)``."""
        self._entries.append((callback, args))

    def run_once(self) -> int:
        """Run one turn of the queue.

        Returns:
            int: Number of callbacks executed.
        """
        pending: int = len(self._entries)
        ran: int = 0
        while ran < pending:
            callback, args = self._entries.popleft()
            ran += 1
            callback(*args)
        return ran

    def run_until_idle(self, max_turns: int | None = None) -> int:
        """Run turns until the queue is empty.

        Args:
            max_turns (int | None): Stop after this many turns even if work remains.

        Returns:
            int: Total number of callbacks executed.
        """
        total: int = 0
        turns: int = 0
        while self._entries and (max_turns is None or turns < max_turns):
            total += self.run_once()
            turns += 1
        logger.trace("task queue idle after %d turn(s), %d callback(s)", turns, total)
        return total


class AsyncioTaskQueue:
    """Task queue backed by an asyncio event loop.

    Args:
        loop (asyncio.AbstractEventLoop | None): Loop to schedule on. When None,
            the loop running at `call_soon()` time is used.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop: asyncio.AbstractEventLoop | None = loop

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule ``callback(*args)`` with ``loop.call_soon``.

        Raises:
            RuntimeError: If no loop was given and none is running.
        """
        loop = self._loop or asyncio.get_running_loop()
        loop.call_soon(callback, *args)


class TaskQueueKind(KeyedStrEnum):
    """Selectable task queue implementations."""

    LOCAL = ("local", "In-process FIFO queue driven by the host", ("deque", "fifo"))
    ASYNCIO = ("asyncio", "asyncio event loop call_soon", ("aio",))


def make_task_queue(kind: TaskQueueKind | str) -> TaskQueue:
    """Instantiate the task queue for ``kind``.

    Raises:
        ConfigError: If ``kind`` is not a known task queue kind.
    """
    resolved = kind if isinstance(kind, TaskQueueKind) else TaskQueueKind.parse(kind)
    if resolved is TaskQueueKind.LOCAL:
        return LocalTaskQueue()
    if resolved is TaskQueueKind.ASYNCIO:
        return AsyncioTaskQueue()
    raise ConfigError(
        f"Unknown task queue kind: {kind!r} (expected one of {TaskQueueKind.expected()})"
    )
