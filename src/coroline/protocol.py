# topmark:header:start
#
#   project      : Coroline
#   file         : protocol.py
#   file_relpath : src/coroline/protocol.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Calling-convention contract consumed by the engine.

A calling convention (callbacks, futures, generators, ...) plugs into the engine
by supplying an object implementing `CoroProtocol`. The engine only *invokes*
these three operations; it never implements them and never interprets the
errors it hands to ``throw``.

Every call receives the coroutine's ``context``: a fresh ``dict`` created per
coroutine that the protocol may use to keep private state (a future to
resolve, a callback to invoke, ...). Contexts are never shared between
coroutines.

Python keywords cannot be method names, hence ``yield_`` and ``return_``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from coroline.core.signals import YieldOutcome


class CoroProtocol(Protocol):
    """What "suspend", "complete" and "fail" mean for one calling convention."""

    def yield_(self, context: dict[str, Any], value: Any) -> YieldOutcome:
        """Decide how the coroutine suspends on ``leave(value)``.

        Returns:
            YieldOutcome: ``Signal.CONTINUE_AFTER_YIELD`` or ``ContinueInline(v)``
            to keep running without suspending; ``Suspend(v)`` or any other value
            to park the fiber with that value.
        """
        ...

    def return_(self, context: dict[str, Any], result: Any) -> None:
        """Deliver the body's result. Called at most once per coroutine."""
        ...

    def throw(self, context: dict[str, Any], error: BaseException) -> None:
        """Deliver the body's failure. Called at most once per coroutine."""
        ...
