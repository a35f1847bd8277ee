# topmark:header:start
#
#   project      : Coroline
#   file         : coroutine.py
#   file_relpath : src/coroline/coroutine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroutine: the unit of cooperative work.

A `Coroutine` binds one fiber, one protocol and one body callable (with its
arguments and optional receiver). Its ``enter`` and ``leave`` callables are
installed by the pipeline's ``acquire_coro`` operation and cleared by
``release_coro``; mods may wrap them (see
[`max_concurrency`][coroline.mods.max_concurrency.max_concurrency]).

Invariants:
  - ``enter`` is never called by the coroutine currently executing.
  - ``leave`` is only called by the coroutine currently executing.
  - A coroutine is released only after its fiber has exited.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from coroline.fiber.model import Fiber
    from coroline.protocol import CoroProtocol

EnterFn = Callable[..., None]
LeaveFn = Callable[..., Any]


class Coroutine:
    """State of one unit of asynchronous work.

    Attributes:
        protocol (CoroProtocol): Calling convention the outcome is routed to.
        fiber (Fiber | None): Execution unit running the body.
        body_func (Callable[..., Any] | None): The work to perform.
        body_args (tuple[Any, ...]): Positional arguments for the body.
        body_kwargs (Mapping[str, Any]): Keyword arguments for the body.
        body_this (Any): Receiver passed as first argument, or None for none.
        context (dict[str, Any] | None): Protocol-private state; None once released.
        enter (EnterFn | None): Resume from outside; None once released.
        leave (LeaveFn | None): Suspend from inside; None once released.
        pending_error (BaseException | None): Error injected before the first resume.
    """

    __slots__ = (
        "__weakref__",
        "body_args",
        "body_func",
        "body_kwargs",
        "body_this",
        "context",
        "enter",
        "fiber",
        "leave",
        "pending_error",
        "protocol",
    )

    def __init__(self, protocol: CoroProtocol) -> None:
        self.protocol: CoroProtocol = protocol
        self.fiber: Fiber | None = None
        self.body_func: Callable[..., Any] | None = None
        self.body_args: tuple[Any, ...] = ()
        self.body_kwargs: Mapping[str, Any] = {}
        self.body_this: Any = None
        self.context: dict[str, Any] | None = None
        self.enter: EnterFn | None = None
        self.leave: LeaveFn | None = None
        self.pending_error: BaseException | None = None

    @property
    def released(self) -> bool:
        """True once ``release_coro`` has run for this coroutine."""
        return self.context is None

    def __repr__(self) -> str:
        name = getattr(self.body_func, "__qualname__", repr(self.body_func))
        state = "released" if self.released else repr(self.fiber)
        return f"<Coroutine {name} {state}>"
