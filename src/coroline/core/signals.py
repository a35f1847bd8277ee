# topmark:header:start
#
#   project      : Coroline
#   file         : signals.py
#   file_relpath : src/coroline/core/signals.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-band signals exchanged between protocols and the engine.

A protocol's ``yield_`` decides whether a coroutine really suspends. It may
answer with:

- `Suspend(value)` or any plain value: park the fiber, handing ``value`` to
  whoever resumed it;
- `ContinueInline(value)`: keep running synchronously, ``leave()`` returns
  ``value``;
- `Signal.CONTINUE_AFTER_YIELD`: keep running synchronously, ``leave()``
  returns ``None``.

`Signal.NOT_HANDLED` is returned by handlers that do not apply to a given input
(see [`first_handled`][coroline.core.signals.first_handled]).

Enum members are singletons and never compare equal to application data, so
they are safe to test with ``is``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

T = TypeVar("T")


class Signal(Enum):
    """Sentinel markers distinguishable from any application value."""

    CONTINUE_AFTER_YIELD = "continue-after-yield"
    NOT_HANDLED = "not-handled"

    def __repr__(self) -> str:
        return f"<Signal.{self.name}>"


@dataclass(frozen=True, slots=True)
class Suspend(Generic[T]):
    """Park the current fiber and hand ``value`` to its resumer."""

    value: T | None = None


@dataclass(frozen=True, slots=True)
class ContinueInline(Generic[T]):
    """Do not suspend; ``leave()`` returns ``value`` immediately."""

    value: T | None = None


YieldOutcome = Union[Suspend[Any], ContinueInline[Any], Signal, Any]


def first_handled(handlers: Iterable[Callable[..., Any]], *args: Any) -> Any:
    """Return the first handler result that is not `Signal.NOT_HANDLED`.

    Handlers are tried in order with the same arguments.

    Args:
        handlers (Iterable[Callable[..., Any]]): Candidate handlers.
        *args (Any): Arguments passed to each handler.

    Returns:
        Any: The first handled result, or `Signal.NOT_HANDLED` if no handler applies.
    """
    for handler in handlers:
        result = handler(*args)
        if result is not Signal.NOT_HANDLED:
            return result
    return Signal.NOT_HANDLED
