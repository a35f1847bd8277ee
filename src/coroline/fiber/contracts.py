# topmark:header:start
#
#   project      : Coroline
#   file         : contracts.py
#   file_relpath : src/coroline/fiber/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contract for execution unit hosts (engine-facing).

The engine never switches stacks itself. It relies on a host object exposing
the primitives below; the shipped implementation is
[`GreenletFiberHost`][coroline.fiber.host.GreenletFiberHost].

Lifecycle
---------
1) ``acquire(body)`` creates a fiber that has not started.
2) ``resume``/``throw_into`` transfer control into it until it suspends
   (``suspend_current``) or exits.
3) ``release(fiber)`` disposes of it once it has exited.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from .model import Fiber


class FiberHost(Protocol):
    """Protocol for the cooperative stack-switching capability."""

    def acquire(self, body: Callable[[], Any]) -> Fiber:
        """Return a new, not-yet-started fiber that will run ``body``."""
        ...

    def release(self, fiber: Fiber) -> None:
        """Dispose of a fiber that has fully exited."""
        ...

    def resume(self, fiber: Fiber, value: Any = None) -> Any:
        """Transfer control to ``fiber``, resuming it with ``value``.

        Returns:
            Any: The value the fiber suspended with, or its body result on exit.
        """
        ...

    def throw_into(self, fiber: Fiber, error: BaseException) -> Any:
        """Transfer control to ``fiber``, raising ``error`` at its suspension point.

        Returns:
            Any: The value the fiber suspended with, or its body result on exit.
        """
        ...

    def suspend_current(self, value: Any = None) -> Any:
        """Park the running fiber, handing ``value`` to its resumer.

        Returns:
            Any: The value the fiber is eventually resumed with.
        """
        ...

    def current(self) -> Fiber | None:
        """Return the running fiber, or None outside any fiber."""
        ...
