# topmark:header:start
#
#   project      : Coroline
#   file         : model.py
#   file_relpath : src/coroline/fiber/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fiber: a cooperative thread of control backed by a greenlet.

A `Fiber` only holds state. All control transfers (start, resume, throw,
suspend) go through the owning
[`GreenletFiberHost`][coroline.fiber.host.GreenletFiberHost], which also tracks
which fiber is current.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from greenlet import getcurrent, greenlet

if TYPE_CHECKING:
    from collections.abc import Callable

    from coroline.coroutine import Coroutine


class Fiber:
    """State of one cooperative execution unit.

    Attributes:
        greenlet (greenlet): The underlying greenlet. Its ``run`` calls the body.
        resumer (greenlet | None): Greenlet that last transferred control into this
            fiber; ``suspend_current`` switches back to it.
        owner (Coroutine | None): Coroutine bound to this fiber, if any.
    """

    __slots__ = ("_body", "greenlet", "owner", "resumer")

    def __init__(self, body: Callable[[], Any]) -> None:
        self._body: Callable[[], Any] | None = body
        self.greenlet: greenlet = greenlet(run=self._bootstrap)
        self.resumer: greenlet | None = None
        self.owner: Coroutine | None = None

    def _bootstrap(self, *_args: Any) -> Any:
        # The first resume value is dropped: bodies take no arguments.
        body = self._body
        assert body is not None, "fiber started after release"
        return body()

    @property
    def started(self) -> bool:
        """True once the fiber has been resumed at least once."""
        return bool(self.greenlet) or self.greenlet.dead

    @property
    def dead(self) -> bool:
        """True once the body has returned or raised past the top frame."""
        return self.greenlet.dead

    @property
    def suspended(self) -> bool:
        """True while parked at a suspension point (started, alive, not running)."""
        return bool(self.greenlet) and self.greenlet is not getcurrent()

    @property
    def released(self) -> bool:
        """True once the host released this fiber."""
        return self._body is None

    def release(self) -> None:
        """Drop references held by this fiber."""
        self._body = None
        self.owner = None
        self.resumer = None

    def __repr__(self) -> str:
        if self.dead:
            state = "dead"
        elif self.suspended:
            state = "suspended"
        elif self.started:
            state = "running"
        else:
            state = "new"
        return f"<Fiber {state} at {id(self):#x}>"
