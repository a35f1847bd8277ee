# topmark:header:start
#
#   project      : Coroline
#   file         : host.py
#   file_relpath : src/coroline/fiber/host.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Greenlet-backed execution unit host.

The host owns the "current fiber" state explicitly instead of deriving it from
``greenlet.getcurrent()``: every transfer into a fiber records it as current for
the duration of the switch and restores the previous one afterwards, so
`current()` is a plain attribute read.

Control transfer rules:
  - Resuming a fiber re-parents its greenlet to the resuming greenlet, so both a
    suspension and a normal exit hand control back to whoever resumed it last.
  - `suspend_current()` switches back to that resumer; the value it passes is
    what the resumer's `resume()`/`throw_into()` call returns.

Contract checks (current fiber resuming itself, resuming a dead fiber,
releasing a suspended fiber, ...) are only active when the host is created with
``debug=True``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from greenlet import getcurrent

from coroline.config.logging import get_logger
from coroline.errors import ContractViolation, ensure_contract
from coroline.fiber.model import Fiber

if TYPE_CHECKING:
    from collections.abc import Callable

    from greenlet import greenlet

    from coroline.config.logging import CorolineLogger

logger: CorolineLogger = get_logger(__name__)


class GreenletFiberHost:
    """Execution unit factory and stack-switching primitives on top of greenlet.

    Args:
        debug (bool): Enable contract checks.
    """

    def __init__(self, *, debug: bool = False) -> None:
        self.debug: bool = debug
        self._current: Fiber | None = None

    def acquire(self, body: Callable[[], Any]) -> Fiber:
        """Return a new, not-yet-started fiber over ``body``."""
        fiber = Fiber(body)
        logger.trace("acquired %r", fiber)
        return fiber

    def release(self, fiber: Fiber) -> None:
        """Dispose of a fiber after it has exited.

        Releasing a fiber that is parked at a suspension point would leave its
        stack dangling; in debug mode this raises `ContractViolation`.
        """
        ensure_contract(
            self.debug,
            not fiber.started or fiber.dead,
            f"release: {fiber!r} has not exited yet",
        )
        fiber.release()
        logger.trace("released %r", fiber)

    def current(self) -> Fiber | None:
        """Return the running fiber, or None outside any fiber."""
        return self._current

    def resume(self, fiber: Fiber, value: Any = None) -> Any:
        """Resume ``fiber`` with ``value`` until it suspends or exits.

        Returns:
            Any: The value the fiber suspended with, or its body result on exit.
            ``None`` when the fiber is already dead (outside debug mode).
        """
        if not self._check_resumable(fiber, "resume"):
            return None
        return self._transfer(fiber, fiber.greenlet.switch, value)

    def throw_into(self, fiber: Fiber, error: BaseException) -> Any:
        """Resume ``fiber`` by raising ``error`` at its suspension point.

        Throwing into a fiber that never started kills it before its body runs
        and re-raises ``error`` in the caller; in debug mode this is rejected up
        front with `ContractViolation`.

        Returns:
            Any: The value the fiber suspended with, or its body result on exit.
        """
        ensure_contract(
            self.debug,
            fiber.started,
            f"throw_into: {fiber!r} has not started",
        )
        if not self._check_resumable(fiber, "throw_into"):
            return None
        return self._transfer(fiber, fiber.greenlet.throw, error)

    def suspend_current(self, value: Any = None) -> Any:
        """Park the running fiber and hand ``value`` to its resumer.

        Returns:
            Any: The value passed to the `resume()` that wakes this fiber up.

        Raises:
            ContractViolation: If no fiber is running.
        """
        fiber = self._current
        if fiber is None or fiber.resumer is None:
            raise ContractViolation("suspend_current: no fiber is running")
        ensure_contract(
            self.debug,
            getcurrent() is fiber.greenlet,
            f"suspend_current: {fiber!r} is not the running greenlet",
        )
        logger.trace("suspending %r", fiber)
        return fiber.resumer.switch(value)

    def _check_resumable(self, fiber: Fiber, op: str) -> bool:
        ensure_contract(
            self.debug,
            fiber is not self._current,
            f"{op}: {fiber!r} is the running fiber",
        )
        ensure_contract(self.debug, not fiber.dead, f"{op}: {fiber!r} has already exited")
        if fiber.dead:
            logger.warning("%s: ignoring transfer into exited %r", op, fiber)
            return False
        return True

    def _transfer(self, fiber: Fiber, switch: Callable[[Any], Any], arg: Any) -> Any:
        resumer: greenlet = getcurrent()
        fiber.greenlet.parent = resumer
        fiber.resumer = resumer
        previous, self._current = self._current, fiber
        logger.trace("entering %r", fiber)
        try:
            return switch(arg)
        finally:
            self._current = previous
