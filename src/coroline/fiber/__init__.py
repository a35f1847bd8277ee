# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/fiber/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution units (fibers) and the host that switches between them."""

from __future__ import annotations

from coroline.fiber.contracts import FiberHost
from coroline.fiber.host import GreenletFiberHost
from coroline.fiber.model import Fiber

__all__ = [
    "Fiber",
    "FiberHost",
    "GreenletFiberHost",
]
