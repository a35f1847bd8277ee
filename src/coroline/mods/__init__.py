# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/mods/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in pipeline mods.

Each factory returns a mod to pass to
[`Pipeline.use`][coroline.pipeline.registry.Pipeline.use].
"""

from __future__ import annotations

from coroline.mods.max_concurrency import max_concurrency
from coroline.mods.tracing import TraceStats, tracing

__all__ = [
    "TraceStats",
    "max_concurrency",
    "tracing",
]
