# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroline package.

Coroline is a calling-convention-agnostic coroutine engine. It runs plain
functions on greenlet-backed fibers, lets them suspend from arbitrarily deep
call stacks, and routes their outcome to a pluggable protocol (callbacks,
futures, ...). Every resumption and cleanup is deferred through a task queue,
and the factory operations can be overridden by mods before the engine starts
servicing coroutines.
"""

from __future__ import annotations

from coroline.core.signals import ContinueInline, Signal, Suspend, first_handled
from coroline.coroutine import Coroutine
from coroline.errors import (
    ConfigError,
    ContractViolation,
    CorolineError,
    PipelineLockedError,
    ProtocolError,
    UnknownOperationError,
)
from coroline.pipeline import Pipeline, PipelineOps, get_pipeline, set_pipeline
from coroline.protocol import CoroProtocol

__all__ = [
    "ConfigError",
    "ContinueInline",
    "ContractViolation",
    "CoroProtocol",
    "CorolineError",
    "Coroutine",
    "Pipeline",
    "PipelineLockedError",
    "PipelineOps",
    "ProtocolError",
    "Signal",
    "Suspend",
    "UnknownOperationError",
    "first_handled",
    "get_pipeline",
    "set_pipeline",
]
