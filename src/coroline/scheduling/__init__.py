# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/scheduling/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Task queues used to defer resumptions and cleanups."""

from __future__ import annotations

from coroline.scheduling.queue import (
    AsyncioTaskQueue,
    LocalTaskQueue,
    TaskQueue,
    TaskQueueKind,
    make_task_queue,
)

__all__ = [
    "AsyncioTaskQueue",
    "LocalTaskQueue",
    "TaskQueue",
    "TaskQueueKind",
    "make_task_queue",
]
