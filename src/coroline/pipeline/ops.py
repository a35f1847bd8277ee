# topmark:header:start
#
#   project      : Coroline
#   file         : ops.py
#   file_relpath : src/coroline/pipeline/ops.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The overridable pipeline operations and the mod contract.

`PipelineOps` is an immutable table of the five factory/lifecycle operations.
Each operation receives the owning [`Pipeline`][coroline.pipeline.registry.Pipeline]
as its first argument, and must call back into the pipeline (not into another
op directly) for nested operations so that overrides stay effective.

A *mod* is a callable ``mod(ops) -> overrides`` receiving the current table and
returning the operations it replaces, typically wrapping the ones it was given:

    ```python
    def audit(base: PipelineOps) -> dict[str, Callable[..., Any]]:
        def release_coro(pipeline: Pipeline, co: Coroutine) -> None:
            print("released", co)
            base.release_coro(pipeline, co)

        return {"release_coro": release_coro}
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Sequence, Union

from coroline.errors import UnknownOperationError

if TYPE_CHECKING:
    from coroline.coroutine import Coroutine
    from coroline.fiber.model import Fiber
    from coroline.pipeline.registry import Pipeline
    from coroline.protocol import CoroProtocol

FiberBody = Callable[[], None]

AcquireCoroOp = Callable[
    ["Pipeline", "CoroProtocol", Callable[..., Any], Sequence[Any], Any, Mapping[str, Any]],
    "Coroutine",
]
ReleaseCoroOp = Callable[["Pipeline", "Coroutine"], None]
AcquireFiberOp = Callable[["Pipeline", Callable[[], Any]], "Fiber"]
ReleaseFiberOp = Callable[["Pipeline", "Fiber"], None]
CreateFiberBodyOp = Callable[["Pipeline", "CoroProtocol", Callable[[], "Coroutine"]], FiberBody]


@dataclass(frozen=True, slots=True)
class PipelineOps:
    """Immutable table of the five overridable operations."""

    acquire_coro: AcquireCoroOp
    release_coro: ReleaseCoroOp
    acquire_fiber: AcquireFiberOp
    release_fiber: ReleaseFiberOp
    create_fiber_body: CreateFiberBodyOp

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the operation names, in declaration order."""
        return tuple(f.name for f in fields(cls))

    def with_overrides(self, overrides: Mapping[str, Callable[..., Any]]) -> PipelineOps:
        """Return a copy with the given operations replaced.

        Raises:
            UnknownOperationError: If a key does not name an operation.
            TypeError: If a replacement is not callable.
        """
        known = self.names()
        unknown = sorted(k for k in overrides if k not in known)
        if unknown:
            raise UnknownOperationError(
                f"Unknown pipeline operation(s): {', '.join(unknown)} "
                f"(expected any of {', '.join(known)})"
            )
        for name, op in overrides.items():
            if not callable(op):
                raise TypeError(f"Override for {name!r} is not callable: {op!r}")
        return replace(self, **overrides)


ModResult = Optional[Union[PipelineOps, Mapping[str, Callable[..., Any]]]]
Mod = Callable[[PipelineOps], ModResult]
