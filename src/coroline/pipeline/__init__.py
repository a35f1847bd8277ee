# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroutine pipeline: overridable operations, mods and the registry.

Most callers only need [`get_pipeline`][coroline.pipeline.registry.get_pipeline]
and the [`Pipeline`][coroline.pipeline.registry.Pipeline] it returns.
"""

from __future__ import annotations

from coroline.pipeline.defaults import DEFAULT_OPS
from coroline.pipeline.ops import Mod, PipelineOps
from coroline.pipeline.registry import Pipeline, get_pipeline, set_pipeline

__all__ = [
    "DEFAULT_OPS",
    "Mod",
    "Pipeline",
    "PipelineOps",
    "get_pipeline",
    "set_pipeline",
]
