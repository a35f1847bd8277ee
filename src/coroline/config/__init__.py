# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Engine configuration and logging.

Configuration is layered from built-in defaults, ``[tool.coroline]`` in
``pyproject.toml``, ``coroline.toml`` and ``COROLINE_*`` environment variables,
then frozen into an [`EngineConfig`][coroline.config.model.EngineConfig].

Submodules are imported explicitly (``coroline.config.model``,
``coroline.config.logging``): the logging layer is needed by every other
package and must stay importable on its own.
"""

from __future__ import annotations
