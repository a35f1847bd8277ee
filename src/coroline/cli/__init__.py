# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for inspecting a Coroline installation."""

from __future__ import annotations
