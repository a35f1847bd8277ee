# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coroline CLI subcommands."""

from __future__ import annotations
