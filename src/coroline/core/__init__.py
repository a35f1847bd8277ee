# topmark:header:start
#
#   project      : Coroline
#   file         : __init__.py
#   file_relpath : src/coroline/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core utilities shared across Coroline (no engine dependencies)."""
