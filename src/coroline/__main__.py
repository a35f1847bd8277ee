# topmark:header:start
#
#   project      : Coroline
#   file         : __main__.py
#   file_relpath : src/coroline/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Coroline via ``python -m coroline``.

Equivalent to running the ``coroline`` console script; it delegates to
:func:`coroline.cli.main.cli`.

Examples:
    Show the effective engine configuration::

        python -m coroline config --format json
"""

from __future__ import annotations

from coroline.cli.main import cli

if __name__ == "__main__":
    cli()
