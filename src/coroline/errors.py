# topmark:header:start
#
#   project      : Coroline
#   file         : errors.py
#   file_relpath : src/coroline/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the Coroline engine.

Two families exist:

- *Contract violations* signal programmer misuse of the engine (resuming a
  coroutine from itself, suspending from outside a fiber, releasing a live
  fiber, ...). They subclass `AssertionError` and are raised through
  [`ensure_contract`][coroline.errors.ensure_contract], which only checks when
  the owning pipeline runs in debug mode. They are never caught by the engine.
- *Runtime errors* (`ProtocolError`, `ConfigError`, ...) are raised regardless of
  debug mode.

Application errors raised by coroutine bodies are **not** represented here: they
are handed untouched to the coroutine's protocol.
"""

from __future__ import annotations


class CorolineError(Exception):
    """Base class for all Coroline errors."""


class ContractViolation(CorolineError, AssertionError):
    """The engine was used in a way its contract forbids."""


class PipelineLockedError(ContractViolation):
    """A mod was applied after the pipeline started servicing coroutines."""


class UnknownOperationError(CorolineError, ValueError):
    """A mod tried to override an operation the pipeline does not have."""


class ProtocolError(CorolineError):
    """A protocol returned a value the engine cannot act upon."""


class ConfigError(CorolineError, ValueError):
    """Invalid engine configuration value."""


def ensure_contract(enabled: bool, condition: bool, message: str) -> None:
    """Raise `ContractViolation` if checks are ``enabled`` and ``condition`` is false.

    Args:
        enabled (bool): Whether contract checks are active (pipeline debug mode).
        condition (bool): The invariant that must hold.
        message (str): Explanation attached to the raised exception.

    Raises:
        ContractViolation: If ``enabled`` is true and ``condition`` is false.
    """
    if enabled and not condition:
        raise ContractViolation(message)
