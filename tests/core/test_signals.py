# topmark:header:start
#
#   project      : Coroline
#   file         : test_signals.py
#   file_relpath : tests/core/test_signals.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for in-band signals and handler chaining."""

from __future__ import annotations

from typing import Any

import pytest

from coroline.core.signals import ContinueInline, Signal, Suspend, first_handled


def test_signals_are_distinct_from_application_values() -> None:
    for value in (None, 0, "", False, "continue-after-yield", "not-handled"):
        assert value is not Signal.CONTINUE_AFTER_YIELD
        assert value != Signal.NOT_HANDLED
    assert Signal.CONTINUE_AFTER_YIELD is not Signal.NOT_HANDLED
    assert repr(Signal.NOT_HANDLED) == "<Signal.NOT_HANDLED>"


def test_outcome_wrappers_are_frozen_values() -> None:
    assert Suspend(1) == Suspend(1)
    assert ContinueInline() == ContinueInline(None)
    assert Suspend(1) != ContinueInline(1)
    with pytest.raises(AttributeError):
        Suspend(1).value = 2  # type: ignore[misc]


def test_first_handled_skips_unhandled() -> None:
    calls: list[str] = []

    def numbers(x: Any) -> Any:
        calls.append("numbers")
        return x * 2 if isinstance(x, int) else Signal.NOT_HANDLED

    def strings(x: Any) -> Any:
        calls.append("strings")
        return x.upper() if isinstance(x, str) else Signal.NOT_HANDLED

    assert first_handled([numbers, strings], "ab") == "AB"
    assert calls == ["numbers", "strings"]

    calls.clear()
    assert first_handled([numbers, strings], 4) == 8
    assert calls == ["numbers"]


def test_first_handled_keeps_falsy_results() -> None:
    assert first_handled([lambda: None, lambda: 1]) is None


def test_first_handled_with_no_match() -> None:
    assert first_handled([lambda _x: Signal.NOT_HANDLED], 1) is Signal.NOT_HANDLED
    assert first_handled([]) is Signal.NOT_HANDLED
