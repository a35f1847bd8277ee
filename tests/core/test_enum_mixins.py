# topmark:header:start
#
#   project      : Coroline
#   file         : test_enum_mixins.py
#   file_relpath : tests/core/test_enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for KeyedStrEnum parsing."""

from __future__ import annotations

from coroline.core.enum_mixins import KeyedStrEnum
from coroline.scheduling.queue import TaskQueueKind
from tests.conftest import parametrize


class Flavour(KeyedStrEnum):
    PLAIN_VANILLA = ("plain-vanilla", "Plain vanilla", ("vanilla",))
    CHOCOLATE = ("chocolate", "Chocolate")


def test_members_carry_key_label_and_aliases() -> None:
    assert Flavour.PLAIN_VANILLA.key == "plain-vanilla"
    assert Flavour.PLAIN_VANILLA.label == "Plain vanilla"
    assert Flavour.PLAIN_VANILLA.aliases == ("vanilla",)
    assert Flavour.CHOCOLATE.aliases == ()
    assert Flavour.keys() == ("plain-vanilla", "chocolate")


def test_members_are_strings() -> None:
    assert Flavour.CHOCOLATE == "chocolate"
    assert isinstance(TaskQueueKind.LOCAL, str)


@parametrize(
    "raw, expected",
    [
        ("plain-vanilla", Flavour.PLAIN_VANILLA),
        ("Plain Vanilla", Flavour.PLAIN_VANILLA),
        ("PLAIN_VANILLA", Flavour.PLAIN_VANILLA),
        (" vanilla ", Flavour.PLAIN_VANILLA),
        ("chocolate", Flavour.CHOCOLATE),
        ("strawberry", None),
        (None, None),
    ],
)
def test_parse(raw: str | None, expected: Flavour | None) -> None:
    assert Flavour.parse(raw) is expected


def test_expected_lists_keys_for_messages() -> None:
    assert Flavour.expected() == "plain-vanilla, chocolate"
    assert TaskQueueKind.expected() == "local, asyncio"
