# topmark:header:start
#
#   project      : Coroline
#   file         : enum_mixins.py
#   file_relpath : src/coroline/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Keyed string enums for configuration values.

Configuration values such as the task queue kind arrive as free-form strings
from TOML files, environment variables and CLI flags. A `KeyedStrEnum` member
is declared as ``(key, label, aliases)``; the key is its string value and what
gets written back out, while `parse()` also accepts the member name and the
aliases, ignoring case and treating ``-``, ``_`` and spaces alike.

Example:
    ```python
    class Kind(KeyedStrEnum):
        LOCAL = ("local", "In-process FIFO queue", ("deque",))

    assert Kind.parse("Deque") is Kind.LOCAL
    ```
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")

_SEPARATORS = re.compile(r"[\s\-_]+")


def normalize_token(raw: str) -> str:
    """Fold case and separators: ``" Plain-Vanilla "`` -> ``"plain_vanilla"``."""
    return _SEPARATORS.sub("_", raw.strip()).lower()


class KeyedStrEnum(str, Enum):
    """String enum with a machine key, a human label and parse aliases."""

    label: str
    aliases: tuple[str, ...]

    def __new__(cls: type[_KS], key: str, label: str, aliases: Iterable[str] = ()) -> _KS:
        member: _KS = str.__new__(cls, key)
        member._value_ = key
        member.label = label
        member.aliases = tuple(aliases)
        return member

    @property
    def key(self) -> str:
        """Machine key, as written to TOML and JSON."""
        return str(self.value)

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        """Machine keys of all members, in declaration order."""
        return tuple(member.key for member in cls)

    @classmethod
    def expected(cls) -> str:
        """Comma-separated keys, for "expected one of ..." messages."""
        return ", ".join(cls.keys())

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Return the member matching ``raw`` by key, name or alias; None otherwise."""
        if raw is None:
            return None
        wanted = normalize_token(raw)
        for member in cls:
            spellings = (member.key, member.name, *member.aliases)
            if any(normalize_token(s) == wanted for s in spellings):
                return member
        return None
