# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentAction`, the enum naming what an `Argument` does with the
values it claims.

Accepts its members, their string values, or a few config-friendly aliases, so
YAML/TOML parser definitions can spell actions as plain strings.

Example:
    ArgumentAction("store")  → ArgumentAction.STORE
    ArgumentAction("extend") → ArgumentAction.APPEND (via alias)
"""
from __future__ import annotations

from enum import Enum


class ArgumentAction(Enum):
    """
    Defines the action to be taken when an argument claims a value.

    Members:
        STORE: Convert the value and write it to the binding (default). Container
            bindings collect every value claimed in one match.
        APPEND: Container bindings only; values collect across every match of the
            argument within one parse.
        COUNT: Write the number of times the marker was matched. Claims no values.

    Aliases:
        - "extend" → "append"
        - "counter" → "count"
    """

    STORE = "store"
    APPEND = "append"
    COUNT = "count"

    @classmethod
    def choices(cls) -> list[ArgumentAction]:
        """Return a list of all argument actions."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "extend": "append",
            "counter": "count",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgumentAction:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the argument action."""
        return self.value
