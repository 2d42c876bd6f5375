# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value types and consumption policies shared by the argwire parser.

Contents:
- `Nargs`: how many value tokens an argument may claim (`?`, `*`, `+`).
- `normalize_nargs`: validate a user supplied `nargs` (a `Nargs`, its symbol or
  name, or a positive exact count).
- `is_marker`: the optional-marker test applied to every token.
- Fixed-width numeric types (`Int32`, `Int64`, `UInt32`, `UInt64`, `Float32`,
  `Float64`). They are plain `int`/`float` subclasses whose constructors
  enforce the range of the width, so they work as placeholder types anywhere
  an `int` or `float` would.
"""
from __future__ import annotations

import math
import struct
from enum import Enum

MARKER_PREFIX = "--"


def is_marker(token: str) -> bool:
    """Return True if `token` names an optional argument (`--name`, not bare `--`)."""
    return token.startswith(MARKER_PREFIX) and len(token) > len(MARKER_PREFIX)


class Nargs(Enum):
    """
    Consumption policy for an argument.

    Members:
        AT_MOST_ONE: Zero or one value (`?`). Satisfied once one value is claimed.
        ANY: Zero or more values (`*`). Stops at the next marker or end of input.
        AT_LEAST_ONE: One or more values (`+`). Claiming nothing is an error.

    Example:
        Nargs("+") → Nargs.AT_LEAST_ONE
        Nargs("any") → Nargs.ANY
    """

    AT_MOST_ONE = "?"
    ANY = "*"
    AT_LEAST_ONE = "+"

    @classmethod
    def _missing_(cls, value: object) -> Nargs:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().upper().replace("-", "_")
        for member in cls:
            if member.name == normalized:
                return member
        valid = ", ".join(f"{member.value} ({member.name})" for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


def normalize_nargs(nargs: Nargs | str | int) -> Nargs | int:
    """
    Validate `nargs` and return either a `Nargs` member or an exact positive count.

    Raises:
        ValueError: If `nargs` is not a recognised policy or a positive integer.
    """
    if isinstance(nargs, Nargs):
        return nargs
    if isinstance(nargs, bool):
        raise ValueError(f"Invalid nargs value: {nargs!r}")
    if isinstance(nargs, int):
        if nargs <= 0:
            raise ValueError("nargs must be a positive integer")
        return nargs
    return Nargs(nargs)


class _BoundedInt(int):
    minimum: int = 0
    maximum: int = 0

    def __new__(cls, value=0):
        number = super().__new__(cls, value)
        if not cls.minimum <= number <= cls.maximum:
            raise ValueError(
                f"{int(number)} is out of range for {cls.__name__} "
                f"[{cls.minimum}, {cls.maximum}]"
            )
        return number


class Int32(_BoundedInt):
    """Signed 32-bit integer."""

    minimum = -(2**31)
    maximum = 2**31 - 1


class Int64(_BoundedInt):
    """Signed 64-bit integer."""

    minimum = -(2**63)
    maximum = 2**63 - 1


class UInt32(_BoundedInt):
    """Unsigned 32-bit integer. Negative input is rejected rather than wrapped."""

    minimum = 0
    maximum = 2**32 - 1


class UInt64(_BoundedInt):
    """Unsigned 64-bit integer. Negative input is rejected rather than wrapped."""

    minimum = 0
    maximum = 2**64 - 1


class Float32(float):
    """Single precision float; values are rounded to the nearest float32."""

    def __new__(cls, value=0.0):
        number = float(value)
        try:
            rounded = struct.unpack("f", struct.pack("f", number))[0]
        except OverflowError as error:
            raise ValueError(f"{value!r} is out of range for {cls.__name__}") from error
        if math.isinf(rounded) and not math.isinf(number):
            raise ValueError(f"{value!r} is out of range for {cls.__name__}")
        return super().__new__(cls, rounded)


class Float64(float):
    """Double precision float."""
