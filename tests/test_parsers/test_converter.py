import math
import struct
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Optional

import pytest

from argwire.exceptions import ConversionError, UnsupportedTypeError
from argwire.parser import (
    Converter,
    Float32,
    Float64,
    Int32,
    Int64,
    UInt32,
    UInt64,
    convert,
    zero_value,
)


class Color(Enum):
    RED = 1
    GREEN = 2


class Version:
    def __init__(self, text: str) -> None:
        self.parts = tuple(int(part) for part in text.split("."))


def shout(value: str) -> str:
    return value.upper()


# --- Tests ---
@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("-7", int, -7),
        ("3.14", float, 3.14),
        ("hello", str, "hello"),
        ("true", bool, True),
        ("1", bool, True),
        ("2147483647", Int32, 2147483647),
        ("-9223372036854775808", Int64, -(2**63)),
        ("4294967295", UInt32, 2**32 - 1),
        ("18446744073709551615", UInt64, 2**64 - 1),
        ("2.5", Float64, 2.5),
        ("a/b", Path, Path("a/b")),
    ],
)
def test_convert_basic(value, target_type, expected):
    result = convert(value, target_type)
    assert result == expected
    assert isinstance(result, target_type)


@pytest.mark.parametrize("value", ["0", "false", "True", "yes", "on", "TRUE"])
def test_convert_bool_only_accepts_one_and_true(value):
    assert convert(value, bool) is False


@pytest.mark.parametrize(
    "target_type, expected",
    [
        (str, ""),
        (bool, False),
        (int, 0),
        (float, 0.0),
        (Int32, 0),
        (UInt64, 0),
        (Float32, 0.0),
        (list[int], []),
        (set[str], set()),
        (tuple[int, ...], ()),
    ],
)
def test_convert_empty_returns_zero_value(target_type, expected):
    assert convert("", target_type) == expected
    assert zero_value(target_type) == expected


def test_convert_empty_without_natural_zero_is_none():
    assert convert("", Color) is None
    assert convert("", datetime) is None
    assert convert("", Optional[int]) is None
    assert convert("", Version) is None


@pytest.mark.parametrize(
    "value, target_type",
    [
        (7, int),
        (-3, int),
        (2.5, float),
        ("text", str),
        (True, bool),
        (2**31 - 1, Int32),
        (2**64 - 1, UInt64),
    ],
)
def test_convert_round_trip(value, target_type):
    rendered = str(value).lower() if isinstance(value, bool) else str(value)
    assert convert(rendered, target_type) == value


@pytest.mark.parametrize(
    "value, target_type",
    [
        ("abc", int),
        ("1.5", int),
        ("nope", float),
        ("2147483648", Int32),
        ("-1", UInt32),
        ("18446744073709551616", UInt64),
        ("1e39", Float32),
    ],
)
def test_convert_malformed_raises(value, target_type):
    with pytest.raises(ConversionError) as excinfo:
        convert(value, target_type)
    assert excinfo.value.token == value


@pytest.mark.parametrize("value", ["1e39", "-1e39", "3.5e38"])
def test_float32_overflow_is_rejected(value):
    with pytest.raises(ConversionError):
        convert(value, Float32)


def test_float32_keeps_explicit_infinity():
    assert math.isinf(convert("inf", Float32))
    assert convert("3.4e38", Float32) > 3e38


def test_float32_rounds_to_single_precision():
    value = convert("0.1", Float32)
    assert isinstance(value, Float32)
    assert value == struct.unpack("f", struct.pack("f", 0.1))[0]
    assert value != 0.1


def test_convert_containers_split_on_spaces():
    assert convert("1 2  3", list[int]) == [1, 2, 3]
    assert convert("1 2", tuple[int, ...]) == (1, 2)
    assert convert("a b a", set[str]) == {"a", "b"}
    assert convert("x y", frozenset) == frozenset({"x", "y"})
    assert convert("a b", list) == ["a", "b"]


def test_convert_container_element_errors_name_the_part():
    with pytest.raises(ConversionError) as excinfo:
        convert("1 two 3", list[int])
    assert excinfo.value.token == "two"


def test_convert_enum_by_name_and_value():
    assert convert("RED", Color) is Color.RED
    assert convert("2", Color) is Color.GREEN
    with pytest.raises(ConversionError):
        convert("BLUE", Color)


def test_convert_datetime():
    assert convert("2024-01-02", datetime) == datetime(2024, 1, 2)
    with pytest.raises(ConversionError):
        convert("not a date", datetime)


def test_convert_literal():
    assert convert("fast", Literal["fast", "slow"]) == "fast"
    with pytest.raises(ConversionError):
        convert("medium", Literal["fast", "slow"])


def test_convert_union_tries_members_in_order():
    assert convert("3", int | float) == 3
    assert convert("3.5", int | float) == 3.5
    assert convert("5", Optional[int]) == 5
    with pytest.raises(ConversionError):
        convert("abc", int | float)


def test_convert_string_constructible_types():
    assert convert("1.2.3", Version).parts == (1, 2, 3)
    assert convert("abc", shout) == "ABC"


@pytest.mark.parametrize(
    "target_type",
    [
        list[list[int]],
        set[tuple[int, ...]],
        list[list],
        tuple[int, str],
        dict,
        dict[str, int],
        None,
        Optional[list[int]],
        lambda first, second: first,
    ],
)
def test_unsupported_types_fail_at_construction(target_type):
    with pytest.raises(UnsupportedTypeError):
        Converter(target_type)


def test_converter_properties():
    converter = Converter(list[Int32])
    assert converter.is_container
    assert converter.container is list
    assert converter.element_type is Int32
    assert converter.convert_elements("1 2") == [1, 2]
    assert repr(converter).startswith("Converter(list[")

    scalar = Converter(int)
    assert not scalar.is_container
    assert scalar.convert_elements("4") == [4]
    with pytest.raises(TypeError):
        scalar.assemble([4])


class Bag:
    def __init__(self, text: str = "") -> None:
        self.items = text.split(",") if text else []


def test_empty_input_returns_fresh_zero_value():
    first = convert("", Bag)
    first.items.append("x")

    assert convert("", Bag).items == []
    assert zero_value(Bag).items == []
    assert zero_value(list[int]) is not zero_value(list[int])
