# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
String-to-value conversion for argwire arguments.

A `Converter` is built once per argument, when the argument is declared, and
reused for every token that argument claims. Building it is where unsupported
types are rejected, so a misconfigured parser fails before any token is read.

Supported targets:
- `str`, `bool`, `int`, `float` and the fixed-width types from `parser_types`
- `Enum` subclasses (matched by member name, then by value)
- `datetime` (parsed with `dateutil`)
- `Literal[...]` and `Optional[...]` / unions of the above
- any other class or one-argument callable, called with the raw string
- `list`, `tuple`, `set` and `frozenset` of any of the above; the raw input is
  split on spaces and each non-empty part converted separately

Empty input is never an error: it converts to the target's zero value.

Booleans follow a deliberately narrow rule: only `"1"` and `"true"` are true.
Every other token, including `"yes"` and `"True"`, is false.
"""
from __future__ import annotations

import functools
import inspect
import types
from copy import deepcopy
from datetime import datetime
from enum import Enum, EnumMeta
from typing import Any, Callable, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

from argwire.exceptions import ConversionError, UnsupportedTypeError

TRUE_TOKENS = frozenset({"1", "true"})
CONTAINER_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)
UNSUPPORTED_TYPES: tuple[type, ...] = (dict, bytes, bytearray, type(None))


def type_name(target_type: Any) -> str:
    """Return a readable name for a type or typing construct."""
    if isinstance(target_type, type) and not get_args(target_type):
        return target_type.__name__
    return str(target_type).replace("typing.", "")


def convert_bool(value: str) -> bool:
    """Return True only for the exact tokens "1" and "true"."""
    return value in TRUE_TOKENS


def convert_enum(value: str, enum_type: EnumMeta) -> Any:
    """
    Convert a string to an Enum member by name, then by (coerced) value.

    Raises:
        ValueError: If the value does not resolve to a member.
    """
    try:
        return enum_type[value]
    except KeyError:
        pass

    base_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(base_type(value))
    except (ValueError, TypeError):
        values = [str(member.value) for member in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def convert_datetime(value: str) -> datetime:
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"'{value}' could not be parsed as a datetime") from error


def _is_container(target_type: Any) -> bool:
    return target_type in CONTAINER_TYPES or get_origin(target_type) in CONTAINER_TYPES


def _accepts_one_argument(function: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind("")
    except TypeError:
        return False
    return True


def _zero_for(target_type: Any) -> Any:
    if not isinstance(target_type, type) or isinstance(target_type, EnumMeta):
        return None
    try:
        return target_type()
    except (TypeError, ValueError):
        return None


class Converter:
    """
    Converts raw tokens into one target type.

    Attributes:
        target_type (Any): The requested type, as declared.
        container (type | None): The container class for sequence targets.
        element_type (Any): The scalar type each token part converts to.
        zero (Any): The value produced for empty input.
    """

    def __init__(self, target_type: Any) -> None:
        self.target_type = target_type
        self.container: type | None = None
        self.element_type: Any = target_type

        if _is_container(target_type):
            self.container = get_origin(target_type) or target_type
            self.element_type = self._element_type(target_type)
            if _is_container(self.element_type):
                raise UnsupportedTypeError(
                    f"Nested containers are not supported: {type_name(target_type)}",
                    target_type=target_type,
                )

        self._convert_scalar = self._build_scalar(self.element_type)
        if self.container is not None:
            self.zero: Any = self.container()
        else:
            self.zero = _zero_for(target_type)

    @property
    def is_container(self) -> bool:
        return self.container is not None

    @staticmethod
    def _element_type(target_type: Any) -> Any:
        args = get_args(target_type)
        if not args:
            return str
        origin = get_origin(target_type)
        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                return args[0]
            if len(set(args)) != 1:
                raise UnsupportedTypeError(
                    f"Heterogeneous tuples are not supported: {type_name(target_type)}",
                    target_type=target_type,
                )
        return args[0]

    def _build_scalar(self, target_type: Any) -> Callable[[str], Any]:
        origin = get_origin(target_type)
        args = get_args(target_type)

        if origin is Literal:
            literals = {str(arg): arg for arg in args}

            def convert_literal(value: str) -> Any:
                if value not in literals:
                    raise ValueError(f"'{value}' is not one of {{{', '.join(literals)}}}")
                return literals[value]

            return convert_literal

        if isinstance(target_type, types.UnionType) or origin is Union:
            members = [arg for arg in args if arg is not type(None)]
            if any(_is_container(member) for member in members):
                raise UnsupportedTypeError(
                    f"Containers inside unions are not supported: {type_name(target_type)}",
                    target_type=target_type,
                )
            converters = [self._build_scalar(member) for member in members]
            if len(converters) == 1:
                return converters[0]

            def convert_union(value: str) -> Any:
                for converter in converters:
                    try:
                        return converter(value)
                    except (ValueError, TypeError, ArithmeticError):
                        continue
                raise ValueError(f"'{value}' could not be coerced to any of {members}")

            return convert_union

        if origin is not None or target_type in UNSUPPORTED_TYPES:
            raise UnsupportedTypeError(
                f"Unsupported type: {type_name(target_type)}", target_type=target_type
            )

        if target_type is str:
            return str
        if target_type is bool:
            return convert_bool
        if isinstance(target_type, EnumMeta):
            return functools.partial(convert_enum, enum_type=target_type)
        if target_type is datetime:
            return convert_datetime
        if isinstance(target_type, type):
            return target_type
        if callable(target_type) and _accepts_one_argument(target_type):
            return target_type

        raise UnsupportedTypeError(
            f"Unsupported type: {type_name(target_type)}", target_type=target_type
        )

    def convert(self, value: str) -> Any:
        """
        Convert `value` to the target type.

        Raises:
            ConversionError: If the value (or any part of it) is malformed.
        """
        if value == "":
            return self.assemble([]) if self.is_container else deepcopy(self.zero)
        if self.is_container:
            return self.assemble(
                self._convert_part(part) for part in value.split(" ") if part
            )
        return self._convert_part(value)

    def convert_elements(self, value: str) -> list[Any]:
        """Convert `value` into a flat list of elements, for accumulating targets."""
        if not self.is_container:
            return [self.convert(value)]
        return [self._convert_part(part) for part in value.split(" ") if part]

    def assemble(self, values: Any) -> Any:
        """Build the target container from converted elements."""
        if self.container is None:
            raise TypeError(f"{type_name(self.target_type)} is not a container type")
        return self.container(values)

    def _convert_part(self, value: str) -> Any:
        try:
            return self._convert_scalar(value)
        except (ValueError, TypeError, ArithmeticError) as error:
            raise ConversionError(
                f"'{value}' is not a valid {type_name(self.element_type)}: {error}",
                token=value,
                target_type=self.target_type,
            ) from error

    def __repr__(self) -> str:
        return f"Converter({type_name(self.target_type)})"


@functools.lru_cache(maxsize=None)
def get_converter(target_type: Any) -> Converter:
    """Return a shared `Converter` for `target_type`."""
    return Converter(target_type)


def convert(value: str, target_type: Any) -> Any:
    """Convert `value` to `target_type` using a cached converter."""
    return get_converter(target_type).convert(value)


def zero_value(target_type: Any) -> Any:
    """Return the value empty input converts to for `target_type`."""
    return deepcopy(get_converter(target_type).zero)
