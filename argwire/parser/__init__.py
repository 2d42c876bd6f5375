"""
Argwire

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Argument
from .argument_action import ArgumentAction
from .binding import AttributeBinding, Binding, ItemBinding, Placeholder
from .converter import Converter, convert, get_converter, zero_value
from .group import ArgumentGroup
from .parser import DEFAULT_GROUP, Parser
from .parser_types import (
    Float32,
    Float64,
    Int32,
    Int64,
    Nargs,
    UInt32,
    UInt64,
    is_marker,
)

__all__ = [
    "Argument",
    "ArgumentAction",
    "ArgumentGroup",
    "AttributeBinding",
    "Binding",
    "Converter",
    "DEFAULT_GROUP",
    "Float32",
    "Float64",
    "Int32",
    "Int64",
    "ItemBinding",
    "Nargs",
    "Parser",
    "Placeholder",
    "UInt32",
    "UInt64",
    "convert",
    "get_converter",
    "is_marker",
    "zero_value",
]
