"""
Argwire

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .logger import logger
from .parser import (
    Argument,
    ArgumentAction,
    ArgumentGroup,
    AttributeBinding,
    ItemBinding,
    Nargs,
    Parser,
    Placeholder,
)

__all__ = [
    "Argument",
    "ArgumentAction",
    "ArgumentGroup",
    "AttributeBinding",
    "ItemBinding",
    "Nargs",
    "Parser",
    "Placeholder",
    "logger",
]
