# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative parser definitions loaded from YAML or TOML.

A definition names the parser's groups and arguments; type names are resolved
through `TYPE_REGISTRY`. `load_parser()` builds a `Parser` and returns it with
one `Placeholder` per argument, keyed by the argument's bare name.

Example (YAML):
    description: copy files
    arguments:
      - name: --verbose
        type: bool
      - name: files
        type: list[str]
        nargs: "+"
    groups:
      - name: network
        arguments:
          - name: --port
            type: uint32
            default: 8080
"""
from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from argwire.exceptions import ArgumentConfigError, ConversionError
from argwire.logger import logger
from argwire.parser.argument import Argument
from argwire.parser.binding import Placeholder
from argwire.parser.converter import Converter
from argwire.parser.group import ArgumentGroup
from argwire.parser.parser import DEFAULT_GROUP, Parser
from argwire.parser.parser_types import Float32, Float64, Int32, Int64, UInt32, UInt64

TYPE_REGISTRY: dict[str, Any] = {
    "str": str,
    "string": str,
    "bool": bool,
    "int": int,
    "float": float,
    "int32": Int32,
    "int64": Int64,
    "uint32": UInt32,
    "uint64": UInt64,
    "float32": Float32,
    "float64": Float64,
    "datetime": datetime,
    "path": Path,
}

CONTAINER_REGISTRY: dict[str, Any] = {
    "list": list,
    "set": set,
    "frozenset": frozenset,
    "tuple": tuple,
}

_CONTAINER_PATTERN = re.compile(r"^(\w+)\[(.+)\]$")


def resolve_type(name: str) -> Any:
    """
    Resolve a type name such as `int`, `uint32` or `list[float]`.

    Raises:
        ValueError: If the name, or the element name of a container, is unknown.
    """
    normalized = name.strip().lower()
    match = _CONTAINER_PATTERN.match(normalized)
    if match:
        container_name, element_name = match.groups()
        container = CONTAINER_REGISTRY.get(container_name)
        if container is None:
            raise ValueError(f"Unknown container type '{container_name}'")
        element = resolve_type(element_name)
        if container is tuple:
            return tuple[element, ...]
        return container[element]
    if normalized in CONTAINER_REGISTRY:
        return CONTAINER_REGISTRY[normalized]
    if normalized not in TYPE_REGISTRY:
        valid = ", ".join(TYPE_REGISTRY)
        raise ValueError(f"Unknown type '{name}'. Must be one of: {valid}")
    return TYPE_REGISTRY[normalized]


class RawArgument(BaseModel):
    """Raw argument model for argwire parser definitions."""

    name: str
    type: str = "str"
    nargs: str | int = "?"
    action: str = "store"
    default: Any = None
    choices: list[str] | None = None
    required: bool | None = None
    help: str = ""

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        resolve_type(value)
        return value

    @field_validator("choices", mode="before")
    @classmethod
    def stringify_choices(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [str(choice) for choice in value]
        return value


class RawGroup(BaseModel):
    """Raw group model for argwire parser definitions."""

    name: str
    description: str = ""
    arguments: list[RawArgument] = Field(default_factory=list)


class ParserConfig(BaseModel):
    """Parser definition model; top-level `arguments` go to the default group."""

    description: str = ""
    default_group: str = DEFAULT_GROUP
    arguments: list[RawArgument] = Field(default_factory=list)
    groups: list[RawGroup] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_groups(self) -> ParserConfig:
        names = [group.name for group in self.groups]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate group names: {', '.join(sorted(duplicates))}")
        return self


def _coerce_default(default: Any, converter: Converter) -> Any:
    if default is None:
        return None
    if isinstance(default, str):
        return converter.convert(default)
    if converter.is_container and isinstance(default, (list, tuple, set)):
        return converter.assemble(
            element
            for item in default
            for element in converter.convert_elements(str(item))
        )
    return default


def _build_argument(raw: RawArgument) -> tuple[Argument, Placeholder]:
    try:
        placeholder: Placeholder = Placeholder(resolve_type(raw.type))
    except ConversionError as error:
        raise ArgumentConfigError(
            f"Type '{raw.type}' for '{raw.name}' is not supported: {error}"
        ) from error
    try:
        default = _coerce_default(raw.default, Converter(placeholder.target_type))
    except ConversionError as error:
        raise ArgumentConfigError(
            f"Default value {raw.default!r} for '{raw.name}' is invalid: {error}"
        ) from error
    argument = Argument(
        raw.name,
        placeholder,
        nargs=raw.nargs,
        action=raw.action,
        default=default,
        choices=raw.choices,
        required=raw.required,
        help=raw.help,
    )
    return argument, placeholder


def build_parser(config: ParserConfig) -> tuple[Parser, dict[str, Placeholder]]:
    """Build a `Parser` from a validated definition."""
    parser = Parser(config.description, default_group=config.default_group)
    placeholders: dict[str, Placeholder] = {}

    def add(raw: RawArgument, group: str) -> None:
        argument, placeholder = _build_argument(raw)
        parser.add_argument(argument, group=group)
        placeholders[argument.dest] = placeholder

    for raw in config.arguments:
        add(raw, config.default_group)

    for raw_group in config.groups:
        if raw_group.name == config.default_group:
            parser.get_group(raw_group.name).description = raw_group.description
        else:
            parser.add_argument_group(ArgumentGroup(raw_group.name, raw_group.description))
        for raw in raw_group.arguments:
            add(raw, raw_group.name)

    logger.debug("Built %s from definition", parser)
    return parser, placeholders


def load_config(file_path: str | Path) -> ParserConfig:
    """
    Read and validate a parser definition from a `.yaml`, `.yml` or `.toml` file.

    Raises:
        ArgumentConfigError: The file is missing, malformed or invalid.
    """
    path = Path(file_path)
    if not path.is_file():
        raise ArgumentConfigError(f"Parser definition not found: {path}")

    suffix = path.suffix.lower()
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ArgumentConfigError(f"Unsupported parser definition format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise ArgumentConfigError(f"Could not read {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ArgumentConfigError(f"Parser definition in {path} must be a mapping")

    try:
        return ParserConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ArgumentConfigError(f"Invalid parser definition in {path}: {error}") from error


def load_parser(file_path: str | Path) -> tuple[Parser, dict[str, Placeholder]]:
    """Load a parser definition file and build the parser it describes."""
    config = load_config(file_path)
    logger.debug("Loaded parser definition from %s", file_path)
    return build_parser(config)
