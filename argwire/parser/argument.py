# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Argument`, one declared optional (`--name`) or positional (`name`)
argument and the rules it follows when claiming tokens.

An argument is built once while the parser is assembled. Construction binds it
to a caller-owned destination (a `Binding`) and to one `Converter` for the
destination's type, so unsupported types and bad choices fail immediately.

During a parse the argument is driven by its group:

- optional arguments start claiming values only after the group has matched
  their marker token (`match_marker()` then `consume()`);
- positional arguments start claiming values when their turn arrives.

Stopping rule while claiming: stop at end of input, at the next optional
marker, or once `nargs` is satisfied by count (`?` after one value, an exact
count N after N values). `*` and `+` only stop at a marker or end of input.

Boolean optional arguments with `nargs="?"` are satisfied by the marker alone
and never take the following token as a value; `--flag` binds True. An
explicit value is given inline: `--flag=false`.

Counters (`consumed_flag_count`, `consumed_value_count`) and the destination
are restored by `reset()`, which `Parser.parse()` calls on every argument
before reading any token.
"""
from __future__ import annotations

from collections import deque
from copy import deepcopy
from typing import Any, Callable, Iterable, TextIO, get_origin

from rich.console import Console

from argwire.exceptions import (
    ArgumentConfigError,
    ArgumentParseError,
    ConversionError,
    InvalidChoiceError,
    MissingValueError,
)
from argwire.logger import logger
from argwire.parser.argument_action import ArgumentAction
from argwire.parser.binding import Binding
from argwire.parser.converter import Converter, type_name
from argwire.parser.parser_types import MARKER_PREFIX, Nargs, is_marker, normalize_nargs

CustomAction = Callable[[Binding, Any], None]


class Argument:
    """
    Represents a command-line argument.

    Attributes:
        name (str): `--name` for optional arguments, `name` for positional ones.
        dest (str): The name without the marker prefix, dashes replaced by `_`.
        binding (Binding): The destination this argument writes to.
        converter (Converter): Converter for the binding's declared type.
        nargs (Nargs | int): How many values the argument claims per match.
        action (ArgumentAction | CustomAction): What is done with each value.
        default (Any): Value restored into the binding at the start of each parse.
        choices (list[str]): Allowed raw tokens. Empty means anything goes.
        required (bool): True if the parse fails when the argument is unsatisfied.
        help (str): Description used for help rendering.
        consumed_flag_count (int): Times the marker was matched in this parse.
        consumed_value_count (int): Value tokens claimed in this parse. For
            bounded `nargs` (`?` or N) only the latest match is counted, so
            the count never exceeds the bound.
    """

    def __init__(
        self,
        name: str,
        binding: Binding,
        *,
        nargs: Nargs | str | int = Nargs.AT_MOST_ONE,
        action: ArgumentAction | str | CustomAction = ArgumentAction.STORE,
        default: Any = None,
        choices: Iterable[str] | None = None,
        required: bool | None = None,
        help: str = "",
    ) -> None:
        self.name: str = self._validate_name(name)
        self.is_optional: bool = is_marker(self.name)
        self.dest: str = self.name.removeprefix(MARKER_PREFIX).replace("-", "_")
        if not isinstance(binding, Binding):
            raise ArgumentConfigError(
                f"Argument '{self.name}' needs a Binding, got {type(binding).__name__}"
            )
        self.binding: Binding = binding
        self.converter: Converter = Converter(binding.target_type)
        self.action: ArgumentAction | CustomAction = self._validate_action(action)
        self.nargs: Nargs | int = self._validate_nargs(nargs)
        self.choices: list[str] = self._normalize_choices(choices)
        self._explicit_default: bool = default is not None
        self.default: Any = deepcopy(binding.get()) if default is None else default
        self.required: bool = self._determine_required(required)
        self.help: str = help

        self.consumed_flag_count: int = 0
        self.consumed_value_count: int = 0
        self._match_count: int = 0
        self._elements: list[Any] = []

    @staticmethod
    def _validate_name(name: str) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ArgumentConfigError("Argument name must be a non-empty string")
        if any(char.isspace() for char in name):
            raise ArgumentConfigError(f"Argument name '{name}' must not contain spaces")
        if "=" in name:
            raise ArgumentConfigError(f"Argument name '{name}' must not contain '='")
        if name.startswith("-") and not is_marker(name):
            raise ArgumentConfigError(
                f"Argument name '{name}' must be '{MARKER_PREFIX}name' or a bare name"
            )
        return name

    def _validate_action(
        self, action: ArgumentAction | str | CustomAction
    ) -> ArgumentAction | CustomAction:
        if not isinstance(action, ArgumentAction):
            if callable(action):
                return action
            try:
                action = ArgumentAction(action)
            except ValueError as error:
                raise ArgumentConfigError(str(error)) from error
        if action is ArgumentAction.COUNT:
            if not self.is_optional:
                raise ArgumentConfigError(
                    f"Action '{action}' cannot be used with positional argument '{self.name}'"
                )
            target = self.binding.target_type
            is_int = (
                isinstance(target, type)
                and get_origin(target) is None
                and issubclass(target, int)
            )
            if not is_int or target is bool:
                raise ArgumentConfigError(
                    f"Action '{action}' needs an integer binding, got {type_name(target)}"
                )
        if action is ArgumentAction.APPEND and not self.converter.is_container:
            raise ArgumentConfigError(
                f"Action '{action}' needs a container binding, "
                f"got {type_name(self.binding.target_type)}"
            )
        return action

    def _validate_nargs(self, nargs: Nargs | str | int) -> Nargs | int:
        try:
            nargs = normalize_nargs(nargs)
        except ValueError as error:
            raise ArgumentConfigError(str(error)) from error
        if self.action is ArgumentAction.COUNT and nargs is not Nargs.AT_MOST_ONE:
            raise ArgumentConfigError(f"nargs cannot be specified for {self.action} actions")
        return nargs

    def _normalize_choices(self, choices: Iterable[str] | None) -> list[str]:
        if choices is None:
            return []
        if isinstance(choices, (str, dict)):
            raise ArgumentConfigError("choices must be a list, tuple or set of strings")
        normalized = [str(choice) for choice in choices]
        for choice in normalized:
            try:
                self.converter.convert(choice)
            except ConversionError as error:
                raise ArgumentConfigError(
                    f"Invalid choice {choice!r} for '{self.name}': {error}"
                ) from error
        return normalized

    def _determine_required(self, required: bool | None) -> bool:
        if required is None:
            return self.minimum_values > 0
        if required and self.action is ArgumentAction.COUNT:
            raise ArgumentConfigError(
                f"Argument with action {self.action} cannot be required"
            )
        return bool(required)

    @property
    def is_boolean(self) -> bool:
        return self.binding.is_boolean

    @property
    def minimum_values(self) -> int:
        """The fewest values one match must claim."""
        if isinstance(self.nargs, int):
            return self.nargs
        return 1 if self.nargs is Nargs.AT_LEAST_ONE else 0

    @property
    def maximum_values(self) -> int | None:
        """The most values one match may claim, or None when unbounded."""
        if isinstance(self.nargs, int):
            return self.nargs
        return 1 if self.nargs is Nargs.AT_MOST_ONE else None

    def reset(self) -> None:
        """Zero the counters and restore the default into the binding."""
        self.consumed_flag_count = 0
        self.consumed_value_count = 0
        self._match_count = 0
        self._elements = []
        self.binding.set(deepcopy(self.default))

    def match_marker(self) -> None:
        """Record that the owning group matched this argument's marker."""
        assert self.is_optional, "only optional arguments have markers"
        self.consumed_flag_count += 1

    def is_satisfied(self) -> bool:
        """Return True unless the argument is required and was not supplied."""
        if not self.required:
            return True
        if self.is_optional:
            return self.consumed_flag_count > 0
        return self.consumed_value_count >= max(self.minimum_values, 1)

    def _is_full(self) -> bool:
        maximum = self.maximum_values
        return maximum is not None and self._match_count >= maximum

    def _should_stop(self, token: str) -> bool:
        return is_marker(token) or self._is_full()

    def consume(self, tokens: deque[str], inline_value: str | None = None) -> int:
        """
        Claim values from the front of `tokens` for one match of this argument.

        Args:
            tokens (deque[str]): The shared token stream; claimed tokens are removed.
            inline_value (str | None): A value given as `--name=value`, claimed first.

        Returns:
            int: The number of value tokens claimed by this match.

        Raises:
            ConversionError: A claimed token could not be converted.
            InvalidChoiceError: A claimed token is not one of `choices`.
            MissingValueError: A matched argument received fewer values than needed.
        """
        self._match_count = 0
        if self.action is not ArgumentAction.APPEND:
            self._elements = []
        if self.maximum_values is not None:
            self.consumed_value_count = 0

        if self.action is ArgumentAction.COUNT:
            if inline_value is not None:
                raise ArgumentParseError(f"Argument '{self.name}' does not take a value")
            self.binding.set((self.default or 0) + self.consumed_flag_count)
            return 0

        if inline_value is not None:
            self._claim(inline_value)
        elif self.is_optional and self.is_boolean and self.nargs is Nargs.AT_MOST_ONE:
            self._apply_empty()
            return 0

        while tokens and not self._should_stop(tokens[0]):
            self._claim(tokens.popleft())

        if self._match_count < self.minimum_values:
            if self.is_optional or self._match_count > 0:
                raise MissingValueError(
                    self.name, self.expected_text(), received=self._match_count
                )
        elif self._match_count == 0 and self.is_optional:
            self._apply_empty()
        return self._match_count

    def _claim(self, token: str) -> None:
        if self.choices and token not in self.choices:
            raise InvalidChoiceError(self.name, token, self.choices)
        if token == "":
            self._apply_empty()
        else:
            self._write(self._convert(token))
        self._match_count += 1
        self.consumed_value_count += 1
        logger.debug("'%s' claimed %r", self.name, token)

    def _convert(self, token: str) -> Any:
        try:
            if self.converter.is_container:
                self._elements.extend(self.converter.convert_elements(token))
                return self.converter.assemble(self._elements)
            return self.converter.convert(token)
        except ConversionError as error:
            raise error.for_argument(self.name) from error

    def _apply_empty(self) -> None:
        if self.is_boolean:
            value: Any = True
        elif self._explicit_default:
            value = deepcopy(self.default)
        elif self.converter.is_container:
            value = self.converter.assemble(self._elements)
        else:
            value = deepcopy(self.converter.zero)
        self._write(value)

    def _write(self, value: Any) -> None:
        if isinstance(self.action, ArgumentAction):
            self.binding.set(value)
        else:
            self.action(self.binding, value)

    def expected_text(self) -> str:
        if isinstance(self.nargs, int):
            return f"{self.nargs} value{'s' if self.nargs > 1 else ''}"
        if self.nargs is Nargs.AT_LEAST_ONE:
            return "at least one value"
        if self.nargs is Nargs.ANY:
            return "any number of values"
        return "at most one value"

    def usage_text(self) -> str:
        """Return a usage fragment such as `--level LEVEL` or `files [files ...]`."""
        if self.action is ArgumentAction.COUNT or (
            self.is_optional and self.is_boolean and self.nargs is Nargs.AT_MOST_ONE
        ):
            return self.name

        if self.choices:
            metavar = f"{{{','.join(self.choices)}}}"
        elif self.is_optional:
            metavar = self.dest.upper()
        else:
            metavar = self.dest

        if isinstance(self.nargs, int):
            values = " ".join([metavar] * self.nargs)
        elif self.nargs is Nargs.ANY:
            values = f"[{metavar} ...]"
        elif self.nargs is Nargs.AT_LEAST_ONE:
            values = f"{metavar} [{metavar} ...]"
        elif self.is_optional:
            values = f"[{metavar}]"
        else:
            values = metavar

        return f"{self.name} {values}" if self.is_optional else values

    def describe(self, out: Console | TextIO | None = None) -> str:
        """
        Write the argument's help text to `out` and return it.

        Args:
            out (Console | TextIO | None): A rich console or any object with
                `write()`. Nothing is written when omitted.
        """
        if isinstance(out, Console):
            out.print(self.help, markup=False)
        elif out is not None:
            out.write(self.help)
        return self.help

    def __repr__(self) -> str:
        return (
            f"Argument(name={self.name!r}, type={type_name(self.binding.target_type)}, "
            f"nargs={self.nargs}, action={self.action}, required={self.required})"
        )
