# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentGroup`, one namespace of optional markers plus an ordered list
of positional arguments.

A group takes part in both parse phases:

- `consume_optional()` looks at the front token only. If it is one of the
  group's markers (`--name` or `--name=value`), the marker is popped and the
  argument claims its values; otherwise the stream is left untouched so another
  group, or the positional phase, may claim it.
- `consume_positional()` lets each positional argument, in declaration order,
  claim what it can from the remaining tokens. Filling is greedy and never
  backtracks.
"""
from __future__ import annotations

from collections import deque
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from argwire.exceptions import ArgumentConfigError, DuplicateArgumentError
from argwire.logger import logger
from argwire.parser.argument import Argument
from argwire.parser.parser_types import is_marker


class ArgumentGroup:
    """
    A named collection of arguments.

    Attributes:
        name (str): Identifier the parser registers the group under.
        description (str): Optional text shown under the group heading in help.
    """

    def __init__(self, name: str, description: str = "") -> None:
        if not isinstance(name, str) or not name.strip():
            raise ArgumentConfigError("Group name must be a non-empty string")
        self.name: str = name
        self.description: str = description
        self._positional: list[Argument] = []
        self._optional: dict[str, Argument] = {}

    @property
    def positional(self) -> list[Argument]:
        return list(self._positional)

    @property
    def optional(self) -> dict[str, Argument]:
        return dict(self._optional)

    def arguments(self) -> list[Argument]:
        """Return every argument, optional ones first."""
        return list(self._optional.values()) + self._positional

    def names(self) -> set[str]:
        return {argument.name for argument in self.arguments()}

    def find(self, name: str) -> Argument | None:
        """Return the argument declared as `name`, if any."""
        if name in self._optional:
            return self._optional[name]
        return next((arg for arg in self._positional if arg.name == name), None)

    def add_argument(self, argument: Argument) -> Argument:
        """
        Add `argument` to the positional list or the optional mapping.

        Raises:
            DuplicateArgumentError: The name is taken, or an optional and a
                positional argument would share the same bare name.
        """
        if not isinstance(argument, Argument):
            raise ArgumentConfigError(
                f"Expected an Argument, got {type(argument).__name__}"
            )
        for existing in self.arguments():
            if existing.name == argument.name or existing.dest == argument.dest:
                raise DuplicateArgumentError(argument.name, self.name)

        if argument.is_optional:
            self._optional[argument.name] = argument
        else:
            self._positional.append(argument)
        logger.debug("Group '%s' registered %r", self.name, argument)
        return argument

    def reset(self) -> None:
        for argument in self.arguments():
            argument.reset()

    def _match(self, token: str) -> tuple[Argument | None, str | None]:
        if token in self._optional:
            return self._optional[token], None
        if is_marker(token) and "=" in token:
            name, _, value = token.partition("=")
            if name in self._optional:
                return self._optional[name], value
        return None, None

    def claims(self, token: str) -> bool:
        """Return True if `token` is one of this group's markers."""
        return self._match(token)[0] is not None

    def consume_optional(self, tokens: deque[str]) -> bool:
        """
        Claim the front token if it is one of this group's markers.

        Returns:
            bool: True if the group consumed anything.
        """
        if not tokens:
            return False
        argument, inline_value = self._match(tokens[0])
        if argument is None:
            return False
        tokens.popleft()
        argument.match_marker()
        argument.consume(tokens, inline_value=inline_value)
        return True

    def consume_positional(self, tokens: deque[str]) -> None:
        """Let each positional argument, in declaration order, claim values."""
        for argument in self._positional:
            claimed = argument.consume(tokens)
            logger.debug(
                "Group '%s' positional '%s' claimed %d", self.name, argument.name, claimed
            )

    def missing(self) -> list[Argument]:
        """Return the required arguments left unsatisfied by the last parse."""
        return [argument for argument in self.arguments() if not argument.is_satisfied()]

    def describe(self, out: Console | TextIO) -> None:
        """Write the group heading and one line per argument to `out`."""
        rich_out = isinstance(out, Console)
        if rich_out:
            out.print(f"[bold cyan]{escape(self.name)}:[/]")
            if self.description:
                out.print(f"  {self.description}", style="dim", markup=False)
        else:
            out.write(f"{self.name}:\n")
            if self.description:
                out.write(f"  {self.description}\n")

        for argument in self._positional + list(self._optional.values()):
            usage = argument.usage_text()
            line = f"  {usage:<30} "
            if argument.help and len(usage) > 30:
                line = f"  {usage}\n{'':<33}"
            if rich_out:
                out.print(line, end="", markup=False)
                argument.describe(out)
            else:
                out.write(line)
                argument.describe(out)
                out.write("\n")

    def __repr__(self) -> str:
        return (
            f"ArgumentGroup(name={self.name!r}, positional={len(self._positional)}, "
            f"optional={len(self._optional)})"
        )
