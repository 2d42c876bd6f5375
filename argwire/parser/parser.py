# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Parser`, the entry point of argwire. A parser owns one
or more named `ArgumentGroup`s and runs every parse in two phases.

Phase 1 (optional arguments):
    Each group, in registration order, is offered the front token; the first
    group whose marker matches pops it and lets the argument claim its values.
    The phase ends at the first front token no group claims, or when the
    stream is empty.

Phase 2 (positional arguments):
    Each group, in registration order, fills its positional arguments from
    whatever phase 1 left, starting at that token.

After both phases every unsatisfied required argument is reported together in
one `MissingRequiredArgumentsError`, and tokens nobody claimed are reported in
one `UnrecognizedArgumentsError`.

Values are never returned in bulk: each argument writes to the binding it was
declared with.

Example Usage:
    verbose = Placeholder(bool)
    name = Placeholder(str)
    count = Placeholder(int)

    parser = Parser("Process a file")
    parser.add_argument(Argument("--verbose", verbose), group="default")
    parser.add_argument(Argument("name", name, required=True), group="default")
    parser.add_argument(Argument("count", count), group="default")

    parser.parse(["--verbose", "file.txt", "5"])
    # verbose.value is True, name.value == "file.txt", count.value == 5

A parser runs one parse at a time. Calling `parse()` while another parse on the
same parser is in flight (from another thread, or re-entrantly from a custom
action) raises `ConcurrentParseError`.
"""
from __future__ import annotations

import threading
from collections import deque
from typing import Iterable, TextIO

from rich.console import Console
from rich.markup import escape

from argwire.console import console
from argwire.exceptions import (
    ArgumentConfigError,
    ConcurrentParseError,
    DuplicateArgumentError,
    DuplicateGroupError,
    MissingRequiredArgumentsError,
    UnknownGroupError,
    UnrecognizedArgumentsError,
)
from argwire.logger import logger
from argwire.parser.argument import Argument
from argwire.parser.group import ArgumentGroup

DEFAULT_GROUP = "default"


class Parser:
    """
    Two-phase command-line parser composed of argument groups.

    Args:
        description (str): Text shown at the top of help output.
        default_group (str): Name of the group created with the parser.
    """

    def __init__(self, description: str = "", default_group: str = DEFAULT_GROUP) -> None:
        self.description: str = description
        self.console: Console = console
        self._groups: dict[str, ArgumentGroup] = {}
        self._parse_lock = threading.Lock()
        self.add_argument_group(ArgumentGroup(default_group))

    def add_argument_group(self, group: ArgumentGroup) -> ArgumentGroup:
        """
        Register `group` under its own name.

        Raises:
            DuplicateGroupError: A group with the same name is registered.
            DuplicateArgumentError: The group declares a name another group owns.
        """
        if not isinstance(group, ArgumentGroup):
            raise ArgumentConfigError(
                f"Expected an ArgumentGroup, got {type(group).__name__}"
            )
        if group.name in self._groups:
            raise DuplicateGroupError(group.name)
        for argument in group.arguments():
            owner = self._conflicting_group(argument)
            if owner is not None:
                raise DuplicateArgumentError(argument.name, owner.name)
        self._groups[group.name] = group
        logger.debug("Registered argument group '%s'", group.name)
        return group

    def add_argument(self, argument: Argument, group: str) -> Argument:
        """
        Add `argument` to the group registered as `group`.

        Raises:
            UnknownGroupError: No group is registered under `group`.
            DuplicateArgumentError: The argument's name is already declared.
        """
        target = self._groups.get(group)
        if target is None:
            raise UnknownGroupError(group)
        owner = self._conflicting_group(argument)
        if owner is not None and owner is not target:
            raise DuplicateArgumentError(argument.name, owner.name)
        return target.add_argument(argument)

    def _owner_of(self, name: str) -> ArgumentGroup | None:
        return next((group for group in self._groups.values() if group.find(name)), None)

    def _conflicting_group(self, argument: Argument) -> ArgumentGroup | None:
        """Return the group already declaring `argument`'s name or dest."""
        for group in self._groups.values():
            for existing in group.arguments():
                if existing.name == argument.name or existing.dest == argument.dest:
                    return group
        return None

    def get_group(self, name: str) -> ArgumentGroup:
        group = self._groups.get(name)
        if group is None:
            raise UnknownGroupError(name)
        return group

    def groups(self) -> list[ArgumentGroup]:
        """Return the groups in registration order."""
        return list(self._groups.values())

    def arguments(self) -> list[Argument]:
        return [
            argument for group in self._groups.values() for argument in group.arguments()
        ]

    def find(self, name: str) -> Argument | None:
        """Return the argument declared as `name` in any group."""
        owner = self._owner_of(name)
        return owner.find(name) if owner else None

    def reset(self) -> None:
        """Zero every argument's counters and restore every default."""
        for group in self._groups.values():
            group.reset()

    def _consume_optional_phase(self, tokens: deque[str]) -> None:
        while tokens:
            if not any(group.consume_optional(tokens) for group in self._groups.values()):
                break

    def _consume_positional_phase(self, tokens: deque[str]) -> None:
        for group in self._groups.values():
            if not tokens:
                break
            group.consume_positional(tokens)

    def parse_known(self, tokens: Iterable[str] | None = None) -> list[str]:
        """
        Parse `tokens` and return the ones no argument claimed.

        Args:
            tokens (Iterable[str] | None): The invocation arguments, program name
                excluded. The caller's sequence is copied, never modified.

        Returns:
            list[str]: Unclaimed tokens, in their original order.

        Raises:
            ConcurrentParseError: This parser is already parsing.
            ConversionError | InvalidChoiceError | MissingValueError: A token was
                rejected; the parse stops at the first one.
            MissingRequiredArgumentsError: One or more required arguments were
                not supplied.
        """
        if not self._parse_lock.acquire(blocking=False):
            raise ConcurrentParseError(
                "Parser is already parsing; parses of one parser cannot overlap"
            )
        try:
            stream = deque(tokens or ())
            for token in stream:
                if not isinstance(token, str):
                    raise TypeError(f"Tokens must be strings, got {type(token).__name__}")

            self.reset()
            logger.debug("Parsing %d tokens", len(stream))
            self._consume_optional_phase(stream)
            logger.debug("Optional phase left %d tokens", len(stream))
            self._consume_positional_phase(stream)
            leftovers = list(stream)

            missing = [
                argument.name
                for group in self._groups.values()
                for argument in group.missing()
            ]
            if missing:
                raise MissingRequiredArgumentsError(missing, unrecognized=leftovers)
            return leftovers
        finally:
            self._parse_lock.release()

    def parse(self, tokens: Iterable[str] | None = None) -> None:
        """
        Parse `tokens`, writing values through each argument's binding.

        Raises:
            UnrecognizedArgumentsError: Tokens were left over after both phases.
            See `parse_known()` for the other errors.
        """
        leftovers = self.parse_known(tokens)
        if leftovers:
            raise UnrecognizedArgumentsError(leftovers)

    def get_usage(self, program: str = "") -> str:
        """Return a one-line usage string, optional arguments first."""
        parts = [program] if program else []
        for arg in self.arguments():
            if arg.is_optional:
                usage = arg.usage_text()
                parts.append(usage if arg.required else f"[{usage}]")
        parts.extend(arg.usage_text() for arg in self.arguments() if not arg.is_optional)
        return " ".join(parts)

    def render_help(self, out: Console | TextIO | None = None, program: str = "") -> None:
        """
        Print the usage line, the description and each group's arguments.

        Args:
            out (Console | TextIO | None): Where to write. Defaults to the
                shared rich console.
            program (str): Program name shown in the usage line.
        """
        out = out or self.console
        usage = self.get_usage(program)
        if isinstance(out, Console):
            out.print(f"[bold]usage:[/bold] {escape(usage)}\n")
            if self.description:
                out.print(self.description + "\n", markup=False)
        else:
            out.write(f"usage: {usage}\n\n")
            if self.description:
                out.write(self.description + "\n\n")
        for group in self._groups.values():
            if group.arguments():
                group.describe(out)

    def __str__(self) -> str:
        arguments = self.arguments()
        positional = sum(not arg.is_optional for arg in arguments)
        required = sum(arg.required for arg in arguments)
        return (
            f"Parser(groups={len(self._groups)}, args={len(arguments)}, "
            f"positional={positional}, required={required})"
        )

    def __repr__(self) -> str:
        return str(self)
