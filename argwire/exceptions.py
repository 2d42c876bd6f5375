# Argwire — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argwire.

Errors fall into two families. Configuration errors are raised while a parser
is being assembled, before any token is read. Parse errors are raised from
`Parser.parse()` and describe a problem with the supplied tokens.

Exception Hierarchy:
- ArgwireError
    ├── ArgumentConfigError
    │   ├── DuplicateGroupError
    │   ├── UnknownGroupError
    │   ├── DuplicateArgumentError
    │   └── ConcurrentParseError
    └── ArgumentParseError
        ├── ConversionError
        │   └── UnsupportedTypeError
        ├── InvalidChoiceError
        ├── MissingValueError
        ├── MissingRequiredArgumentsError
        └── UnrecognizedArgumentsError

Nothing in argwire terminates the process; a CLI wrapper decides how to map
these onto exit codes and messages.
"""
from __future__ import annotations

from typing import Any, Iterable


class ArgwireError(Exception):
    """Base exception for argwire."""


class ArgumentConfigError(ArgwireError):
    """Exception raised when a parser, group or argument is misconfigured."""


class DuplicateGroupError(ArgumentConfigError):
    """Exception raised when a group with the same name is already registered."""

    def __init__(self, group: str) -> None:
        self.group = group
        super().__init__(f"Argument group '{group}' is already registered")


class UnknownGroupError(ArgumentConfigError):
    """Exception raised when an argument targets a group that does not exist."""

    def __init__(self, group: str) -> None:
        self.group = group
        super().__init__(f"Argument group '{group}' is not registered")


class DuplicateArgumentError(ArgumentConfigError):
    """Exception raised when an argument name collides with one already defined."""

    def __init__(self, name: str, owner: str) -> None:
        self.name = name
        self.owner = owner
        super().__init__(f"Argument '{name}' is already defined in group '{owner}'")


class ConcurrentParseError(ArgumentConfigError):
    """Exception raised when a parser is asked to parse while already parsing."""


class ArgumentParseError(ArgwireError):
    """Base exception for problems found in the supplied tokens."""


class ConversionError(ArgumentParseError):
    """Exception raised when a raw token cannot be converted to the declared type."""

    def __init__(
        self,
        message: str,
        token: str | None = None,
        target_type: Any = None,
        argument: str | None = None,
    ) -> None:
        self.token = token
        self.target_type = target_type
        self.argument = argument
        super().__init__(message)

    def for_argument(self, argument: str) -> ConversionError:
        """Return a copy of this error that names the argument being consumed."""
        error = type(self)(
            f"Invalid value for '{argument}': {self}",
            token=self.token,
            target_type=self.target_type,
            argument=argument,
        )
        return error


class UnsupportedTypeError(ConversionError):
    """Exception raised when a converter is requested for a type it cannot handle."""


class InvalidChoiceError(ArgumentParseError):
    """Exception raised when a claimed token is outside the argument's choices."""

    def __init__(self, argument: str, token: str, choices: Iterable[str]) -> None:
        self.argument = argument
        self.token = token
        self.choices = list(choices)
        super().__init__(
            f"Invalid choice for '{argument}': '{token}' "
            f"(choose from {{{', '.join(self.choices)}}})"
        )


class MissingValueError(ArgumentParseError):
    """Exception raised when a matched argument received fewer values than it needs."""

    def __init__(self, argument: str, expected: str, received: int = 0) -> None:
        self.argument = argument
        self.expected = expected
        self.received = received
        super().__init__(
            f"Argument '{argument}' expects {expected}, received {received}"
        )


class MissingRequiredArgumentsError(ArgumentParseError):
    """Exception raised once per parse listing every unsatisfied required argument."""

    def __init__(
        self, arguments: Iterable[str], unrecognized: Iterable[str] = ()
    ) -> None:
        self.arguments = list(arguments)
        self.unrecognized = list(unrecognized)
        plural = "s" if len(self.arguments) > 1 else ""
        message = f"Missing required argument{plural}: {', '.join(self.arguments)}"
        if self.unrecognized:
            message += f" (unrecognized: {' '.join(self.unrecognized)})"
        super().__init__(message)


class UnrecognizedArgumentsError(ArgumentParseError):
    """Exception raised when tokens remain after every argument had its turn."""

    def __init__(self, tokens: Iterable[str]) -> None:
        self.tokens = list(tokens)
        plural = "s" if len(self.tokens) > 1 else ""
        super().__init__(f"Unrecognized argument{plural}: {' '.join(self.tokens)}")
