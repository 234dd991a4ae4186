"""Errors raised while decoding a request.

Two independent families:

- DecodeError: the value tree did not have the shape "array of bulk strings".
- CommandError: the arguments did not form a valid command.

Both render to a RESP error reply with `to_reply()` so the connection layer
can answer the client and keep going.
"""

from __future__ import annotations

from enum import Enum

from .values import ErrorValue


class DecodeErrorReason(str, Enum):
    """Why a value could not be turned into an argument list."""

    NOT_AN_ARRAY = "not_an_array"
    NULL_ARRAY = "null_array"
    NOT_A_BULK_STRING = "not_a_bulk_string"
    NULL_BULK_STRING = "null_bulk_string"


class DecodeError(Exception):
    """The request value is not an array of non-null bulk strings."""

    prefix = "ERR"

    def __init__(self, reason: DecodeErrorReason, index: int | None = None) -> None:
        self.reason = reason
        self.index = index
        message = f"invalid request: {reason.value.replace('_', ' ')}"
        if index is not None:
            message += f" at argument {index}"
        super().__init__(message)

    def to_reply(self) -> ErrorValue:
        return ErrorValue(value=f"{self.prefix} {self}")


class CommandErrorKind(str, Enum):
    """Kinds of command errors."""

    COMMAND_NOT_FOUND = "command_not_found"
    MISSING_COMMAND_NAME = "missing_command_name"
    INVALID_NUMBER_OF_ARGUMENTS = "invalid_number_of_arguments"
    INVALID_UTF8_STRING = "invalid_utf8_string"
    INVALID_OFFSET = "invalid_offset"


class CommandError(Exception):
    """Base class for semantic request errors.

    Attributes:
        kind: Which error this is
        prefix: Reply prefix used by `to_reply()`
    """

    kind: CommandErrorKind
    prefix = "ERR"

    def to_reply(self) -> ErrorValue:
        """Render as a RESP error reply."""
        return ErrorValue(value=f"{self.prefix} {self}")


class CommandNotFoundError(CommandError):
    kind = CommandErrorKind.COMMAND_NOT_FOUND

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        super().__init__("command not found")


class MissingCommandNameError(CommandError):
    kind = CommandErrorKind.MISSING_COMMAND_NAME

    def __init__(self) -> None:
        super().__init__("missing command name")


class InvalidNumberOfArgumentsError(CommandError):
    kind = CommandErrorKind.INVALID_NUMBER_OF_ARGUMENTS

    def __init__(self, expected: int) -> None:
        self.expected = expected
        super().__init__(f"invalid number of arguments (expected {expected})")


class InvalidUtf8StringError(CommandError):
    """An argument that must be text is not valid UTF-8."""

    kind = CommandErrorKind.INVALID_UTF8_STRING

    def __init__(self, cause: UnicodeDecodeError) -> None:
        self.cause = cause
        super().__init__(f"invalid utf8 string: {cause.reason} at byte {cause.start}")


class InvalidOffsetError(CommandError):
    """The offset part of a subscribe target is not a usable integer."""

    kind = CommandErrorKind.INVALID_OFFSET

    def __init__(self, offset: str) -> None:
        self.offset = offset
        super().__init__(f"invalid offset: {offset!r}")
