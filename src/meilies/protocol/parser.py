"""Request decoding: value tree -> argument list -> typed command.

All functions here are pure and synchronous. They never touch the network or
storage, keep no state between calls and can be used from any number of
connection handlers at once.

Failures are raised as `DecodeError` (wrong value shape) or a `CommandError`
subclass (bad command). Nothing else escapes, whatever the input bytes are.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from .commands import MAX_OFFSET, TAIL_OFFSET, Command, CommandType, PublishCommand, SubscribeCommand
from .errors import (
    CommandNotFoundError,
    DecodeError,
    DecodeErrorReason,
    InvalidNumberOfArgumentsError,
    InvalidOffsetError,
    InvalidUtf8StringError,
    MissingCommandNameError,
)
from .values import Array, BulkString, RespValue

logger = logging.getLogger(__name__)

TARGET_SEPARATOR = b":"

# Base-10 signed integer: one optional sign, ASCII digits only.
_OFFSET_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)

# Expected argument counts reported on arity errors. SUBSCRIBE consumes a
# single target but reports the same count as PUBLISH.
PUBLISH_ARITY = 2
SUBSCRIBE_ARITY = 2


def arguments_from_value(value: RespValue) -> list[bytes]:
    """Flatten a request value into its arguments.

    Args:
        value: Top-level value of a single request

    Returns:
        The bulk string payloads, in order

    Raises:
        DecodeError: If `value` is not a non-null array whose elements are
            all non-null bulk strings
    """
    if not isinstance(value, Array):
        raise DecodeError(DecodeErrorReason.NOT_AN_ARRAY)
    if value.is_null():
        raise DecodeError(DecodeErrorReason.NULL_ARRAY)

    args = []
    for index, element in enumerate(value.values):
        if not isinstance(element, BulkString):
            raise DecodeError(DecodeErrorReason.NOT_A_BULK_STRING, index)
        if element.is_null():
            raise DecodeError(DecodeErrorReason.NULL_BULK_STRING, index)
        args.append(bytes(element.value))
    return args


def _decode_text(data: bytes) -> str:
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8StringError(e) from e


def _parse_offset(text: str) -> int:
    if not _OFFSET_RE.fullmatch(text):
        raise InvalidOffsetError(text)
    try:
        offset = int(text)
    except ValueError as e:
        # Digit strings beyond the interpreter's int conversion limit
        raise InvalidOffsetError(text) from e
    if offset < TAIL_OFFSET or offset > MAX_OFFSET:
        raise InvalidOffsetError(text)
    return offset


def parse_target(target: bytes) -> tuple[str, int]:
    """Split a subscribe target `stream[:offset]`.

    Only the first colon separates the stream name from the offset; any later
    colon is part of the offset text and makes it invalid.

    Args:
        target: Raw target argument

    Returns:
        (stream, offset), with offset `TAIL_OFFSET` when none was given

    Raises:
        InvalidUtf8StringError: If the stream name or offset is not UTF-8
        InvalidOffsetError: If the offset is not a base-10 integer in
            [-1, 2**63 - 1]
    """
    target = bytes(target)
    stream, sep, offset = target.partition(TARGET_SEPARATOR)
    if not sep:
        return _decode_text(target), TAIL_OFFSET
    return _decode_text(stream), _parse_offset(_decode_text(offset))


def parse_command(args: Sequence[bytes]) -> Command:
    """Turn request arguments into a command.

    The first argument is the command name, matched case-insensitively.

    Args:
        args: Request arguments, e.g. from `arguments_from_value`

    Returns:
        PublishCommand or SubscribeCommand

    Raises:
        MissingCommandNameError: If `args` is empty
        CommandNotFoundError: If the name is not a known command
        InvalidNumberOfArgumentsError: If the argument count is wrong
        InvalidUtf8StringError: If a text argument is not UTF-8
        InvalidOffsetError: If a subscribe offset cannot be parsed
    """
    if not args:
        raise MissingCommandNameError()

    name, *rest = args
    command = _decode_text(name).lower()

    match command:
        case CommandType.PUBLISH.value:
            if len(rest) != PUBLISH_ARITY:
                raise InvalidNumberOfArgumentsError(expected=PUBLISH_ARITY)
            stream, event = rest
            return PublishCommand(stream=_decode_text(stream), event=bytes(event))

        case CommandType.SUBSCRIBE.value:
            if len(rest) != 1:
                raise InvalidNumberOfArgumentsError(expected=SUBSCRIBE_ARITY)
            stream, offset = parse_target(rest[0])
            return SubscribeCommand(stream=stream, from_=offset)

        case _:
            raise CommandNotFoundError(command)


def decode_request(value: RespValue) -> Command:
    """Decode one request value into a command.

    Raises:
        DecodeError: If the value is not an array of bulk strings
        CommandError: If the arguments do not form a valid command
    """
    command = parse_command(arguments_from_value(value))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Decoded request: {command!r}")
    return command
