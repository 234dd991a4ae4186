"""Request decoding layer.

Turns the generic value of one client request into a typed command:

    value --arguments_from_value--> [bytes, ...] --parse_command--> Command

Key concepts:
- Values: the untyped RESP tree produced by the wire tokenizer
- Arguments: a flat list of byte strings, the first naming the command
- Commands: PUBLISH and SUBSCRIBE, as immutable typed models
- Errors: DecodeError for a malformed value, CommandError for a bad command
"""

from .commands import TAIL_OFFSET, Command, CommandType, PublishCommand, SubscribeCommand
from .errors import (
    CommandError,
    CommandErrorKind,
    CommandNotFoundError,
    DecodeError,
    DecodeErrorReason,
    InvalidNumberOfArgumentsError,
    InvalidOffsetError,
    InvalidUtf8StringError,
    MissingCommandNameError,
)
from .parser import arguments_from_value, decode_request, parse_command, parse_target
from .values import Array, BulkString, ErrorValue, Integer, RespValue, SimpleString, encode_value

__all__ = [
    "TAIL_OFFSET",
    "Command",
    "CommandType",
    "PublishCommand",
    "SubscribeCommand",
    "CommandError",
    "CommandErrorKind",
    "CommandNotFoundError",
    "DecodeError",
    "DecodeErrorReason",
    "InvalidNumberOfArgumentsError",
    "InvalidOffsetError",
    "InvalidUtf8StringError",
    "MissingCommandNameError",
    "arguments_from_value",
    "decode_request",
    "parse_command",
    "parse_target",
    "Array",
    "BulkString",
    "ErrorValue",
    "Integer",
    "RespValue",
    "SimpleString",
    "encode_value",
]
