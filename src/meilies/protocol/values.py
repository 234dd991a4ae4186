"""Generic RESP value tree.

Values are what the wire tokenizer hands to the protocol layer for a single
request. They are untyped with respect to commands: a request is normally an
array of bulk strings, but nothing here enforces that.

Both bulk strings and arrays can be null, which the protocol distinguishes
from empty:

    $0\\r\\n\\r\\n   -> BulkString(value=b"")
    $-1\\r\\n        -> BulkString(value=None)
    *0\\r\\n         -> Array(values=[])
    *-1\\r\\n        -> Array(values=None)

`encode_value` renders a value back to RESP2 bytes. It is used for error
replies and for building requests on the client side.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

CRLF = b"\r\n"


class ValueKind(str, Enum):
    """RESP2 type markers."""

    SIMPLE_STRING = "+"
    ERROR = "-"
    INTEGER = ":"
    BULK_STRING = "$"
    ARRAY = "*"


class _Value(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True)


class SimpleString(_Value):
    """A single-line status reply (`+OK`)."""

    kind: ClassVar[ValueKind] = ValueKind.SIMPLE_STRING
    value: str


class ErrorValue(_Value):
    """A single-line error reply (`-ERR message`)."""

    kind: ClassVar[ValueKind] = ValueKind.ERROR
    value: str


class Integer(_Value):
    """A signed 64-bit integer reply."""

    kind: ClassVar[ValueKind] = ValueKind.INTEGER
    value: int = Field(ge=-(2**63), le=2**63 - 1)


class BulkString(_Value):
    """A length-prefixed byte buffer. `None` is the null bulk string."""

    kind: ClassVar[ValueKind] = ValueKind.BULK_STRING
    value: bytes | None = None

    def is_null(self) -> bool:
        return self.value is None


class Array(_Value):
    """An ordered sequence of values. `None` is the null array."""

    kind: ClassVar[ValueKind] = ValueKind.ARRAY
    values: list[RespValue] | None = None

    def is_null(self) -> bool:
        return self.values is None

    @classmethod
    def of_bulk(cls, *items: bytes | str) -> Array:
        """Build a request-shaped array of bulk strings.

        Text items are UTF-8 encoded.
        """
        return cls(
            values=[
                BulkString(value=item.encode("utf-8") if isinstance(item, str) else bytes(item))
                for item in items
            ]
        )


RespValue = SimpleString | ErrorValue | Integer | BulkString | Array

Array.model_rebuild()


def _line(marker: ValueKind, text: str) -> bytes:
    if "\r" in text or "\n" in text:
        raise ValueError(f"RESP {marker.name.lower()} must not contain CR or LF")
    return marker.value.encode() + text.encode("utf-8") + CRLF


def encode_value(value: RespValue) -> bytes:
    """Serialize a value as RESP2.

    Args:
        value: Value to encode

    Returns:
        Wire bytes for the value, including the trailing CRLF

    Raises:
        ValueError: If a simple string or error contains CR or LF
    """
    match value:
        case SimpleString(value=text) | ErrorValue(value=text):
            return _line(value.kind, text)
        case Integer(value=number):
            return b":%d\r\n" % number
        case BulkString(value=None):
            return b"$-1\r\n"
        case BulkString(value=data):
            return b"$%d\r\n%s\r\n" % (len(data), data)
        case Array(values=None):
            return b"*-1\r\n"
        case Array(values=items):
            return b"*%d\r\n" % len(items) + b"".join(encode_value(item) for item in items)
    raise TypeError(f"Not a RESP value: {type(value).__name__}")
