"""Typed commands decoded from client requests.

A request is an array of bulk strings whose first element names the command.
Two commands exist:

    PUBLISH <stream> <event>
    SUBSCRIBE <stream>[:<offset>]

Commands are immutable values. They own nothing and are handed straight to
the dispatch layer once decoded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .display import payload_view
from .values import Array

# Longest event prefix shown in reprs and debug logs.
REPR_PAYLOAD_LIMIT = 64

# Subscribe from the current end of the stream instead of a stored position.
TAIL_OFFSET = -1

MAX_OFFSET = 2**63 - 1


class CommandType(str, Enum):
    """All supported command names (lowercase)."""

    PUBLISH = "publish"
    SUBSCRIBE = "subscribe"


class _Command(BaseModel, ABC):
    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    @abstractmethod
    def to_args(self) -> list[bytes]:
        """Render the command as request arguments."""

    def to_value(self) -> Array:
        """Render the command as a request value (array of bulk strings)."""
        return Array.of_bulk(*self.to_args())


class PublishCommand(_Command):
    """Append `event` to the log of `stream`.

    `event` is opaque and may hold any bytes; `stream` is always text.

    Example:
        PUBLISH orders hello
    """

    model_config = ConfigDict(ser_json_bytes="base64")

    cmd: Literal[CommandType.PUBLISH] = CommandType.PUBLISH
    stream: str
    event: bytes

    def to_args(self) -> list[bytes]:
        return [CommandType.PUBLISH.value.encode(), self.stream.encode("utf-8"), self.event]

    def __repr_args__(self) -> Iterator[tuple[str | None, Any]]:
        yield "stream", self.stream
        yield "event", payload_view(self.event, limit=REPR_PAYLOAD_LIMIT)
        if len(self.event) > REPR_PAYLOAD_LIMIT:
            yield "size", len(self.event)


class SubscribeCommand(_Command):
    """Start receiving events of `stream` from offset `from`.

    `from` is a position in the stream's log, or `TAIL_OFFSET` (-1) when the
    client gave none. Since the stream name and offset share one argument
    separated by the first colon, a subscribable stream name never contains
    a colon.

    Example:
        SUBSCRIBE orders       -> from = -1
        SUBSCRIBE orders:42    -> from = 42
    """

    cmd: Literal[CommandType.SUBSCRIBE] = CommandType.SUBSCRIBE
    stream: str = Field(pattern=r"^[^:]*$")
    from_: int = Field(default=TAIL_OFFSET, alias="from", ge=TAIL_OFFSET, le=MAX_OFFSET)

    @property
    def from_tail(self) -> bool:
        """True if no explicit offset was requested."""
        return self.from_ == TAIL_OFFSET

    @property
    def target(self) -> str:
        """The `stream[:offset]` form of this subscription."""
        if self.from_tail:
            return self.stream
        return f"{self.stream}:{self.from_}"

    def to_args(self) -> list[bytes]:
        return [CommandType.SUBSCRIBE.value.encode(), self.target.encode("utf-8")]

    def __repr_args__(self) -> Iterator[tuple[str | None, Any]]:
        yield "stream", self.stream
        yield "from", self.from_


Command = PublishCommand | SubscribeCommand
