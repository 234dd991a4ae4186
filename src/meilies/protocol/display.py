"""Human-readable rendering of opaque payloads for logs and the CLI.

Event payloads are arbitrary bytes. For debugging they are shown as text when
they happen to be valid UTF-8 and as a list of byte values otherwise. The
output is for people only and is never parsed back.
"""

from __future__ import annotations


def payload_view(data: bytes, limit: int | None = None) -> str | list[int]:
    """Decoded text if `data` is valid UTF-8, else its byte values.

    Args:
        data: Opaque payload bytes
        limit: Only look at the first `limit` bytes. Text cut short this way
            ends with "..."
    """
    cut = limit is not None and len(data) > limit
    if cut:
        data = data[:limit]
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte character split by the cut is still text
        if not (cut and e.reason == "unexpected end of data"):
            return list(data)
        text = data[: e.start].decode("utf-8")
    return text + "..." if cut else text


def format_payload(data: bytes, limit: int | None = None) -> str:
    """Render a payload for display.

    Args:
        data: Opaque payload bytes
        limit: Render at most this many bytes

    Returns:
        A quoted string if `data` decodes as UTF-8, else a byte listing

    Example:
        >>> format_payload(b"hello")
        "'hello'"
        >>> format_payload(b"\\xff\\x00")
        '[255, 0]'
    """
    return repr(payload_view(data, limit))


def truncate(text: str, max_len: int = 80) -> str:
    """Truncate text for single-line display."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
