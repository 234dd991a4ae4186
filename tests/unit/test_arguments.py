"""Unit tests for extracting arguments from a request value."""

import pytest

from meilies.protocol import (
    Array,
    BulkString,
    DecodeError,
    DecodeErrorReason,
    ErrorValue,
    Integer,
    SimpleString,
    arguments_from_value,
)


class TestArgumentsFromValue:
    """Test well-formed requests."""

    def test_array_of_bulk_strings(self, request_value):
        """Bulk string payloads are returned in order."""
        args = arguments_from_value(request_value("PUBLISH", "orders", b"\x00\xff"))

        assert args == [b"PUBLISH", b"orders", b"\x00\xff"]

    def test_empty_array(self):
        """An empty array yields no arguments (not an error at this layer)."""
        assert arguments_from_value(Array(values=[])) == []

    def test_empty_bulk_string(self):
        """Empty bulk strings are valid arguments."""
        assert arguments_from_value(Array(values=[BulkString(value=b"")])) == [b""]

    def test_returns_fresh_list(self, request_value):
        """The result is a new list of bytes objects."""
        value = request_value("a", "b")
        args = arguments_from_value(value)
        args.append(b"c")

        assert arguments_from_value(value) == [b"a", b"b"]
        assert all(type(arg) is bytes for arg in args)


class TestShapeErrors:
    """Any shape other than an array of bulk strings is a DecodeError."""

    @pytest.mark.parametrize(
        "value",
        [
            Integer(value=1),
            SimpleString(value="OK"),
            ErrorValue(value="ERR nope"),
            BulkString(value=b"publish"),
            BulkString(value=None),
        ],
    )
    def test_not_an_array(self, value):
        with pytest.raises(DecodeError) as exc_info:
            arguments_from_value(value)

        assert exc_info.value.reason == DecodeErrorReason.NOT_AN_ARRAY
        assert exc_info.value.index is None

    def test_null_array(self):
        with pytest.raises(DecodeError) as exc_info:
            arguments_from_value(Array(values=None))

        assert exc_info.value.reason == DecodeErrorReason.NULL_ARRAY

    def test_null_bulk_string_element(self):
        """A null element fails the whole request."""
        value = Array(values=[BulkString(value=b"publish"), BulkString(value=None)])

        with pytest.raises(DecodeError) as exc_info:
            arguments_from_value(value)

        assert exc_info.value.reason == DecodeErrorReason.NULL_BULK_STRING
        assert exc_info.value.index == 1

    @pytest.mark.parametrize(
        "element",
        [
            Integer(value=5),
            SimpleString(value="publish"),
            ErrorValue(value="ERR"),
            Array(values=[BulkString(value=b"x")]),
            Array(values=None),
        ],
    )
    def test_non_bulk_string_element(self, element):
        """Nested arrays and scalar elements are rejected."""
        value = Array(values=[BulkString(value=b"subscribe"), BulkString(value=b"a"), element])

        with pytest.raises(DecodeError) as exc_info:
            arguments_from_value(value)

        assert exc_info.value.reason == DecodeErrorReason.NOT_A_BULK_STRING
        assert exc_info.value.index == 2

    def test_error_message(self):
        error = DecodeError(DecodeErrorReason.NULL_BULK_STRING, 3)

        assert str(error) == "invalid request: null bulk string at argument 3"
