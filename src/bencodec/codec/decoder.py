"""Bencode decoder.

This module provides the Decoder, a cursor-driven recursive-descent parser
that hands each value it finds to a Visitor, and the from_bytes()/decode()
entry points that drive it with a shape derived from a type annotation.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar, Union, overload

from ..exceptions import ErrorKind
from .access import EnumAccess, MapAccess, SeqAccess, StrEnumAccess
from .cursor import Cursor
from .integer import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    U8,
    U16,
    U32,
    U64,
    USIZE,
    IntWidth,
    is_digit,
    parse_integer,
)
from .schema import shape_for
from .visitor import Visitor

logger = logging.getLogger(__name__)

T = TypeVar("T")

INTEGER = ord("i")
LIST = ord("l")
DICT = ord("d")
END_MARKER = ord("e")


class Decoder:
    """Decodes Bencode values from one input buffer.

    A Decoder is created for one top-level decode call and owns the Cursor
    for that call. Composite drivers borrow it while a list, dictionary or
    enum is being traversed.

    Example:
        >>> decoder = Decoder(b"i42e")
        >>> decoder.deserialize_i64(shape_for(int))
        42
        >>> decoder.end()
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self.cursor = Cursor(data)

    def end(self) -> None:
        """Require that the whole input has been consumed."""
        self.cursor.end()

    # Primitive extractors

    def _parse_bool(self) -> bool:
        cursor = self.cursor
        token = bytes((cursor.next_byte(), cursor.next_byte(), cursor.next_byte()))
        if token == b"i1e":
            return True
        if token == b"i0e":
            return False
        raise cursor.error(ErrorKind.EXPECTED_BOOLEAN)

    def _parse_number(self, width: IntWidth) -> Union[int, float]:
        if self.cursor.next_byte() != INTEGER:
            raise self.cursor.error(ErrorKind.EXPECTED_INTEGER)
        return parse_integer(self.cursor, width)

    def _parse_bytes(self) -> memoryview:
        length = parse_integer(self.cursor, USIZE, parsing_str=True)
        return self.cursor.take(int(length))

    def _parse_str(self) -> str:
        span = self._parse_bytes()
        try:
            return bytes(span).decode("utf-8")
        except UnicodeDecodeError as err:
            raise self.cursor.error(ErrorKind.STRING_NOT_UTF8) from err

    # Self-describing dispatch

    def deserialize_any(self, visitor: Visitor) -> Any:
        byte = self.cursor.peek_byte()
        if byte == INTEGER:
            return self.deserialize_i64(visitor)
        if is_digit(byte):
            return self.deserialize_str(visitor)
        if byte == LIST:
            return self.deserialize_seq(visitor)
        if byte == DICT:
            return self.deserialize_map(visitor)
        raise self.cursor.error(ErrorKind.EXPECTED_SOME_VALUE)

    def deserialize_bool(self, visitor: Visitor) -> Any:
        return visitor.visit_bool(self._parse_bool())

    def deserialize_number(self, width: IntWidth, visitor: Visitor) -> Any:
        """Decode an integer token range checked into ``width``."""
        value = self._parse_number(width)
        if width.is_float:
            return visitor.visit_float(value)
        return visitor.visit_int(value)

    def deserialize_i8(self, visitor: Visitor) -> Any:
        return self.deserialize_number(I8, visitor)

    def deserialize_i16(self, visitor: Visitor) -> Any:
        return self.deserialize_number(I16, visitor)

    def deserialize_i32(self, visitor: Visitor) -> Any:
        return self.deserialize_number(I32, visitor)

    def deserialize_i64(self, visitor: Visitor) -> Any:
        return self.deserialize_number(I64, visitor)

    def deserialize_u8(self, visitor: Visitor) -> Any:
        return self.deserialize_number(U8, visitor)

    def deserialize_u16(self, visitor: Visitor) -> Any:
        return self.deserialize_number(U16, visitor)

    def deserialize_u32(self, visitor: Visitor) -> Any:
        return self.deserialize_number(U32, visitor)

    def deserialize_u64(self, visitor: Visitor) -> Any:
        return self.deserialize_number(U64, visitor)

    def deserialize_f32(self, visitor: Visitor) -> Any:
        return self.deserialize_number(F32, visitor)

    def deserialize_f64(self, visitor: Visitor) -> Any:
        return self.deserialize_number(F64, visitor)

    def deserialize_char(self, visitor: Visitor) -> Any:
        span = self._parse_bytes()
        if len(span) == 1:
            # Single byte mapped to the code point of the same value.
            return visitor.visit_char(chr(span[0]))
        raise self.cursor.error(ErrorKind.EXPECTED_CHAR)

    def deserialize_str(self, visitor: Visitor) -> Any:
        return visitor.visit_str(self._parse_str())

    def deserialize_string(self, visitor: Visitor) -> Any:
        return self.deserialize_str(visitor)

    def deserialize_bytes(self, visitor: Visitor) -> Any:
        return visitor.visit_borrowed_bytes(self._parse_bytes())

    def deserialize_byte_buf(self, visitor: Visitor) -> Any:
        return visitor.visit_bytes(bytes(self._parse_bytes()))

    def deserialize_option(self, visitor: Visitor) -> Any:
        """Presence-based option: absent only when the input is exhausted."""
        if self.cursor.at_end():
            return visitor.visit_unit()
        return visitor.visit_some(self)

    def deserialize_unit(self, visitor: Visitor) -> Any:
        return visitor.visit_unit()

    def deserialize_unit_struct(self, name: str, visitor: Visitor) -> Any:
        return self.deserialize_unit(visitor)

    def deserialize_newtype_struct(self, name: str, visitor: Visitor) -> Any:
        return visitor.visit_newtype_struct(self)

    # Composites

    def deserialize_seq(self, visitor: Visitor) -> Any:
        cursor = self.cursor
        if cursor.next_byte() != LIST:
            raise cursor.error(ErrorKind.EXPECTED_LIST)

        value = visitor.visit_seq(SeqAccess(self))

        if cursor.next_byte() != END_MARKER:
            raise cursor.error(ErrorKind.EXPECTED_END)
        return value

    def deserialize_tuple(self, length: int, visitor: Visitor) -> Any:
        return self.deserialize_seq(visitor)

    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor) -> Any:
        return self.deserialize_seq(visitor)

    def deserialize_map(self, visitor: Visitor) -> Any:
        cursor = self.cursor
        if cursor.next_byte() != DICT:
            raise cursor.error(ErrorKind.EXPECTED_DICT)

        value = visitor.visit_map(MapAccess(self))

        if cursor.next_byte() != END_MARKER:
            raise cursor.error(ErrorKind.EXPECTED_END)
        return value

    def deserialize_struct(self, name: str, fields: Sequence[str], visitor: Visitor) -> Any:
        return self.deserialize_map(visitor)

    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor) -> Any:
        """Decode an externally tagged enum.

        A bare byte string names a unit variant; a single-entry dictionary
        ``{variant-name: payload}`` carries a data variant.
        """
        cursor = self.cursor
        byte = cursor.peek_byte()

        if is_digit(byte):
            return visitor.visit_enum(StrEnumAccess(self._parse_str()))

        if byte == DICT:
            cursor.next_byte()
            value = visitor.visit_enum(EnumAccess(self))

            if cursor.next_byte() != END_MARKER:
                raise cursor.error(ErrorKind.EXPECTED_END)
            return value

        raise cursor.error(ErrorKind.EXPECTED_ENUM)

    def deserialize_identifier(self, visitor: Visitor) -> Any:
        return self.deserialize_str(visitor)

    def deserialize_ignored_any(self, visitor: Visitor) -> Any:
        return self.deserialize_any(visitor)


@overload
def from_bytes(data: bytes | bytearray | memoryview) -> Any: ...


@overload
def from_bytes(data: bytes | bytearray | memoryview, type_: type[T]) -> T: ...


@overload
def from_bytes(data: bytes | bytearray | memoryview, type_: Any) -> Any: ...


def from_bytes(data: bytes | bytearray | memoryview, type_: Any = Any) -> Any:
    """Decode a complete Bencode message.

    The whole buffer must be consumed: bytes left over after a structurally
    complete value raise TRAILING_CHARACTERS.

    Args:
        data: Encoded message
        type_: Type annotation describing the expected value. ``Any`` (the
            default) decodes integers, strings, lists and dictionaries
            generically.

    Returns:
        The decoded value

    Raises:
        SchemaError: If ``type_`` cannot be mapped to a wire shape
        DecodeError: If the data is malformed or doesn't match ``type_``

    Examples:
        ```python
        from bencodec import from_bytes

        from_bytes(b"li1ei2ei3ee", list[int])   # [1, 2, 3]
        from_bytes(b"d5:firsti1ee")             # {"first": 1}
        ```
    """
    shape = shape_for(type_)
    decoder = Decoder(data)
    value = shape.deserialize(decoder)
    decoder.end()
    logger.debug("Decoded %d bytes as %r", len(decoder.cursor), type_)
    return value


def decode(message_class: type[T], data: bytes | bytearray | memoryview) -> T:
    """Decode Bencode data to an instance of ``message_class``.

    Equivalent to ``from_bytes(data, message_class)``.

    Raises:
        SchemaError: If the message schema is invalid
        DecodeError: If data is truncated, corrupted, or doesn't match schema
    """
    return from_bytes(data, message_class)
