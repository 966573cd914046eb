"""Canonical decimal integer grammar.

Number tokens (``i<digits>e``) and byte-string length prefixes
(``<digits>:``) share one grammar: no leading zeros, no ``-0``, and a sign
only for number tokens. This module holds that grammar and the numeric
widths values are range checked into.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional, Union

from ..exceptions import ErrorKind
from .cursor import Cursor

MINUS = ord("-")
ZERO = ord("0")
NINE = ord("9")
END = ord("e")
COLON = ord(":")

# Accumulator range; digits beyond it are rejected instead of wrapping.
ACCUMULATOR_MAX = (1 << 64) - 1


def is_digit(byte: int) -> bool:
    return ZERO <= byte <= NINE


@dataclass(frozen=True)
class IntWidth:
    """A numeric target of the integer grammar.

    Attributes:
        name: Short type name (``i8``, ``u64``, ``f32``...)
        min_value: Smallest accepted value (None for floats)
        max_value: Largest accepted value (None for floats)
        is_float: Whether decoded integers are converted to float
    """

    name: str
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    is_float: bool = False

    @property
    def signed(self) -> bool:
        return self.min_value is None or self.min_value < 0

    def fits(self, value: int) -> bool:
        if self.is_float:
            return True
        if self.min_value is None or self.max_value is None:
            raise ValueError(f"{self.name} has no integer bounds")
        return self.min_value <= value <= self.max_value

    def convert(self, value: int) -> Union[int, float]:
        if not self.is_float:
            return value
        if self.name == "f32":
            return struct.unpack("<f", struct.pack("<f", float(value)))[0]
        return float(value)

    def __repr__(self) -> str:
        return f"IntWidth({self.name})"


def _signed(bits: int) -> IntWidth:
    return IntWidth(f"i{bits}", -(1 << (bits - 1)), (1 << (bits - 1)) - 1)


def _unsigned(bits: int) -> IntWidth:
    return IntWidth(f"u{bits}", 0, (1 << bits) - 1)


I8 = _signed(8)
I16 = _signed(16)
I32 = _signed(32)
I64 = _signed(64)
U8 = _unsigned(8)
U16 = _unsigned(16)
U32 = _unsigned(32)
U64 = _unsigned(64)
USIZE = IntWidth("usize", 0, (1 << 64) - 1)
F32 = IntWidth("f32", is_float=True)
F64 = IntWidth("f64", is_float=True)


def parse_integer(cursor: Cursor, width: IntWidth, parsing_str: bool = False) -> Union[int, float]:
    """Parse the digits of a number token or a length prefix.

    For a number token the cursor must sit just past the leading ``i``; for a
    length prefix it must sit on the first digit. The terminator (``e`` or
    ``:``) is consumed on success.

    Args:
        cursor: Cursor shared with the enclosing decode call
        width: Target width the value is range checked into
        parsing_str: True to parse a length prefix (terminator ``:``,
            unsigned only)

    Returns:
        The parsed value, converted for float widths

    Raises:
        DecodeError: MINUS_ZERO, LEADING_ZERO, INTEGER_OUT_OF_RANGE, EOF, or
            EXPECTED_INTEGER / EXPECTED_STRING / EXPECTED_END /
            EXPECTED_STRING_DELIM on malformed input
    """
    start = cursor.index if parsing_str else cursor.index - 1
    end = COLON if parsing_str else END
    expected = ErrorKind.EXPECTED_STRING if parsing_str else ErrorKind.EXPECTED_INTEGER
    expected_end = ErrorKind.EXPECTED_STRING_DELIM if parsing_str else ErrorKind.EXPECTED_END
    positive = True
    first = True
    n = 0

    while True:
        byte = cursor.next_byte()

        if first and byte == MINUS:
            following = cursor.peek_byte()
            if following == ZERO:
                cursor.next_byte()
                following = cursor.peek_byte()
                if following == end:
                    raise cursor.error_at(ErrorKind.MINUS_ZERO, start)
                if is_digit(following):
                    raise cursor.error(ErrorKind.LEADING_ZERO)
                raise cursor.error_at(expected, start)
            if parsing_str or following == MINUS:
                raise cursor.error_at(expected, start)
            # The first digit still has to follow, so stay on the first position.
            positive = False
            continue

        if first and byte == ZERO:
            following = cursor.peek_byte()
            if following == end:
                cursor.next_byte()
                return width.convert(0)
            if is_digit(following):
                raise cursor.error(ErrorKind.LEADING_ZERO)
        elif is_digit(byte):
            n = n * 10 + (byte - ZERO)
            if n > ACCUMULATOR_MAX:
                raise cursor.error_at(ErrorKind.INTEGER_OUT_OF_RANGE, start)
        elif byte == end and not first:
            value = n if positive else -n
            if not width.fits(value):
                raise cursor.error_at(ErrorKind.INTEGER_OUT_OF_RANGE, start)
            return width.convert(value)
        elif first:
            raise cursor.error_at(expected, start)
        else:
            raise cursor.error(expected_end)

        first = False
