"""Unit tests for the canonical integer grammar."""

from __future__ import annotations

import pytest

from bencodec import F32, I8, I32, I64, U8, U64, DecodeError, ErrorKind, from_bytes
from bencodec.codec import integer
from bencodec.codec.cursor import Cursor
from bencodec.codec.integer import I16, U16, USIZE, parse_integer


class TestNumberTokens:
    """Test ``i<digits>e`` tokens."""

    def test_positive(self) -> None:
        """Test a plain positive integer."""
        assert from_bytes(b"i42e", int) == 42

    def test_negative(self) -> None:
        """Test negative integers."""
        assert from_bytes(b"i-42e", int) == -42
        assert from_bytes(b"i-10200e", I32) == -10200

    def test_zero(self) -> None:
        """Test the single zero digit."""
        assert from_bytes(b"i0e", U8) == 0

    def test_width_bounds(self) -> None:
        """Test values at the edges of their widths."""
        assert from_bytes(b"i127e", I8) == 127
        assert from_bytes(b"i-128e", I8) == -128
        assert from_bytes(b"i255e", U8) == 255
        assert from_bytes(b"i18446744073709551615e", U64) == (1 << 64) - 1
        assert from_bytes(b"i-9223372036854775808e", I64) == -(1 << 63)

    def test_float_width(self) -> None:
        """Test integers decoded into a float width."""
        value = from_bytes(b"i5e", F32)
        assert value == 5.0
        assert isinstance(value, float)


class TestNumberTokenErrors:
    """Test rejected number tokens and their offsets."""

    @pytest.mark.parametrize(
        "data,annotation,message",
        [
            (b"i42000e", I8, "integer out of range at index 0"),
            (b"i128e", I8, "integer out of range at index 0"),
            (b"i-1e", U64, "integer out of range at index 0"),
            (b"i-0e", U64, "`i-0e` is invalid at index 0"),
            (b"i-0e", I64, "`i-0e` is invalid at index 0"),
            (b"i0022e", U64, "leading zeros are invalid at index 1"),
            (b"i-022e", I64, "leading zeros are invalid at index 2"),
            (b"iabc", I64, "expected integer at index 0"),
            (b"i22r", I64, "expected `e` at index 3"),
            (b"i-0azertye", I64, "expected integer at index 0"),
            (b"i-azertye", I64, "expected integer at index 0"),
            (b"i--1e", I64, "expected integer at index 0"),
            (b"ie", I64, "expected integer at index 0"),
        ],
    )
    def test_rejected(self, data: bytes, annotation: object, message: str) -> None:
        """Test each malformed token reports its exact error."""
        with pytest.raises(DecodeError) as exc_info:
            from_bytes(data, annotation)
        assert str(exc_info.value) == message

    def test_not_a_number_token(self) -> None:
        """Test a string where a number is expected."""
        with pytest.raises(DecodeError) as exc_info:
            from_bytes(b"3:abc", int)
        assert exc_info.value.kind is ErrorKind.EXPECTED_INTEGER
        assert exc_info.value.index == 0

    def test_truncated(self) -> None:
        """Test a token cut off before its terminator."""
        with pytest.raises(DecodeError, match="EOF while parsing at index 3"):
            from_bytes(b"i12", int)

    def test_accumulator_overflow(self) -> None:
        """Test digits beyond the 64-bit accumulator are rejected, not wrapped."""
        with pytest.raises(DecodeError) as exc_info:
            from_bytes(b"i18446744073709551616e", U64)
        assert exc_info.value.kind is ErrorKind.INTEGER_OUT_OF_RANGE
        assert exc_info.value.index == 0

    def test_negative_overflow_not_aliased(self) -> None:
        """Test a huge negative value is out of range rather than wrapping positive."""
        with pytest.raises(DecodeError, match="integer out of range at index 0"):
            from_bytes(b"i-18446744073709551615e", I64)


class TestLengthPrefixes:
    """Test ``<digits>:`` length prefixes through parse_integer()."""

    def test_length(self) -> None:
        """Test a length prefix consumes its colon."""
        cursor = Cursor(b"11:hello world")
        assert parse_integer(cursor, USIZE, parsing_str=True) == 11
        assert cursor.index == 3

    def test_zero_length(self) -> None:
        """Test the empty string prefix."""
        cursor = Cursor(b"0:")
        assert parse_integer(cursor, USIZE, parsing_str=True) == 0
        assert cursor.at_end()

    @pytest.mark.parametrize(
        "data,message",
        [
            (b"3a:bla", "expected `:` at index 1"),
            (b"55bla", "expected `:` at index 2"),
            (b"05:blabl", "leading zeros are invalid at index 0"),
            (b"-6:blabla", "expected string at index 0"),
            (b"blabla", "expected string at index 0"),
        ],
    )
    def test_rejected(self, data: bytes, message: str) -> None:
        """Test malformed prefixes report their exact error."""
        with pytest.raises(DecodeError) as exc_info:
            parse_integer(Cursor(data), USIZE, parsing_str=True)
        assert str(exc_info.value) == message


class TestIntWidth:
    """Test numeric width helpers."""

    def test_fits(self) -> None:
        """Test range checks."""
        assert I16.fits(-32768)
        assert not I16.fits(32768)
        assert U16.fits(65535)
        assert not U16.fits(-1)

    def test_signed(self) -> None:
        """Test signedness."""
        assert integer.I8.signed
        assert not integer.U8.signed

    def test_fits_without_bounds(self) -> None:
        """Test a width without integer bounds cannot range check."""
        with pytest.raises(ValueError, match="has no integer bounds"):
            integer.IntWidth("x").fits(1)

    def test_f32_conversion_rounds(self) -> None:
        """Test large integers lose precision in f32."""
        assert integer.F32.convert(16777217) == 16777216.0
