"""Bencode encoder.

This module provides the Encoder, which writes wire tokens to a sink in
exactly the order values are produced, and the to_bytes()/to_writer()/encode()
entry points. Composites stream: every element is written as soon as it is
serialized, nothing is buffered in between.

Dictionary keys are written in the order the caller supplies them. They are
never sorted here; consumers that need canonical (sorted) dictionaries must
order their keys before encoding.
"""

from __future__ import annotations

import io
import logging
import math
from typing import TYPE_CHECKING, Any, BinaryIO, Optional, Protocol

from ..exceptions import EncodeError, ErrorKind
from .integer import F32, F64, I8, I16, I32, I64, U8, U16, U32, U64, IntWidth
from .schema import shape_for

if TYPE_CHECKING:
    from .schema import Shape

logger = logging.getLogger(__name__)


class Writer(Protocol):
    def write(self, data: bytes, /) -> Any: ...


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def _truncate(value: float) -> int:
    """Truncate toward zero, saturating at the signed 64-bit bounds."""
    if math.isnan(value):
        return 0
    if value >= INT64_MAX:
        return INT64_MAX
    if value <= INT64_MIN:
        return INT64_MIN
    return math.trunc(value)


class Encoder:
    """Writes Bencode tokens to a sink.

    Example:
        >>> buffer = io.BytesIO()
        >>> encoder = Encoder(buffer)
        >>> encoder.serialize_i64(-42)
        >>> buffer.getvalue()
        b'i-42e'
    """

    def __init__(self, writer: Writer) -> None:
        """Initialize an encoder.

        Args:
            writer: Sink with a ``write(bytes)`` method (file, BytesIO, socket
                file...)
        """
        self._writer = writer

    def write_raw(self, data: bytes) -> None:
        """Write bytes to the sink, wrapping sink failures.

        Raises:
            EncodeError: IO kind, chained to the original OSError
        """
        try:
            self._writer.write(data)
        except OSError as err:
            raise EncodeError.io(err) from err

    # Scalars

    def serialize_bool(self, value: bool) -> None:
        self.serialize_i64(1 if value else 0)

    def serialize_number(self, width: IntWidth, value: int) -> None:
        """Write ``i<decimal>e`` after checking ``value`` fits ``width``."""
        if not width.fits(value):
            raise EncodeError(
                ErrorKind.INTEGER_OUT_OF_RANGE,
                None,
                f"integer out of range: {value} does not fit {width.name}",
            )
        self.write_raw(b"i" + str(value).encode("ascii") + b"e")

    def serialize_i8(self, value: int) -> None:
        self.serialize_number(I8, value)

    def serialize_i16(self, value: int) -> None:
        self.serialize_number(I16, value)

    def serialize_i32(self, value: int) -> None:
        self.serialize_number(I32, value)

    def serialize_i64(self, value: int) -> None:
        self.serialize_number(I64, value)

    def serialize_u8(self, value: int) -> None:
        self.serialize_number(U8, value)

    def serialize_u16(self, value: int) -> None:
        self.serialize_number(U16, value)

    def serialize_u32(self, value: int) -> None:
        self.serialize_number(U32, value)

    def serialize_u64(self, value: int) -> None:
        self.serialize_number(U64, value)

    def serialize_float(self, width: IntWidth, value: float) -> None:
        """Write a float as its integer part.

        The wire format has no fractional numbers, so this is lossy and is
        reported as a warning rather than an error.
        """
        truncated = _truncate(value)
        logger.warning(
            'Possible data corruption detected with value "%s" (%s): '
            "Bencoding only defines support for integers, value was converted to %s",
            value,
            width.name,
            truncated,
        )
        self.serialize_i64(truncated)

    def serialize_f32(self, value: float) -> None:
        self.serialize_float(F32, value)

    def serialize_f64(self, value: float) -> None:
        self.serialize_float(F64, value)

    def serialize_char(self, value: str) -> None:
        # A non-ASCII character becomes a multi-byte string token.
        if len(value) != 1:
            raise EncodeError.custom(f"expected a single character, got {value!r}")
        self.serialize_str(value)

    def serialize_str(self, value: str) -> None:
        self.serialize_bytes(value.encode("utf-8"))

    def serialize_bytes(self, value: bytes | bytearray | memoryview) -> None:
        self.write_raw(str(len(value)).encode("ascii") + b":")
        self.write_raw(bytes(value))

    # Absence

    def serialize_none(self) -> None:
        self.serialize_unit()

    def serialize_some(self, value: Any, shape: Shape) -> None:
        shape.serialize(value, self)

    def serialize_unit(self) -> None:
        pass

    def serialize_unit_struct(self, name: str) -> None:
        self.serialize_unit()

    # Variants and newtypes

    def serialize_unit_variant(self, name: str, index: int, variant: str) -> None:
        self.serialize_str(variant)

    def serialize_newtype_struct(self, name: str, value: Any, shape: Shape) -> None:
        shape.serialize(value, self)

    def serialize_newtype_variant(
        self, name: str, index: int, variant: str, value: Any, shape: Shape
    ) -> None:
        self.write_raw(b"d")
        self.serialize_str(variant)
        shape.serialize(value, self)
        self.write_raw(b"e")

    # Composites

    def serialize_seq(self, length: Optional[int] = None) -> Compound:
        self.write_raw(b"l")
        return Compound(self, b"e")

    def serialize_tuple(self, length: int) -> Compound:
        return self.serialize_seq(length)

    def serialize_tuple_struct(self, name: str, length: int) -> Compound:
        return self.serialize_seq(length)

    def serialize_tuple_variant(self, name: str, index: int, variant: str, length: int) -> Compound:
        self.write_raw(b"d")
        self.serialize_str(variant)
        self.write_raw(b"l")
        return Compound(self, b"ee")

    def serialize_map(self, length: Optional[int] = None) -> Compound:
        self.write_raw(b"d")
        return Compound(self, b"e")

    def serialize_struct(self, name: str, length: int) -> Compound:
        return self.serialize_map(length)

    def serialize_struct_variant(
        self, name: str, index: int, variant: str, length: int
    ) -> Compound:
        self.write_raw(b"d")
        self.serialize_str(variant)
        self.write_raw(b"d")
        return Compound(self, b"ee")


class Compound:
    """An open list or dictionary being written element by element."""

    def __init__(self, encoder: Encoder, closing: bytes) -> None:
        self._encoder = encoder
        self._closing = closing

    def serialize_element(self, value: Any, shape: Shape) -> None:
        shape.serialize(value, self._encoder)

    def serialize_key(self, key: Any, shape: Shape) -> None:
        shape.serialize(key, self._encoder)

    def serialize_value(self, value: Any, shape: Shape) -> None:
        shape.serialize(value, self._encoder)

    def serialize_field(self, key: str, value: Any, shape: Shape) -> None:
        self._encoder.serialize_str(key)
        shape.serialize(value, self._encoder)

    def end(self) -> None:
        self._encoder.write_raw(self._closing)


def to_writer(value: Any, writer: Writer | BinaryIO, type_: Any = None) -> None:
    """Encode ``value`` directly into ``writer``.

    Args:
        value: Value to encode
        writer: Sink with a ``write(bytes)`` method
        type_: Type annotation describing ``value``; inferred from the
            runtime value when omitted

    Raises:
        SchemaError: If ``type_`` cannot be mapped to a wire shape
        EncodeError: If the value is invalid or the sink fails
    """
    shape = shape_for(type_ if type_ is not None else Any)
    shape.serialize(value, Encoder(writer))


def to_bytes(value: Any, type_: Any = None) -> bytes:
    """Encode ``value`` to a new byte buffer.

    Examples:
        ```python
        from bencodec import to_bytes

        to_bytes({"first": 1, "second": 2})   # b"d5:firsti1e6:secondi2ee"
        to_bytes([1, 2, 3], list[U8])         # b"li1ei2ei3ee"
        ```
    """
    buffer = io.BytesIO()
    to_writer(value, buffer, type_)
    return buffer.getvalue()


def encode(message: Any, type_: Any = None) -> bytes:
    """Encode a message to Bencode.

    Like to_bytes(), and additionally enforces the ``bencode_max_bytes``
    option of the message class.

    Raises:
        SchemaError: If message schema is invalid
        EncodeError: If a field value is invalid or the size limit is exceeded
    """
    encoded = to_bytes(message, type_)

    max_bytes = getattr(type(message), "bencode_max_bytes", None)
    if max_bytes is not None and len(encoded) > max_bytes:
        raise EncodeError.custom(
            f"Encoded message size ({len(encoded)} bytes) exceeds bencode_max_bytes={max_bytes}"
        )

    logger.debug("Encoded %s to %d bytes", type(message).__name__, len(encoded))
    return encoded
