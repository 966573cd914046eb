"""Lazy traversal drivers for lists, dictionaries and enums.

Each driver borrows the decoder of the enclosing call and decides, by peeking
a single byte, whether another element follows. Nothing is pre-scanned.

A *seed* is any object with a ``deserialize(decoder)`` method, usually a
shape from :mod:`bencodec.codec.schema`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Sequence, Tuple

from ..exceptions import DecodeError, ErrorKind
from .integer import is_digit
from .visitor import END, Visitor

if TYPE_CHECKING:
    from .decoder import Decoder

LIST = ord("l")
DICT = ord("d")
INTEGER = ord("i")
END_MARKER = ord("e")


class Seed(Protocol):
    def deserialize(self, decoder: Decoder) -> Any: ...


class VariantSeed(Seed, Protocol):
    """Seed for a variant name, which may also arrive as a bare string."""

    def visit_str(self, value: str) -> Any: ...


class SeqAccess:
    """Feeds list elements to a visitor one at a time."""

    def __init__(self, decoder: Decoder) -> None:
        self._decoder = decoder

    def next_element(self, seed: Seed) -> Any:
        """Decode the next element, or return END at the closing ``e``."""
        cursor = self._decoder.cursor
        byte = cursor.peek_byte()
        if byte == END_MARKER:
            return END
        if byte in (LIST, DICT, INTEGER) or is_digit(byte):
            return seed.deserialize(self._decoder)
        raise cursor.error_at(ErrorKind.EXPECTED_END, cursor.index)


class MapAccess:
    """Feeds dictionary entries to a visitor one key/value at a time."""

    def __init__(self, decoder: Decoder) -> None:
        self._decoder = decoder

    def next_key(self, seed: Seed) -> Any:
        """Decode the next key, or return END at the closing ``e``.

        Raises:
            DecodeError: KEY_MUST_BE_A_STRING when the key position holds a
                list, dictionary or integer
        """
        cursor = self._decoder.cursor
        byte = cursor.peek_byte()
        if byte == END_MARKER:
            return END
        if is_digit(byte):
            return seed.deserialize(self._decoder)
        if byte in (LIST, DICT, INTEGER):
            raise cursor.error(ErrorKind.KEY_MUST_BE_A_STRING)
        raise cursor.error_at(ErrorKind.EXPECTED_END, cursor.index)

    def next_value(self, seed: Seed) -> Any:
        return seed.deserialize(self._decoder)


class EnumAccessBase:
    """Variant selection followed by payload access."""

    def variant(self, seed: VariantSeed) -> Tuple[Any, EnumAccessBase]:
        raise NotImplementedError

    def unit_variant(self) -> None:
        raise NotImplementedError

    def newtype_variant(self, seed: Seed) -> Any:
        raise NotImplementedError

    def tuple_variant(self, length: int, visitor: Visitor) -> Any:
        raise NotImplementedError

    def struct_variant(self, fields: Sequence[str], visitor: Visitor) -> Any:
        raise NotImplementedError


class EnumAccess(EnumAccessBase):
    """Single-entry dictionary form: ``d<variant-name><payload>e``.

    The decoder checks the closing ``e`` once the payload has been read, so a
    second entry surfaces as EXPECTED_END.
    """

    def __init__(self, decoder: Decoder) -> None:
        self._decoder = decoder

    def variant(self, seed: VariantSeed) -> Tuple[Any, EnumAccess]:
        return seed.deserialize(self._decoder), self

    def unit_variant(self) -> None:
        raise self._decoder.cursor.error(ErrorKind.EXPECTED_STRING)

    def newtype_variant(self, seed: Seed) -> Any:
        return seed.deserialize(self._decoder)

    def tuple_variant(self, length: int, visitor: Visitor) -> Any:
        return self._decoder.deserialize_seq(visitor)

    def struct_variant(self, fields: Sequence[str], visitor: Visitor) -> Any:
        return self._decoder.deserialize_map(visitor)


class StrEnumAccess(EnumAccessBase):
    """Bare byte-string form, which can only name a unit variant."""

    def __init__(self, name: str) -> None:
        self._name = name

    def variant(self, seed: VariantSeed) -> Tuple[Any, StrEnumAccess]:
        return seed.visit_str(self._name), self

    def unit_variant(self) -> None:
        return None

    def newtype_variant(self, seed: Seed) -> Any:
        raise DecodeError.custom("invalid type: unit variant, expected newtype variant")

    def tuple_variant(self, length: int, visitor: Visitor) -> Any:
        raise DecodeError.custom("invalid type: unit variant, expected tuple variant")

    def struct_variant(self, fields: Sequence[str], visitor: Visitor) -> Any:
        raise DecodeError.custom("invalid type: unit variant, expected struct variant")
