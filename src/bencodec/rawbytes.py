"""Raw byte-string pass-through for byte containers.

A ``list[int]`` is a list on the wire (``li1ei2ee``). Annotating a byte
container with :class:`RawBytes` makes it travel as one byte-string token
instead (``2:\\x01\\x02``). Works for lists and tuples of ints, ``bytes`` and
``bytearray``, fixed-size arrays (``RawBytes(length=20)``) and their
``Optional`` forms.

Example:
    >>> class Piece(BaseMessage):
    ...     digest: Annotated[tuple[int, ...], RawBytes(length=20)]
    ...     extra: Annotated[Optional[list[int]], RawBytes()] = None
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Union, get_args, get_origin

from .codec.visitor import Shape, invalid_length
from .exceptions import EncodeError, SchemaError

if TYPE_CHECKING:
    from .codec.decoder import Decoder
    from .codec.encoder import Encoder

CONTAINERS: dict[Any, Callable[[bytes], Any]] = {
    bytes: bytes,
    bytearray: bytearray,
    list: list,
    tuple: tuple,
}


@dataclass(frozen=True)
class RawBytes:
    """Annotation marker: encode the container as a single byte string.

    Attributes:
        length: Exact number of bytes for fixed-size arrays, or None
    """

    length: Optional[int] = None


def serialize(value: Any, encoder: Encoder) -> None:
    """Write a byte container (or None) as one raw byte-string token."""
    if value is None:
        encoder.serialize_none()
        return
    try:
        data = bytes(value)
    except (TypeError, ValueError) as err:
        raise EncodeError.custom(f"expected a byte container, got {value!r}") from err
    encoder.serialize_bytes(data)


def deserialize(
    decoder: Decoder,
    container: Callable[[bytes], Any] = bytes,
    length: Optional[int] = None,
    optional: bool = False,
) -> Any:
    """Read one raw byte-string token into ``container``."""
    return RawBytesShape(container, length, optional).deserialize(decoder)


class RawBytesShape(Shape):
    """Shape used by the schema layer for ``RawBytes`` annotations."""

    def __init__(
        self, container: Callable[[bytes], Any], length: Optional[int] = None, optional: bool = False
    ) -> None:
        self.container = container
        self.length = length
        self.optional = optional

    @classmethod
    def from_annotation(cls, annotation: Any, marker: RawBytes) -> RawBytesShape:
        optional = False
        origin = get_origin(annotation)
        if origin is Union or origin is types.UnionType:
            args = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(args) != 1 or len(args) == len(get_args(annotation)):
                raise SchemaError(f"RawBytes cannot be applied to {annotation!r}")
            optional = True
            annotation = args[0]
            origin = get_origin(annotation)

        container = CONTAINERS.get(origin if origin is not None else annotation)
        if container is None:
            raise SchemaError(f"RawBytes cannot be applied to {annotation!r}")
        return cls(container, marker.length, optional)

    def expecting(self) -> str:
        if self.length is not None:
            return f"a byte array of size {self.length}"
        if self.optional:
            return "optional byte array"
        return "a byte vec"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if value is not None and self.length is not None and len(value) != self.length:
            raise EncodeError.custom(f"expected {self.length} bytes, got {len(value)} bytes")
        serialize(value, encoder)

    def deserialize(self, decoder: Decoder) -> Any:
        if self.optional:
            return decoder.deserialize_option(self)
        return self._deserialize_bytes(decoder)

    def _deserialize_bytes(self, decoder: Decoder) -> Any:
        if self.length is not None:
            return decoder.deserialize_bytes(self)
        return decoder.deserialize_byte_buf(self)

    def visit_unit(self) -> Any:
        if not self.optional:
            return super().visit_unit()
        return None

    def visit_none(self) -> Any:
        if not self.optional:
            return super().visit_none()
        return None

    def visit_some(self, decoder: Decoder) -> Any:
        if not self.optional:
            return super().visit_some(decoder)
        return self._deserialize_bytes(decoder)

    def visit_borrowed_bytes(self, value: memoryview) -> Any:
        if self.length is not None and len(value) != self.length:
            raise invalid_length(min(len(value), self.length), self.expecting())
        return self.container(bytes(value))

    def visit_bytes(self, value: bytes) -> Any:
        return self.visit_borrowed_bytes(memoryview(value))
