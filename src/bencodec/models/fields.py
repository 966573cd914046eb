"""Field type helpers and utilities.

This module provides type aliases for fixed-width numbers and characters, and
convenience functions for declaring constrained byte fields.

Plain ``int`` fields are signed 64-bit and plain ``float`` fields are ``F64``.
The aliases carry both a Pydantic range constraint (checked when a message is
constructed) and a width marker the codec reads (checked on the wire).

Example:
    >>> class Peer(BaseMessage):
    ...     port: U16
    ...     flags: list[U8]
    ...     grade: Char
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec import integer


@dataclass(frozen=True)
class CharMarker:
    """Marks a ``str`` annotation as a single character."""


CHAR = CharMarker()


def _width(width: integer.IntWidth) -> Any:
    return Annotated[int, Field(ge=width.min_value, le=width.max_value), width]


I8 = _width(integer.I8)
I16 = _width(integer.I16)
I32 = _width(integer.I32)
I64 = _width(integer.I64)
U8 = _width(integer.U8)
U16 = _width(integer.U16)
U32 = _width(integer.U32)
U64 = _width(integer.U64)
F32 = Annotated[float, integer.F32]
F64 = Annotated[float, integer.F64]
Char = Annotated[str, Field(min_length=1, max_length=1), CHAR]


def FixedBytes(*, length: int, **kwargs: Any) -> FieldInfo:
    """Create a fixed-length bytes field.

    The decoder rejects byte strings of any other length with an
    ``invalid length`` error.

    Args:
        length: Exact length in bytes
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Handshake(BaseMessage):
        ...     info_hash: bytes = FixedBytes(length=20)
    """
    return cast(FieldInfo, Field(min_length=length, max_length=length, **kwargs))
