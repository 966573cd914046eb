"""Visitor protocol between the decoder and typed values.

The decoder never builds a generic tree. Instead, each ``deserialize_*`` call
on the Decoder hands the value it found to one ``visit_*`` hook of a Visitor.
The visitor decides what Python object to build; hooks it does not override
reject the value with an ``invalid type`` error.

Composite hooks (``visit_seq``, ``visit_map``, ``visit_enum``) receive lazy
access objects from :mod:`bencodec.codec.access` and pull one element at a
time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from ..exceptions import DecodeError

if TYPE_CHECKING:
    from .access import EnumAccessBase, MapAccess, SeqAccess
    from .decoder import Decoder
    from .encoder import Encoder


class _End:
    """Marks the end of a list or dictionary during traversal."""

    def __repr__(self) -> str:
        return "END"


END = _End()


def invalid_type(unexpected: str, visitor: Visitor) -> DecodeError:
    return DecodeError.custom(f"invalid type: {unexpected}, expected {visitor.expecting()}")


def invalid_length(length: int, expected: str) -> DecodeError:
    return DecodeError.custom(f"invalid length {length}, expected {expected}")


def unknown_variant(variant: str, expected: Iterable[str]) -> DecodeError:
    names = [f"`{name}`" for name in expected]
    if not names:
        return DecodeError.custom(f"unknown variant `{variant}`, there are no variants")
    if len(names) == 1:
        return DecodeError.custom(f"unknown variant `{variant}`, expected {names[0]}")
    if len(names) == 2:
        return DecodeError.custom(
            f"unknown variant `{variant}`, expected {names[0]} or {names[1]}"
        )
    return DecodeError.custom(f"unknown variant `{variant}`, expected one of {', '.join(names)}")


def missing_field(name: str) -> DecodeError:
    return DecodeError.custom(f"missing field `{name}`")


def duplicate_field(name: str) -> DecodeError:
    return DecodeError.custom(f"duplicate field `{name}`")


class Visitor:
    """Capability set with one hook per wire shape.

    Subclasses override the hooks for the shapes they accept and
    :meth:`expecting` to describe themselves in error messages.
    """

    def expecting(self) -> str:
        return "a value"

    def visit_bool(self, value: bool) -> Any:
        raise invalid_type(f"boolean `{'true' if value else 'false'}`", self)

    def visit_int(self, value: int) -> Any:
        raise invalid_type(f"integer `{value}`", self)

    def visit_float(self, value: float) -> Any:
        raise invalid_type(f"floating point `{value}`", self)

    def visit_char(self, value: str) -> Any:
        return self.visit_str(value)

    def visit_str(self, value: str) -> Any:
        raise invalid_type(f'string "{value}"', self)

    def visit_borrowed_bytes(self, value: memoryview) -> Any:
        """Receive a zero-copy view into the input buffer.

        The view is only valid while the input buffer is alive and unchanged;
        the default copies it and forwards to :meth:`visit_bytes`.
        """
        return self.visit_bytes(bytes(value))

    def visit_bytes(self, value: bytes) -> Any:
        raise invalid_type("byte array", self)

    def visit_none(self) -> Any:
        raise invalid_type("Option value", self)

    def visit_some(self, decoder: Decoder) -> Any:
        raise invalid_type("Option value", self)

    def visit_unit(self) -> Any:
        raise invalid_type("unit value", self)

    def visit_newtype_struct(self, decoder: Decoder) -> Any:
        raise invalid_type("newtype struct", self)

    def visit_seq(self, access: SeqAccess) -> Any:
        raise invalid_type("sequence", self)

    def visit_map(self, access: MapAccess) -> Any:
        raise invalid_type("map", self)

    def visit_enum(self, access: EnumAccessBase) -> Any:
        raise invalid_type("enum", self)


class Shape(Visitor):
    """How one type travels on the wire."""

    def serialize(self, value: Any, encoder: Encoder) -> None:
        raise NotImplementedError

    def deserialize(self, decoder: Decoder) -> Any:
        raise NotImplementedError


class IgnoredAny(Visitor):
    """Accepts and discards any self-describing value."""

    def expecting(self) -> str:
        return "anything at all"

    def deserialize(self, decoder: Decoder) -> None:
        return decoder.deserialize_ignored_any(self)

    def visit_bool(self, value: bool) -> None:
        return None

    def visit_int(self, value: int) -> None:
        return None

    def visit_str(self, value: str) -> None:
        return None

    def visit_bytes(self, value: bytes) -> None:
        return None

    def visit_seq(self, access: SeqAccess) -> None:
        while access.next_element(self) is not END:
            pass
        return None

    def visit_map(self, access: MapAccess) -> None:
        while access.next_key(self) is not END:
            access.next_value(self)
        return None
