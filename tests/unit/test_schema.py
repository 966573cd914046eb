"""Unit tests for schema introspection."""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Optional, Union

import pytest
from pydantic import Field

from bencodec import U16, BaseMessage, SchemaError
from bencodec.codec.schema import (
    AnyShape,
    BytesShape,
    CharShape,
    FloatShape,
    IntShape,
    MapShape,
    MessageSchema,
    OptionShape,
    SeqShape,
    TupleShape,
    UnionShape,
    shape_for,
)
from bencodec.models import F32, Char, FixedBytes


class Empty(enum.Enum):
    """Enum without members."""


class Peer(BaseMessage):
    """Peer entry."""

    ip: str
    port: U16
    peer_id: Optional[bytes] = Field(default=None, alias="peer id")


class Node(BaseMessage):
    """Self-referencing message."""

    name: str
    children: list[Node] = []


class Left(BaseMessage):
    """Union member."""

    value: int


class Right(BaseMessage):
    """Union member with a custom variant name."""

    bencode_variant: ClassVar[Optional[str]] = "Left"

    value: int


class TestShapeFor:
    """Test annotation to shape mapping."""

    def test_scalars(self) -> None:
        """Test scalar annotations."""
        assert isinstance(shape_for(int), IntShape)
        assert shape_for(int).width.name == "i64"
        assert shape_for(U16).width.name == "u16"
        assert isinstance(shape_for(float), FloatShape)
        assert shape_for(F32).width.name == "f32"
        assert isinstance(shape_for(Char), CharShape)
        assert isinstance(shape_for(Any), AnyShape)

    def test_containers(self) -> None:
        """Test container annotations."""
        assert isinstance(shape_for(list[int]), SeqShape)
        assert isinstance(shape_for(frozenset[str]), SeqShape)
        assert isinstance(shape_for(tuple[int, str]), TupleShape)
        assert isinstance(shape_for(dict[str, int]), MapShape)
        assert isinstance(shape_for(Optional[int]), OptionShape)
        assert isinstance(shape_for(int | None), OptionShape)

    def test_bytes(self) -> None:
        """Test byte annotations."""
        shape = shape_for(bytes)
        assert isinstance(shape, BytesShape)
        assert shape.length is None

    def test_unsupported_type(self) -> None:
        """Test an annotation with no wire shape."""
        with pytest.raises(SchemaError, match="unsupported type"):
            shape_for(complex)

    def test_mixed_union(self) -> None:
        """Test unions of plain types are rejected."""
        with pytest.raises(SchemaError, match="unsupported Union"):
            shape_for(Union[int, str])

    def test_message_union(self) -> None:
        """Test unions of messages."""
        assert isinstance(shape_for(Union[Left, Peer]), UnionShape)

    def test_duplicate_variant_names(self) -> None:
        """Test two members claiming the same variant name."""
        with pytest.raises(SchemaError, match="duplicate variant names"):
            shape_for(Union[Left, Right])

    def test_empty_enum(self) -> None:
        """Test an enum without members."""
        with pytest.raises(SchemaError, match="has no values"):
            shape_for(Empty)


class TestMessageSchema:
    """Test model introspection."""

    def test_fields_in_declaration_order(self) -> None:
        """Test field order and wire names."""
        schema = MessageSchema.from_model(Peer)
        assert [field.name for field in schema.fields] == ["ip", "port", "peer id"]
        assert [field.attribute for field in schema.fields] == ["ip", "port", "peer_id"]

    def test_required_and_optional(self) -> None:
        """Test field flags."""
        fields = {field.attribute: field for field in MessageSchema.from_model(Peer).fields}
        assert fields["ip"].required
        assert not fields["peer_id"].required
        assert fields["peer_id"].optional

    def test_untyped_field_is_optional(self) -> None:
        """Test an Any field admits None like an Optional one."""

        class Loose(BaseMessage):
            value: Any = None

        assert MessageSchema.from_model(Loose).fields[0].optional

    def test_cached(self) -> None:
        """Test schemas are built once per class."""
        assert MessageSchema.from_model(Peer) is MessageSchema.from_model(Peer)

    def test_fixed_bytes(self) -> None:
        """Test FixedBytes sets the byte length."""

        class Handshake(BaseMessage):
            info_hash: bytes = FixedBytes(length=20)

        shape = MessageSchema.from_model(Handshake).fields[0].shape
        assert isinstance(shape, BytesShape)
        assert shape.length == 20

    def test_recursive_model(self) -> None:
        """Test a model that contains itself."""
        from bencodec import decode, encode

        tree = Node(name="root", children=[Node(name="leaf")])
        data = encode(tree)
        assert data == b"d4:name4:root8:childrenld4:name4:leaf8:childrenleeee"
        assert decode(Node, data) == tree


class TestStyles:
    """Test bencode_style validation."""

    def test_invalid_style(self) -> None:
        """Test an unknown style is rejected at class creation."""
        with pytest.raises(SchemaError, match="bencode_style must be one of"):

            class Broken(BaseMessage):
                bencode_style: ClassVar[str] = "table"

    def test_newtype_needs_one_field(self) -> None:
        """Test newtype messages must have exactly one field."""

        class TwoFields(BaseMessage):
            bencode_style: ClassVar[str] = "newtype"

            a: int
            b: int

        with pytest.raises(SchemaError, match="newtype style requires exactly one field"):
            MessageSchema.from_model(TwoFields).fields

    def test_unit_has_no_fields(self) -> None:
        """Test unit messages cannot declare fields."""

        class Loaded(BaseMessage):
            bencode_style: ClassVar[str] = "unit"

            a: int

        with pytest.raises(SchemaError, match="unit style cannot declare fields"):
            MessageSchema.from_model(Loaded).fields
