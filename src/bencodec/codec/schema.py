"""Schema introspection for type annotations and Pydantic models.

This module maps Python type annotations onto wire shapes. A shape knows how
to serialize a value through the Encoder and how to rebuild it from the
Decoder by acting as the Visitor for its own type. Pydantic models are
introspected field by field, in declaration order.

Example:
    >>> shape = shape_for(list[int])
    >>> schema = MessageSchema.from_model(Peer)
    >>> [field.name for field in schema.fields]
    ['ip', 'port', 'peer id']
"""

from __future__ import annotations

import enum
import types
from collections.abc import Mapping
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from ..exceptions import DecodeError, EncodeError, SchemaError
from ..models.fields import CharMarker
from ..rawbytes import RawBytes, RawBytesShape
from .integer import F64, I64, U64, IntWidth
from .visitor import (
    END,
    IgnoredAny,
    Shape,
    duplicate_field,
    invalid_length,
    missing_field,
    unknown_variant,
)

if TYPE_CHECKING:
    from .access import EnumAccessBase, MapAccess, SeqAccess
    from .decoder import Decoder
    from .encoder import Encoder

IGNORED = IgnoredAny()


def _type_name(value: Any) -> str:
    return type(value).__name__


class AnyShape(Shape):
    """Self-describing values: int, str, list and dict.

    Encoding dispatches on the runtime type of each value.
    """

    def expecting(self) -> str:
        return "any value"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if value is None:
            encoder.serialize_none()
        elif isinstance(value, bool):
            encoder.serialize_bool(value)
        elif isinstance(value, int):
            encoder.serialize_number(I64 if I64.fits(value) else U64, value)
        elif isinstance(value, float):
            encoder.serialize_f64(value)
        elif isinstance(value, str):
            encoder.serialize_str(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            encoder.serialize_bytes(value)
        elif isinstance(value, (enum.Enum, BaseModel)):
            if getattr(type(value), "bencode_variant", None) is not None:
                UnionShape((type(value),)).serialize(value, encoder)
            else:
                shape_for(type(value)).serialize(value, encoder)
        elif isinstance(value, Mapping):
            compound = encoder.serialize_map(len(value))
            for key, item in value.items():
                compound.serialize_key(key, self)
                compound.serialize_value(item, self)
            compound.end()
        elif isinstance(value, (list, tuple, set, frozenset)):
            compound = encoder.serialize_seq(len(value))
            for item in value:
                compound.serialize_element(item, self)
            compound.end()
        else:
            raise EncodeError.custom(f"unsupported type {_type_name(value)}")

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_any(self)

    def visit_bool(self, value: bool) -> bool:
        return value

    def visit_int(self, value: int) -> int:
        return value

    def visit_float(self, value: float) -> float:
        return value

    def visit_str(self, value: str) -> str:
        return value

    def visit_bytes(self, value: bytes) -> bytes:
        return value

    def visit_unit(self) -> None:
        return None

    def visit_none(self) -> None:
        return None

    def visit_some(self, decoder: Decoder) -> Any:
        return self.deserialize(decoder)

    def visit_seq(self, access: SeqAccess) -> List[Any]:
        items = []
        while (item := access.next_element(self)) is not END:
            items.append(item)
        return items

    def visit_map(self, access: MapAccess) -> Dict[Any, Any]:
        result = {}
        while (key := access.next_key(self)) is not END:
            result[key] = access.next_value(self)
        return result


class BoolShape(Shape):
    def expecting(self) -> str:
        return "a boolean"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, bool):
            raise EncodeError.custom(f"expected bool, got {_type_name(value)}")
        encoder.serialize_bool(value)

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_bool(self)

    def visit_bool(self, value: bool) -> bool:
        return value


class IntShape(Shape):
    def __init__(self, width: IntWidth) -> None:
        self.width = width

    def expecting(self) -> str:
        return f"{self.width.name}"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, int):
            raise EncodeError.custom(f"expected int, got {_type_name(value)}")
        encoder.serialize_number(self.width, value)

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_number(self.width, self)

    def visit_int(self, value: int) -> int:
        return value


class FloatShape(Shape):
    def __init__(self, width: IntWidth) -> None:
        self.width = width

    def expecting(self) -> str:
        return f"{self.width.name}"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, (int, float)):
            raise EncodeError.custom(f"expected float, got {_type_name(value)}")
        encoder.serialize_float(self.width, float(value))

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_number(self.width, self)

    def visit_float(self, value: float) -> float:
        return value

    def visit_int(self, value: int) -> float:
        return float(value)


class CharShape(Shape):
    def expecting(self) -> str:
        return "a character"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, str):
            raise EncodeError.custom(f"expected str, got {_type_name(value)}")
        encoder.serialize_char(value)

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_char(self)

    def visit_char(self, value: str) -> str:
        return value

    def visit_str(self, value: str) -> str:
        if len(value) != 1:
            raise DecodeError.custom(f'invalid value: string "{value}", expected a character')
        return value


class StrShape(Shape):
    def expecting(self) -> str:
        return "a string"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, str):
            raise EncodeError.custom(f"expected str, got {_type_name(value)}")
        encoder.serialize_str(value)

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_string(self)

    def visit_str(self, value: str) -> str:
        return value


class IdentifierShape(StrShape):
    """Field and variant names."""

    def expecting(self) -> str:
        return "an identifier"

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_identifier(self)


IDENTIFIER = IdentifierShape()


class VariantNameShape(IdentifierShape):
    """Variant names, rejecting any name the enum does not declare."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = names

    def expecting(self) -> str:
        return "variant identifier"

    def visit_str(self, value: str) -> str:
        if value not in self.names:
            raise unknown_variant(value, self.names)
        return value


class BytesShape(Shape):
    """``bytes``/``bytearray`` as one byte string, optionally of fixed length."""

    def __init__(self, container: Callable[[bytes], Any] = bytes, length: Optional[int] = None):
        self.container = container
        self.length = length

    def expecting(self) -> str:
        if self.length is not None:
            return f"a byte array of size {self.length}"
        return "byte array"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise EncodeError.custom(f"expected bytes, got {_type_name(value)}")
        if self.length is not None and len(value) != self.length:
            raise EncodeError.custom(f"expected {self.length} bytes, got {len(value)} bytes")
        encoder.serialize_bytes(value)

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_byte_buf(self)

    def visit_bytes(self, value: bytes) -> Any:
        if self.length is not None and len(value) != self.length:
            raise invalid_length(min(len(value), self.length), self.expecting())
        return self.container(value)


class UnitShape(Shape):
    def expecting(self) -> str:
        return "unit"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if value is not None:
            raise EncodeError.custom(f"expected None, got {_type_name(value)}")
        encoder.serialize_unit()

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_unit(self)

    def visit_unit(self) -> None:
        return None


class OptionShape(Shape):
    """Presence-based optional value: ``None`` is written as nothing at all."""

    def __init__(self, inner: Shape) -> None:
        self.inner = inner

    def expecting(self) -> str:
        return "option"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if value is None:
            encoder.serialize_none()
        else:
            encoder.serialize_some(value, self.inner)

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_option(self)

    def visit_unit(self) -> None:
        return None

    def visit_none(self) -> None:
        return None

    def visit_some(self, decoder: Decoder) -> Any:
        return self.inner.deserialize(decoder)


class SeqShape(Shape):
    """Homogeneous sequences: list, set, frozenset and ``tuple[X, ...]``."""

    def __init__(self, element: Shape, container: Callable[[List[Any]], Any] = list) -> None:
        self.element = element
        self.container = container

    def expecting(self) -> str:
        return "a sequence"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise EncodeError.custom(f"expected a sequence, got {_type_name(value)}")
        compound = encoder.serialize_seq(len(value))
        for item in value:
            compound.serialize_element(item, self.element)
        compound.end()

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_seq(self)

    def visit_seq(self, access: SeqAccess) -> Any:
        items = []
        while (item := access.next_element(self.element)) is not END:
            items.append(item)
        return self.container(items)


class TupleShape(Shape):
    """Fixed-length heterogeneous tuples."""

    def __init__(self, elements: Sequence[Shape]) -> None:
        self.elements = list(elements)

    def expecting(self) -> str:
        return f"a tuple of size {len(self.elements)}"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, (list, tuple)) or len(value) != len(self.elements):
            raise EncodeError.custom(f"expected {self.expecting()}, got {value!r}")
        compound = encoder.serialize_tuple(len(self.elements))
        for item, shape in zip(value, self.elements):
            compound.serialize_element(item, shape)
        compound.end()

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_tuple(len(self.elements), self)

    def visit_seq(self, access: SeqAccess) -> Tuple[Any, ...]:
        items = []
        for index, shape in enumerate(self.elements):
            item = access.next_element(shape)
            if item is END:
                raise invalid_length(index, self.expecting())
            items.append(item)
        return tuple(items)


class MapShape(Shape):
    """Dictionaries. Entries are written in iteration order, never sorted."""

    def __init__(self, key: Shape, value: Shape) -> None:
        self.key = key
        self.value = value

    def expecting(self) -> str:
        return "a map"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, Mapping):
            raise EncodeError.custom(f"expected a mapping, got {_type_name(value)}")
        compound = encoder.serialize_map(len(value))
        for key, item in value.items():
            compound.serialize_key(key, self.key)
            compound.serialize_value(item, self.value)
        compound.end()

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_map(self)

    def visit_map(self, access: MapAccess) -> Dict[Any, Any]:
        result = {}
        while (key := access.next_key(self.key)) is not END:
            result[key] = access.next_value(self.value)
        return result


class EnumShape(Shape):
    """``enum.Enum`` classes: unit variants named by member name."""

    def __init__(self, enum_type: Type[enum.Enum]) -> None:
        if len(enum_type) == 0:
            raise SchemaError(f"Enum {enum_type.__name__} has no values")
        self.enum_type = enum_type
        self.names = [member.name for member in enum_type]

    def expecting(self) -> str:
        return f"enum {self.enum_type.__name__}"

    def serialize(self, value: Any, encoder: Encoder) -> None:
        if not isinstance(value, self.enum_type):
            raise EncodeError.custom(
                f"expected {self.enum_type.__name__}, got {_type_name(value)}"
            )
        encoder.serialize_unit_variant(
            self.enum_type.__name__, self.names.index(value.name), value.name
        )

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_enum(self.enum_type.__name__, self.names, self)

    def visit_enum(self, access: EnumAccessBase) -> enum.Enum:
        name, variant = access.variant(VariantNameShape(self.names))
        variant.unit_variant()
        return self.enum_type[name]


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single model field.

    Attributes:
        name: Dictionary key on the wire (the field alias, if any)
        attribute: Python attribute name on the model
        shape: Wire shape of the field's annotation
        required: Whether the field has no default
        optional: Whether the annotation admits None
    """

    name: str
    attribute: str
    shape: Shape
    required: bool
    optional: bool


class MessageSchema(Shape):
    """Schema information for a Pydantic model.

    Fields are introspected lazily on first use, so models may refer to
    themselves. Obtain instances through :meth:`from_model` (cached per class).
    """

    _cache: Dict[type, MessageSchema] = {}

    def __init__(self, model_class: Type[BaseModel]) -> None:
        self.model_class = model_class
        self.style: str = getattr(model_class, "bencode_style", "struct")
        self._fields: Optional[List[FieldSchema]] = None

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> MessageSchema:
        """Return the (cached) schema of ``model_class``."""
        schema = cls._cache.get(model_class)
        if schema is None:
            schema = cls._cache[model_class] = cls(model_class)
        return schema

    @property
    def name(self) -> str:
        return self.model_class.__name__

    @property
    def variant_name(self) -> str:
        return getattr(self.model_class, "bencode_variant", None) or self.name

    @property
    def fields(self) -> List[FieldSchema]:
        if self._fields is None:
            self._fields = self._introspect()
        return self._fields

    def field_names(self) -> List[str]:
        return [field.name for field in self.fields]

    def _introspect(self) -> List[FieldSchema]:
        """Introspect the model and build field schemas."""
        fields = []
        # Pydantic v2 keeps non-constraint Annotated metadata in field_info.metadata
        for field_name, field_info in self.model_class.model_fields.items():
            annotation = field_info.annotation
            if annotation is None:
                raise SchemaError(f"Field {field_name} has no type annotation")
            fields.append(
                FieldSchema(
                    name=field_info.alias or field_name,
                    attribute=field_name,
                    shape=_build(annotation, tuple(field_info.metadata)),
                    required=field_info.is_required(),
                    optional=_is_optional(annotation),
                )
            )

        if self.style == "newtype" and len(fields) != 1:
            raise SchemaError(f"{self.name}: newtype style requires exactly one field")
        if self.style == "unit" and fields:
            raise SchemaError(f"{self.name}: unit style cannot declare fields")
        return fields

    def expecting(self) -> str:
        return f"struct {self.name}"

    # Encoding

    def _check_instance(self, value: Any) -> None:
        if not isinstance(value, self.model_class):
            raise EncodeError.custom(f"expected {self.name}, got {_type_name(value)}")

    def serialize(self, value: Any, encoder: Encoder) -> None:
        self._check_instance(value)
        if self.style == "unit":
            encoder.serialize_unit_struct(self.name)
        elif self.style == "newtype":
            field = self.fields[0]
            encoder.serialize_newtype_struct(self.name, getattr(value, field.attribute), field.shape)
        elif self.style == "tuple":
            compound = encoder.serialize_tuple_struct(self.name, len(self.fields))
            self.serialize_elements(value, compound)
            compound.end()
        else:
            compound = encoder.serialize_struct(self.name, len(self.fields))
            self.serialize_fields(value, compound)
            compound.end()

    def serialize_elements(self, value: Any, compound: Any) -> None:
        for field in self.fields:
            compound.serialize_element(getattr(value, field.attribute), field.shape)

    def serialize_fields(self, value: Any, compound: Any) -> None:
        for field in self.fields:
            item = getattr(value, field.attribute)
            # None has no token; writing its key would leave a key without
            # a value.
            if item is None and field.optional:
                continue
            compound.serialize_field(field.name, item, field.shape)

    # Decoding

    def deserialize(self, decoder: Decoder) -> Any:
        if self.style == "unit":
            return decoder.deserialize_unit_struct(self.name, self)
        if self.style == "newtype":
            return decoder.deserialize_newtype_struct(self.name, self)
        if self.style == "tuple":
            return decoder.deserialize_tuple_struct(self.name, len(self.fields), self)
        return decoder.deserialize_struct(self.name, self.field_names(), self)

    def build(self, values: Dict[str, Any]) -> Any:
        """Fill in absent fields and construct the model."""
        for field in self.fields:
            if field.name in values or not field.required:
                continue
            if field.optional:
                values[field.name] = None
            else:
                raise missing_field(field.name)
        try:
            return self.model_class(**values)
        except ValidationError as err:
            raise DecodeError.custom(f"Failed to construct {self.name}: {err}") from err

    def visit_unit(self) -> Any:
        if self.fields:
            return super().visit_unit()
        return self.build({})

    def visit_newtype_struct(self, decoder: Decoder) -> Any:
        field = self.fields[0]
        return self.build({field.name: field.shape.deserialize(decoder)})

    def visit_seq(self, access: SeqAccess) -> Any:
        values = {}
        for index, field in enumerate(self.fields):
            item = access.next_element(field.shape)
            if item is END:
                raise invalid_length(
                    index, f"tuple struct {self.name} with {len(self.fields)} elements"
                )
            values[field.name] = item
        return self.build(values)

    def visit_map(self, access: MapAccess) -> Any:
        by_name = {field.name: field for field in self.fields}
        values: Dict[str, Any] = {}
        while (key := access.next_key(IDENTIFIER)) is not END:
            field = by_name.get(key)
            if field is None:
                access.next_value(IGNORED)
                continue
            if field.name in values:
                raise duplicate_field(field.name)
            values[field.name] = access.next_value(field.shape)
        return self.build(values)


class UnionShape(Shape):
    """Externally tagged union of message variants.

    Each member's ``bencode_style`` picks its variant form: ``unit`` (bare
    name), ``newtype`` (``{name: value}``), ``tuple`` (``{name: [...]}``) or
    ``struct`` (``{name: {...}}``).
    """

    def __init__(self, variants: Sequence[Type[BaseModel]]) -> None:
        self.schemas = [MessageSchema.from_model(variant) for variant in variants]
        self.by_name = {schema.variant_name: schema for schema in self.schemas}
        if len(self.by_name) != len(self.schemas):
            raise SchemaError(f"duplicate variant names in {self.name}")

    @property
    def name(self) -> str:
        return "|".join(schema.name for schema in self.schemas)

    def expecting(self) -> str:
        return f"enum {self.name}"

    def _select(self, value: Any) -> Tuple[int, MessageSchema]:
        for index, schema in enumerate(self.schemas):
            if type(value) is schema.model_class:
                return index, schema
        for index, schema in enumerate(self.schemas):
            if isinstance(value, schema.model_class):
                return index, schema
        raise EncodeError.custom(f"expected one of {self.name}, got {_type_name(value)}")

    def serialize(self, value: Any, encoder: Encoder) -> None:
        index, schema = self._select(value)
        variant = schema.variant_name
        if schema.style == "unit":
            encoder.serialize_unit_variant(self.name, index, variant)
        elif schema.style == "newtype":
            field = schema.fields[0]
            encoder.serialize_newtype_variant(
                self.name, index, variant, getattr(value, field.attribute), field.shape
            )
        elif schema.style == "tuple":
            compound = encoder.serialize_tuple_variant(self.name, index, variant, len(schema.fields))
            schema.serialize_elements(value, compound)
            compound.end()
        else:
            compound = encoder.serialize_struct_variant(
                self.name, index, variant, len(schema.fields)
            )
            schema.serialize_fields(value, compound)
            compound.end()

    def deserialize(self, decoder: Decoder) -> Any:
        return decoder.deserialize_enum(self.name, list(self.by_name), self)

    def visit_enum(self, access: EnumAccessBase) -> Any:
        name, variant = access.variant(VariantNameShape(list(self.by_name)))
        schema = self.by_name[name]
        if schema.style == "unit":
            variant.unit_variant()
            return schema.build({})
        if schema.style == "newtype":
            field = schema.fields[0]
            return schema.build({field.name: variant.newtype_variant(field.shape)})
        if schema.style == "tuple":
            return variant.tuple_variant(len(schema.fields), schema)
        return variant.struct_variant(schema.field_names(), schema)


ANY = AnyShape()
BOOL = BoolShape()
STR = StrShape()
CHAR = CharShape()
UNIT = UnitShape()

CONTAINERS: Dict[Any, Callable[[List[Any]], Any]] = {
    list: list,
    set: set,
    frozenset: frozenset,
}


def _is_optional(annotation: Any) -> bool:
    if get_origin(annotation) is Annotated:
        return _is_optional(get_args(annotation)[0])
    if annotation in (Any, object, None, type(None)):
        return True
    return _is_union(annotation) and type(None) in get_args(annotation)


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def _flatten(metadata: Sequence[Any]) -> List[Any]:
    # Field(...) inside Annotated carries its constraints in its own metadata
    flat: List[Any] = []
    for item in metadata:
        if isinstance(item, FieldInfo):
            flat.extend(item.metadata)
        else:
            flat.append(item)
    return flat


def _build(annotation: Any, metadata: Sequence[Any] = ()) -> Shape:
    """Build the shape of ``annotation`` qualified by Annotated ``metadata``."""
    if get_origin(annotation) is Annotated:
        base, *extra = get_args(annotation)
        return _build(base, (*metadata, *extra))

    markers = _flatten(metadata)
    for marker in markers:
        if isinstance(marker, RawBytes):
            return RawBytesShape.from_annotation(annotation, marker)

    if _is_union(annotation):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) < len(get_args(annotation)):
            inner = args[0] if len(args) == 1 else Union[tuple(args)]  # type: ignore[valid-type]
            return OptionShape(_build(inner, metadata))
        if all(_is_model(arg) for arg in args):
            return UnionShape(args)
        raise SchemaError(f"unsupported Union {annotation!r}: members must all be message models")

    if annotation is Any or annotation is object:
        return ANY
    if annotation is None or annotation is type(None):
        return UNIT
    if annotation is bool:
        return BOOL

    if annotation is int or annotation is float:
        width = next((m for m in markers if isinstance(m, IntWidth)), None)
        if annotation is float:
            return FloatShape(width if width is not None and width.is_float else F64)
        return IntShape(width if width is not None and not width.is_float else I64)

    if annotation is str:
        if any(isinstance(m, CharMarker) for m in markers):
            return CHAR
        return STR

    if annotation is bytes or annotation is bytearray:
        min_length = next((m.min_length for m in markers if hasattr(m, "min_length")), None)
        max_length = next((m.max_length for m in markers if hasattr(m, "max_length")), None)
        fixed = max_length if min_length is not None and min_length == max_length else None
        return BytesShape(annotation, fixed)

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin in CONTAINERS:
        return SeqShape(_build(args[0] if args else Any), CONTAINERS[origin])
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return SeqShape(_build(args[0]), tuple)
        if args == ((),):
            return TupleShape([])
        return TupleShape([_build(arg) for arg in args])
    if origin is dict or origin is Mapping:
        key, value = args if args else (Any, Any)
        return MapShape(_build(key), _build(value))
    if annotation in (list, set, frozenset):
        return SeqShape(ANY, CONTAINERS[annotation])
    if annotation is tuple:
        return SeqShape(ANY, tuple)
    if annotation is dict:
        return MapShape(ANY, ANY)

    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return EnumShape(annotation)
    if _is_model(annotation):
        if getattr(annotation, "bencode_variant", None) is not None:
            return UnionShape([annotation])
        return MessageSchema.from_model(annotation)

    raise SchemaError(
        f"unsupported type {annotation!r}. Supported: bool, int, float, str, bytes, "
        "None, Optional, list, set, tuple, dict, Enum, Pydantic models and unions of models."
    )


def shape_for(annotation: Any) -> Shape:
    """Return the wire shape for a type annotation.

    Raises:
        SchemaError: If the annotation cannot be mapped to a wire shape
    """
    return _build(annotation)
