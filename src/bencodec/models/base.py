"""Base message class and bencodec-specific Pydantic configuration.

This module provides the BaseMessage class that bencodec messages should inherit from.
Wire options are declared as ClassVar attributes.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from ..exceptions import SchemaError

STYLES = ("struct", "tuple", "newtype", "unit")


class BaseMessage(BaseModel):
    """Base class for all bencodec messages.

    Fields are encoded in declaration order, as a dictionary keyed by field
    name unless ``bencode_style`` says otherwise.

    Example:
        >>> from typing import ClassVar, Optional
        >>> class Peer(BaseMessage):
        ...     ip: str
        ...     port: U16
        ...     peer_id: Optional[bytes] = None
        ...
        ...     bencode_max_bytes: ClassVar[Optional[int]] = 128

    Attributes:
        bencode_style: ``"struct"`` (dictionary, default), ``"tuple"`` (list of
            field values), ``"newtype"`` (the single field's value, no
            wrapper) or ``"unit"`` (no fields, no bytes)
        bencode_variant: Variant name used when the class appears in a
            ``Union`` of messages (defaults to the class name)
        bencode_max_bytes: Maximum encoded size in bytes enforced by encode()
    """

    model_config = ConfigDict(
        # Coerce compatible input (e.g. bytes for a bytearray field)
        strict=False,
        arbitrary_types_allowed=True,
        validate_assignment=True,
        # Unknown dictionary keys are skipped by the decoder, never stored
        extra="forbid",
    )

    bencode_style: ClassVar[str] = "struct"
    bencode_variant: ClassVar[str | None] = None
    bencode_max_bytes: ClassVar[int | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Validate wire options when a subclass is created."""
        super().__init_subclass__(**kwargs)

        if cls.bencode_style not in STYLES:
            raise SchemaError(
                f"{cls.__name__}: bencode_style must be one of {', '.join(STYLES)}, "
                f"got {cls.bencode_style!r}"
            )
