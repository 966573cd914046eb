"""Bencode codec for bencodec.

This module provides the decoder and encoder, the visitor protocol that
connects them to typed values, and the schema layer that maps type
annotations onto wire shapes.
"""

from __future__ import annotations

from .decoder import Decoder, decode, from_bytes
from .encoder import Compound, Encoder, encode, to_bytes, to_writer
from .schema import FieldSchema, MessageSchema, Shape, shape_for
from .visitor import END, IgnoredAny, Visitor

__all__ = [
    "encode",
    "decode",
    "from_bytes",
    "to_bytes",
    "to_writer",
    "Decoder",
    "Encoder",
    "Compound",
    "Visitor",
    "IgnoredAny",
    "END",
    "Shape",
    "shape_for",
    "MessageSchema",
    "FieldSchema",
]
