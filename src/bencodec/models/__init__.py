"""Pydantic message modeling for bencodec.

This module provides the BaseMessage class and field type aliases for
declaring Bencode messages with Pydantic.
"""

from __future__ import annotations

from .base import BaseMessage
from .fields import F32, F64, I8, I16, I32, I64, U8, U16, U32, U64, Char, FixedBytes

__all__ = [
    "BaseMessage",
    "FixedBytes",
    "Char",
    "I8",
    "I16",
    "I32",
    "I64",
    "U8",
    "U16",
    "U32",
    "U64",
    "F32",
    "F64",
]
