"""bencodec: Bencode serialization for Python

A library for reading and writing Bencode, the encoding used by BitTorrent
metainfo files and tracker responses. Values are decoded straight into typed
Python objects by a visitor-driven parser, without building an intermediate
tree.

Key Features:
- Strict, canonical integer grammar with exact error offsets
- Pydantic-based message modeling (structs, tuple structs, newtypes, unions)
- Streaming encoder that writes to any binary sink
- Raw byte-string pass-through for byte containers

Quick Start:
    >>> from bencodec import BaseMessage, U16, encode, decode
    >>>
    >>> class Peer(BaseMessage):
    ...     ip: str
    ...     port: U16
    >>>
    >>> data = encode(Peer(ip="10.0.0.1", port=6881))
    >>> data
    b'd2:ip8:10.0.0.14:porti6881ee'
    >>> decode(Peer, data)
    Peer(ip='10.0.0.1', port=6881)
"""

from __future__ import annotations

from .codec import Decoder, Encoder, Visitor, decode, encode, from_bytes, to_bytes, to_writer
from .exceptions import BencodeError, DecodeError, EncodeError, ErrorKind, SchemaError
from .models import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    U8,
    U16,
    U32,
    U64,
    BaseMessage,
    Char,
    FixedBytes,
)
from .rawbytes import RawBytes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "BaseMessage",
    "encode",
    "decode",
    "from_bytes",
    "to_bytes",
    "to_writer",
    "Decoder",
    "Encoder",
    "Visitor",
    # Field helpers
    "FixedBytes",
    "RawBytes",
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
    # Exceptions
    "BencodeError",
    "ErrorKind",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    # Version
    "__version__",
]
