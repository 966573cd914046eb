"""Exception hierarchy for bencodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BencodeError for easy catching of any bencodec-specific error.

Every error carries an ErrorKind and, for parse-time failures, the byte offset
at which the fault was detected.
"""

from __future__ import annotations

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    """Tagged error kinds, each carrying its display text."""

    MESSAGE = "message"
    IO = "io error"
    EOF = "EOF while parsing"
    EXPECTED_BOOLEAN = "expected boolean"
    EXPECTED_INTEGER = "expected integer"
    EXPECTED_STRING = "expected string"
    EXPECTED_CHAR = "expected character"
    EXPECTED_LIST = "expected list"
    EXPECTED_DICT = "expected dictionary"
    EXPECTED_STRING_DELIM = "expected `:`"
    EXPECTED_ENUM = "expected enum"
    EXPECTED_END = "expected `e`"
    EXPECTED_SOME_VALUE = "expected value"
    MINUS_ZERO = "`i-0e` is invalid"
    LEADING_ZERO = "leading zeros are invalid"
    INTEGER_OUT_OF_RANGE = "integer out of range"
    STRING_NOT_UTF8 = "strings must be a utf-8"
    KEY_MUST_BE_A_STRING = "key must be a string"
    TRAILING_CHARACTERS = "trailing characters"

    @property
    def text(self) -> str:
        return self.value


class BencodeError(Exception):
    """Base exception for all bencodec errors.

    Attributes:
        kind: The ErrorKind of this failure
        index: Byte offset where the fault was detected, or None for
            framework-level and I/O errors
    """

    def __init__(
        self, kind: ErrorKind, index: Optional[int] = None, message: Optional[str] = None
    ) -> None:
        self._kind = kind
        self._index = index
        self._message = message
        super().__init__(self._render())

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def index(self) -> Optional[int]:
        return self._index

    @classmethod
    def custom(cls, message: str) -> BencodeError:
        """Wrap a free-form failure raised above the wire layer."""
        return cls(ErrorKind.MESSAGE, None, message)

    @classmethod
    def syntax(cls, kind: ErrorKind, index: int) -> BencodeError:
        return cls(kind, index)

    @classmethod
    def eof(cls, index: int) -> BencodeError:
        return cls(ErrorKind.EOF, index)

    def _render(self) -> str:
        text = self._message if self._message is not None else self._kind.text
        if self._index is None:
            return text
        return f"{text} at index {self._index}"

    def __str__(self) -> str:
        return self._render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._render()!r}, index: {self._index or 0})"


class SchemaError(BencodeError):
    """Raised when a type annotation cannot be mapped to a wire shape.

    Examples:
        - Unsupported field type
        - Union mixing message variants with plain types
        - Newtype style declared on a model without exactly one field
    """

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.MESSAGE, None, message)


class EncodeError(BencodeError):
    """Raised when encoding a value fails.

    Examples:
        - Integer out of range for its declared width
        - Value does not match its declared shape
        - Sink raised an I/O error
        - Message exceeds bencode_max_bytes constraint
    """

    @classmethod
    def io(cls, err: OSError) -> EncodeError:
        error = cls(ErrorKind.IO, None, str(err))
        error.__cause__ = err
        return error


class DecodeError(BencodeError):
    """Raised when decoding Bencode data fails.

    Examples:
        - Truncated data (EOF while parsing)
        - Non-canonical integers (leading zeros, ``i-0e``)
        - Unknown enum variant, missing field
        - Trailing characters after a complete value
    """

    pass
