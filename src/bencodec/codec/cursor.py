"""Byte cursor over an immutable input buffer.

The cursor owns the read position of one decode call. All parse errors are
built here so that the offset convention lives in a single place: a fault
detected after consuming a byte is reported at the index of that byte
(``index - 1``), not at the byte the cursor now points to.
"""

from __future__ import annotations

from ..exceptions import DecodeError, ErrorKind


class Cursor:
    """Reads bytes one at a time from an input buffer.

    Example:
        >>> cursor = Cursor(b"i42e")
        >>> cursor.next_byte() == ord("i")
        True
        >>> cursor.index
        1
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize a cursor at the start of ``data``.

        Args:
            data: Byte buffer to read. It must not be mutated while the
                cursor (or any borrowed view it hands out) is alive.
        """
        view = memoryview(data)
        self._data = view if view.format == "B" else view.cast("B")
        self._index = 0

    @property
    def index(self) -> int:
        """Current read position."""
        return self._index

    def __len__(self) -> int:
        return len(self._data)

    def end(self) -> None:
        """Check that the whole input has been consumed.

        Raises:
            DecodeError: TRAILING_CHARACTERS at the first unread byte
        """
        if self._index < len(self._data):
            raise DecodeError.syntax(ErrorKind.TRAILING_CHARACTERS, self._index)

    def at_end(self) -> bool:
        return self._index >= len(self._data)

    def peek_byte(self) -> int:
        """Return the next byte without consuming it.

        Raises:
            DecodeError: EOF at the current position
        """
        if self._index < len(self._data):
            return self._data[self._index]
        raise DecodeError.eof(self._index)

    def next_byte(self) -> int:
        """Consume and return the next byte.

        Raises:
            DecodeError: EOF at the current position
        """
        if self._index < len(self._data):
            byte = self._data[self._index]
            self._index += 1
            return byte
        raise DecodeError.eof(self._index)

    def take(self, length: int) -> memoryview:
        """Consume ``length`` bytes and return them as a view into the input.

        Raises:
            DecodeError: EOF reported at the input length when fewer than
                ``length`` bytes remain
        """
        end = self._index + length
        if end > len(self._data):
            raise DecodeError.eof(len(self._data))
        span = self._data[self._index : end]
        self._index = end
        return span

    def error(self, kind: ErrorKind) -> DecodeError:
        """Build an error located at the last consumed byte."""
        # Nothing consumed yet: there is no previous byte to point at.
        return DecodeError.syntax(kind, max(self._index - 1, 0))

    def error_at(self, kind: ErrorKind, index: int) -> DecodeError:
        """Build an error located at an explicit index."""
        return DecodeError.syntax(kind, index)
