"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest


def bstr(data: bytes | str) -> bytes:
    """Build a length-prefixed byte-string token."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return str(len(data)).encode("ascii") + b":" + data


@pytest.fixture
def piece_hashes() -> bytes:
    """Two fake SHA-1 piece hashes (binary, not valid UTF-8)."""
    return bytes(range(236, 256)) + b"\xff" * 20


@pytest.fixture
def single_file_torrent(piece_hashes: bytes) -> bytes:
    """Single-file metainfo with keys in sorted order."""
    info = (
        b"d"
        + bstr("length") + b"i32768e"
        + bstr("name") + bstr("file.bin")
        + bstr("piece length") + b"i16384e"
        + bstr("pieces") + bstr(piece_hashes)
        + b"e"
    )
    return (
        b"d"
        + bstr("announce") + bstr("http://tracker.example/announce")
        + bstr("comment") + bstr("sample")
        + bstr("info") + info
        + b"e"
    )
