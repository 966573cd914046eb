"""End-to-end integration tests.

These tests model BitTorrent metainfo files and tracker responses, the
documents Bencode exists for.
"""

from __future__ import annotations

import io
import pathlib
from typing import ClassVar, Optional, Union

import pytest
from pydantic import Field

from bencodec import (
    U16,
    U32,
    U64,
    BaseMessage,
    DecodeError,
    EncodeError,
    ErrorKind,
    decode,
    encode,
    from_bytes,
    to_bytes,
    to_writer,
)


class FileEntry(BaseMessage):
    """One file of a multi-file torrent."""

    length: U64
    path: list[str]


class Info(BaseMessage):
    """Info dictionary, fields declared in sorted key order."""

    files: Optional[list[FileEntry]] = None
    length: Optional[U64] = None
    name: str
    piece_length: U32 = Field(alias="piece length")
    pieces: bytes


class Metainfo(BaseMessage):
    """Torrent file."""

    announce: str
    announce_list: Optional[list[list[str]]] = Field(default=None, alias="announce-list")
    comment: Optional[str] = None
    info: Info

    bencode_max_bytes: ClassVar[Optional[int]] = 1 << 20


class Peer(BaseMessage):
    """Peer in a non-compact tracker response."""

    ip: str
    peer_id: bytes = Field(alias="peer id")
    port: U16


class Failure(BaseMessage):
    """Tracker error response."""

    bencode_style: ClassVar[str] = "newtype"
    bencode_variant: ClassVar[Optional[str]] = "failure reason"

    reason: str


class Peers(BaseMessage):
    """Tracker success response."""

    bencode_variant: ClassVar[Optional[str]] = "peers"

    interval: U32
    peers: list[Peer]


TrackerResponse = Union[Failure, Peers]


class TestMetainfo:
    """Test torrent files."""

    def test_decode_single_file(self, single_file_torrent: bytes, piece_hashes: bytes) -> None:
        """Test a single-file torrent decodes into typed fields."""
        torrent = decode(Metainfo, single_file_torrent)

        assert torrent.announce == "http://tracker.example/announce"
        assert torrent.announce_list is None
        assert torrent.comment == "sample"
        assert torrent.info.name == "file.bin"
        assert torrent.info.length == 32768
        assert torrent.info.files is None
        assert torrent.info.piece_length == 16384
        assert torrent.info.pieces == piece_hashes

    def test_roundtrip_is_byte_exact(self, single_file_torrent: bytes) -> None:
        """Test re-encoding reproduces the original bytes."""
        torrent = decode(Metainfo, single_file_torrent)
        assert encode(torrent) == single_file_torrent

    def test_info_slice_roundtrip(self, single_file_torrent: bytes) -> None:
        """Test the info dictionary can be re-encoded on its own."""
        torrent = decode(Metainfo, single_file_torrent)
        info = encode(torrent.info)
        assert info in single_file_torrent
        assert decode(Info, info) == torrent.info

    def test_multi_file(self, piece_hashes: bytes) -> None:
        """Test a multi-file torrent."""
        torrent = Metainfo(
            announce="udp://tracker.example:80",
            **{"announce-list": [["udp://tracker.example:80"], ["http://backup.example/a"]]},
            info=Info(
                files=[
                    FileEntry(length=10, path=["dir", "a.txt"]),
                    FileEntry(length=20, path=["b.txt"]),
                ],
                name="bundle",
                pieces=piece_hashes,
                **{"piece length": 262144},
            ),
        )
        data = encode(torrent)

        assert data.startswith(b"d8:announce24:udp://tracker.example:8013:announce-listl")
        assert b"5:filesld6:lengthi10e4:pathl3:dir5:a.txteed6:lengthi20e4:pathl5:b.txteee" in data
        assert decode(Metainfo, data) == torrent

    def test_unknown_keys_skipped(self, piece_hashes: bytes) -> None:
        """Test extension keys are ignored."""
        data = (
            b"d8:announce3:url13:creation datei1700000000e4:infod4:name1:x"
            b"12:piece lengthi1e6:pieces20:" + piece_hashes[:20]
            + b"7:privatei1e4:salt3:\x00\x01\x02ee"
        )
        torrent = decode(Metainfo, data)
        assert torrent.announce == "url"
        assert torrent.info.pieces == piece_hashes[:20]

    def test_generic_decode_rejects_binary(self, single_file_torrent: bytes) -> None:
        """Test binary piece hashes cannot be read as text."""
        with pytest.raises(DecodeError) as exc_info:
            from_bytes(single_file_torrent)
        assert exc_info.value.kind is ErrorKind.STRING_NOT_UTF8

    def test_truncated(self, single_file_torrent: bytes) -> None:
        """Test every strict prefix is rejected with EOF."""
        for cut in (1, 10, len(single_file_torrent) // 2, len(single_file_torrent) - 1):
            with pytest.raises(DecodeError) as exc_info:
                decode(Metainfo, single_file_torrent[:cut])
            assert exc_info.value.kind is ErrorKind.EOF

    def test_size_limit(self, piece_hashes: bytes) -> None:
        """Test bencode_max_bytes on large documents."""
        info = Info.model_validate(
            {"name": "big", "piece length": 1, "pieces": piece_hashes * 30000}
        )
        with pytest.raises(EncodeError, match="exceeds bencode_max_bytes"):
            encode(Metainfo(announce="url", info=info))


class TestTrackerResponses:
    """Test externally tagged tracker responses."""

    def test_peers(self) -> None:
        """Test a success response."""
        response = Peers(
            interval=1800,
            peers=[Peer.model_validate({"ip": "10.0.0.1", "peer id": b"A" * 20, "port": 6881})],
        )
        data = to_bytes(response, TrackerResponse)
        assert data.startswith(b"d5:peersd8:intervali1800e5:peersl")
        assert from_bytes(data, TrackerResponse) == response

    def test_failure(self) -> None:
        """Test an error response."""
        data = to_bytes(Failure(reason="torrent not registered"), TrackerResponse)
        assert data == b"d14:failure reason22:torrent not registerede"
        assert from_bytes(data, TrackerResponse) == Failure(reason="torrent not registered")


class TestStreaming:
    """Test writing to sinks."""

    def test_to_writer_matches_to_bytes(self, single_file_torrent: bytes) -> None:
        """Test streaming produces the same bytes as buffering."""
        torrent = decode(Metainfo, single_file_torrent)
        buffer = io.BytesIO()
        to_writer(torrent, buffer, Metainfo)
        assert buffer.getvalue() == to_bytes(torrent) == single_file_torrent

    def test_write_to_file(self, single_file_torrent: bytes, tmp_path: pathlib.Path) -> None:
        """Test writing and reading back a .torrent file."""
        torrent = decode(Metainfo, single_file_torrent)
        path = tmp_path / "sample.torrent"
        with open(path, "wb") as sink:
            to_writer(torrent, sink)
        assert decode(Metainfo, path.read_bytes()) == torrent
