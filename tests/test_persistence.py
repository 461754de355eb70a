"""Tests for the persisted entry format."""

import struct

import pytest

from media_cache.entities import CachedMedia, FileRef, RawBytes
from media_cache.exceptions import (
    DeserializationError,
    EntryNotFoundError,
    FormatVersionError,
    SerializationError,
)
from media_cache.utils import persistence


def test_dumps_layout():
    blob = persistence.dumps(CachedMedia(source="ab", data=b"\x00\x01\x02"))
    assert blob == b"\x01" + struct.pack(">ii", 2, 3) + b"ab" + b"\x00\x01\x02"


def test_serialize_then_deserialize(tmp_path, media):
    path = tmp_path / "entry"
    persistence.serialize(media, path)
    assert persistence.deserialize(path) == media


def test_non_ascii_source(tmp_path):
    media = CachedMedia(source="https://example.com/café/ñ.png", data=b"xyz")
    assert persistence.loads(persistence.dumps(media)) == media


def test_empty_payload():
    media = CachedMedia(source="s", data=b"")
    assert persistence.loads(persistence.dumps(media)) == media


def test_trailing_bytes_ignored():
    media = CachedMedia(source="s", data=b"data")
    assert persistence.loads(persistence.dumps(media) + b"garbage") == media


def test_version_mismatch():
    blob = bytearray(persistence.dumps(CachedMedia(source="s", data=b"d")))
    blob[0] = 2
    with pytest.raises(FormatVersionError) as exc_info:
        persistence.loads(bytes(blob))
    assert exc_info.value.found == 2
    assert exc_info.value.expected == persistence.FORMAT_VERSION
    assert isinstance(exc_info.value, DeserializationError)


def test_truncated_payload():
    blob = persistence.dumps(CachedMedia(source="source", data=b"0123456789"))
    with pytest.raises(DeserializationError, match="Truncated"):
        persistence.loads(blob[:-3])


def test_truncated_header():
    with pytest.raises(DeserializationError):
        persistence.loads(b"\x01\x00")


def test_negative_length():
    blob = b"\x01" + struct.pack(">ii", -1, 4) + b"data"
    with pytest.raises(DeserializationError, match="negative"):
        persistence.loads(blob)


def test_invalid_utf8_source():
    blob = b"\x01" + struct.pack(">ii", 2, 0) + b"\xff\xfe"
    with pytest.raises(DeserializationError):
        persistence.loads(blob)


def test_missing_file_is_distinct_error(tmp_path):
    with pytest.raises(EntryNotFoundError):
        persistence.deserialize(tmp_path / "nope")


def test_serialize_into_missing_directory(tmp_path, media):
    with pytest.raises(SerializationError):
        persistence.serialize(media, tmp_path / "missing" / "entry")


def test_resolve_payload(tmp_path, media):
    path = tmp_path / "entry"
    persistence.serialize(media, path)
    assert persistence.resolve_payload(RawBytes(media)) is media
    assert persistence.resolve_payload(FileRef(path)) == media
    with pytest.raises(TypeError):
        persistence.resolve_payload("not a payload")
