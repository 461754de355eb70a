"""Persisted entry format.

Each cached entry is one file, named after the entry's id, laid out as::

    int8    version      FORMAT_VERSION
    int32   source_len   length of the UTF-8 source string
    int32   data_len     length of the payload
    bytes   source[source_len]
    bytes   data[data_len]

Integers are big-endian. Readers consume exactly ``source_len + data_len``
bytes after the header and never rely on end-of-file to bound the read, so a
truncated file is reported instead of silently returning short data.
"""

from __future__ import annotations

import io
import os
import struct
import tempfile
from pathlib import Path
from typing import BinaryIO

from media_cache.entities import CachedMedia, FileRef, Payload, RawBytes
from media_cache.exceptions import (
    DeserializationError,
    EntryNotFoundError,
    FormatVersionError,
    SerializationError,
)

FORMAT_VERSION = 1

_HEADER = struct.Struct(">bii")


def write_entry(media: CachedMedia, stream: BinaryIO) -> None:
    """Write one entry to an open binary stream."""
    source_bytes = media.source.encode("utf-8")
    stream.write(_HEADER.pack(FORMAT_VERSION, len(source_bytes), len(media.data)))
    stream.write(source_bytes)
    stream.write(media.data)


def read_entry(stream: BinaryIO) -> CachedMedia:
    """Read one entry from an open binary stream.

    Raises:
        FormatVersionError: If the version byte does not match FORMAT_VERSION
        DeserializationError: If the header is corrupt or the stream is truncated
    """
    header = _read_exactly(stream, _HEADER.size, "header")
    version, source_len, data_len = _HEADER.unpack(header)
    if version != FORMAT_VERSION:
        raise FormatVersionError(version, FORMAT_VERSION)
    if source_len < 0 or data_len < 0:
        raise DeserializationError(
            f"Corrupt header: negative lengths (source={source_len}, data={data_len})"
        )

    source_bytes = _read_exactly(stream, source_len, "source")
    data = _read_exactly(stream, data_len, "data")
    try:
        source = source_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DeserializationError(f"Source string is not valid UTF-8: {e}") from e
    return CachedMedia(source=source, data=data)


def dumps(media: CachedMedia) -> bytes:
    """Serialize an entry to bytes."""
    buffer = io.BytesIO()
    write_entry(media, buffer)
    return buffer.getvalue()


def loads(blob: bytes) -> CachedMedia:
    """Deserialize an entry from bytes."""
    return read_entry(io.BytesIO(blob))


def serialize(media: CachedMedia, path: Path) -> None:
    """Write an entry to ``path``, replacing any previous file.

    The entry goes to a temporary file in the same directory which is then
    moved onto ``path``, so a failed write leaves the previous file intact.

    Raises:
        SerializationError: If the file cannot be written
    """
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as f:
            tmp_path = Path(f.name)
            write_entry(media, f)
        os.replace(tmp_path, path)
    except (OSError, UnicodeEncodeError) as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise SerializationError(f"Failed to write cache entry to {path}: {e}") from e


def deserialize(path: Path) -> CachedMedia:
    """Read an entry back from ``path``.

    Raises:
        EntryNotFoundError: If the file does not exist
        FormatVersionError: If the file was written with another format version
        DeserializationError: If the file is unreadable, corrupt or truncated
    """
    try:
        with open(path, "rb") as f:
            return read_entry(f)
    except FileNotFoundError as e:
        raise EntryNotFoundError(f"Cache file {path} does not exist") from e
    except OSError as e:
        raise DeserializationError(f"Failed to read cache file {path}: {e}") from e


def resolve_payload(payload: Payload) -> CachedMedia:
    """Convert a backend payload to its decoded view.

    This is the one place where in-memory and on-disk payloads meet.
    """
    if isinstance(payload, RawBytes):
        return payload.media
    if isinstance(payload, FileRef):
        return deserialize(payload.path)
    raise TypeError(f"Unknown payload type: {type(payload).__name__}")


def _read_exactly(stream: BinaryIO, size: int, what: str) -> bytes:
    if size == 0:
        return b""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) != size:
        raise DeserializationError(
            f"Truncated entry: expected {size} bytes of {what}, got {len(data)}"
        )
    return data
