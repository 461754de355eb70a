"""Cached media domain entities."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class CachedMedia:
    """A loaded resource: its source locator and its raw bytes.

    Attributes:
        source: The URL or path the bytes were loaded from
        data: The raw encoded bytes (an image or video container)
    """

    source: str
    data: bytes

    @property
    def size(self) -> int:
        """Number of payload bytes."""
        return len(self.data)

    def __repr__(self) -> str:
        return f"CachedMedia(source={self.source!r}, size={self.size})"


@dataclass(frozen=True)
class RawBytes:
    """Payload held directly in process memory."""

    media: CachedMedia


@dataclass(frozen=True)
class FileRef:
    """Payload held on disk, in the persisted entry format."""

    path: Path


# What a backend keeps per entry
Payload = Union[RawBytes, FileRef]
