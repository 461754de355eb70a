"""Custom exceptions for media_cache."""

from __future__ import annotations


class MediaCacheError(Exception):
    """Base class for all media_cache errors."""


class InvalidSourceError(MediaCacheError):
    """Raised when a source locator is missing or cannot be parsed."""


class UnsupportedContentTypeError(MediaCacheError):
    """Raised when a resource fails both the MIME type and extension allow-lists."""


class FetchError(MediaCacheError):
    """Raised when the transport fails to deliver a resource."""


class SerializationError(MediaCacheError):
    """Raised when a cache entry cannot be written to disk."""


class DeserializationError(MediaCacheError):
    """Raised when a persisted cache entry cannot be read back."""


class FormatVersionError(DeserializationError):
    """Raised when a persisted file was written with another format version."""

    def __init__(self, found: int, expected: int) -> None:
        super().__init__(f"Invalid format version {found}, expected {expected}")
        self.found = found
        self.expected = expected


class EntryNotFoundError(MediaCacheError):
    """Raised when the file backing a cache entry does not exist."""


class FileDeletionError(MediaCacheError):
    """Raised when the file backing a cache entry could not be removed."""


class TransformError(MediaCacheError):
    """Raised when decoding, transforming or re-encoding an image fails."""
