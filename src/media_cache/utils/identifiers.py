"""Deterministic cache identifiers.

An identifier is a name-based (version 3) UUID computed from the UTF-8 bytes
of the source locator with no namespace prefix, so the same URL or path always
maps to the same cache key, across requests and across process restarts.
"""

from __future__ import annotations

import hashlib
import uuid

from media_cache.exceptions import InvalidSourceError


def generate_id(source: str) -> str:
    """Generate the cache identifier for a source locator.

    Args:
        source: A URL or file path string

    Returns:
        The identifier in canonical ``8-4-4-4-12`` UUID form

    Raises:
        InvalidSourceError: If source is None
    """
    if source is None:
        raise InvalidSourceError("Cannot generate an id for a missing source")

    # MD5 here is a name-based UUID digest, not a security primitive.
    digest = hashlib.md5(source.encode("utf-8")).digest()  # noqa: S324
    return str(uuid.UUID(bytes=digest, version=3))
