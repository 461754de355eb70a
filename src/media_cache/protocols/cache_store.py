"""Cache backend protocol.

Defines the interface for any bounded store that can hold cached media
entries by id.

Implementations:
- MemoryCacheRepository: bytes held in process memory (default)
- DiskCacheRepository: one file per entry, index held in memory
"""

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from media_cache.entities import CachedMedia


@runtime_checkable
class CacheBackend(Protocol):
    """Protocol for cache backends.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.

    Example:
        ```python
        from media_cache.protocols import CacheBackend

        backend: CacheBackend = MemoryCacheRepository()
        backend: CacheBackend = DiskCacheRepository(Path("/tmp/cache"))
        ```
    """

    def store(self, id: str, media: CachedMedia) -> None:
        """Store an entry, evicting the oldest one first when full.

        Args:
            id: The entry's identifier
            media: The media to cache
        """
        ...

    def get(self, id: str) -> Any | None:
        """Return the raw payload held for an id, without decoding it."""
        ...

    def get_decoded(self, id: str) -> CachedMedia | None:
        """Return the cached media for an id.

        Returns:
            The media, or None if the id is not cached

        Raises:
            DeserializationError: If the entry exists but cannot be decoded
        """
        ...

    def contains(self, id: str) -> bool:
        ...

    def remove(self, id: str) -> bool:
        """Remove an entry.

        Returns:
            True if an entry existed and was removed
        """
        ...

    def remove_oldest(self) -> bool:
        """Remove the earliest-inserted entry.

        Returns:
            False if the backend is empty
        """
        ...

    def clear(self) -> None:
        ...

    def size(self) -> int:
        ...

    def is_empty(self) -> bool:
        ...

    @property
    def capacity(self) -> int:
        ...

    def set_capacity(self, capacity: int) -> "CacheBackend":
        """Change the capacity, evicting the oldest entries if it shrinks."""
        ...

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        ...

    def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
