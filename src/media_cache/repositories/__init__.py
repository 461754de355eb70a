"""Repository layer for data access.

This layer holds the concrete cache backends and the media fetcher behind
protocol-based interfaces. This enables:
- Easy swapping of implementations (memory → disk, httpx → a test fake)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from media_cache.protocols import CacheBackend, MediaFetcher

from .bounded_store import BoundedStore
from .disk_repository import ClearMode, DiskCacheRepository
from .http_fetcher import HttpMediaFetcher
from .memory_repository import MemoryCacheRepository

__all__ = [
    "BoundedStore",
    "CacheBackend",
    "ClearMode",
    "DiskCacheRepository",
    "HttpMediaFetcher",
    "MediaFetcher",
    "MemoryCacheRepository",
]
