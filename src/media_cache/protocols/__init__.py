"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (memory → disk, httpx → a test fake, etc.)
- Unit testing with mock implementations
- Clear separation of concerns

Usage:
    ```python
    from media_cache.protocols import CacheBackend, MediaFetcher

    backend: CacheBackend = MemoryCacheRepository()  # works
    backend: CacheBackend = DiskCacheRepository()     # also works
    ```
"""

from .cache_store import CacheBackend
from .media_fetcher import MediaFetcher
from .transform import Transform

__all__ = [
    "CacheBackend",
    "MediaFetcher",
    "Transform",
]
