"""Media Cache - bounded image and video cache with memory and disk backends.

This package provides a layered architecture for media caching:

Layers:
    - protocols: Interface contracts (CacheBackend, MediaFetcher, Transform)
    - repositories: Storage backends and the httpx fetcher
    - services: Request lifecycle and cache orchestration
    - transforms: Pillow-based image transforms
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from media_cache import MediaCache, RequestState
    from media_cache.transforms import Grayscale

    cache = MediaCache.create()
    result = cache.fetch("https://example.com/cat.png", transforms=[Grayscale()])
    assert result.state in (RequestState.SUCCEEDED, RequestState.CACHE_HIT)
    ```

For HTTP API:
    ```python
    from media_cache.api.app import app
    ```
"""

from media_cache.config import settings
from media_cache.entities import (
    CachedMedia,
    MediaRequest,
    RequestResult,
    RequestState,
    StoreStrategy,
)
from media_cache.exceptions import MediaCacheError
from media_cache.protocols import CacheBackend, MediaFetcher, Transform
from media_cache.repositories import (
    ClearMode,
    DiskCacheRepository,
    HttpMediaFetcher,
    MemoryCacheRepository,
)
from media_cache.services import MediaCache
from media_cache.utils.identifiers import generate_id

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "CacheBackend",
    "MediaFetcher",
    "Transform",
    # Services (business logic)
    "MediaCache",
    # Repositories (data access)
    "MemoryCacheRepository",
    "DiskCacheRepository",
    "ClearMode",
    "HttpMediaFetcher",
    # Entities (domain models)
    "CachedMedia",
    "MediaRequest",
    "RequestResult",
    "RequestState",
    "StoreStrategy",
    # Errors
    "MediaCacheError",
    # Identifiers
    "generate_id",
]
