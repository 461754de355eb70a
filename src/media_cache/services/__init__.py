"""Service layer for business logic.

This layer contains the request lifecycle and cache orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from media_cache.services import MediaCache

    # Using factory method (recommended)
    cache = MediaCache.create()

    # Or manual creation
    cache = MediaCache(backend=repo, fetcher=fetcher)
    ```
"""

from .cache_service import MediaCache
from .request_engine import RequestEngine

__all__ = [
    "MediaCache",
    "RequestEngine",
]
