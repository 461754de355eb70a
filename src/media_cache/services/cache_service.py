"""Cache service for core business logic.

``MediaCache`` is the entry point of the library. It builds requests, runs
them through the RequestEngine and decides what gets stored in the active
backend when a request completes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from media_cache.config import settings
from media_cache.entities import CachedMedia, MediaRequest, RequestResult, StoreStrategy
from media_cache.models import CacheMetrics
from media_cache.protocols import CacheBackend, MediaFetcher, Transform
from media_cache.repositories import DiskCacheRepository, HttpMediaFetcher, MemoryCacheRepository
from media_cache.services.request_engine import RequestEngine, ResultCallback

logger = logging.getLogger(__name__)


class MediaCache:
    """Media cache orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheBackend: in-memory or on-disk storage
    - MediaFetcher: httpx-based by default, any fake in tests

    Example:
        ```python
        from media_cache.services import MediaCache
        from media_cache.transforms import Resize

        cache = MediaCache()
        result = cache.fetch("https://example.com/cat.png", transforms=[Resize(64, 64)])
        if result.is_success:
            thumbnail = result.unwrap_output().data

        # Persist entries on disk instead
        cache.cache_config(lambda: DiskCacheRepository(Path("/tmp/media"), capacity=50))
        ```
    """

    def __init__(
        self,
        backend: CacheBackend | None = None,
        store_strategy: StoreStrategy = StoreStrategy.SAVE_ORIGINAL,
        fetcher: MediaFetcher | None = None,
        metrics: CacheMetrics | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            backend: Storage backend. Defaults to a new MemoryCacheRepository.
            store_strategy: Which payload is stored when a request completes.
            fetcher: Transport used on cache misses. Defaults to HttpMediaFetcher.
            metrics: Metrics collector. Defaults to a fresh CacheMetrics.
        """
        self._backend: CacheBackend = backend if backend is not None else MemoryCacheRepository()
        self._store_strategy = store_strategy
        self._fetcher: MediaFetcher = fetcher if fetcher is not None else HttpMediaFetcher()
        self._metrics = metrics if metrics is not None else CacheMetrics()
        self._engine = RequestEngine(self)

    @classmethod
    def create(
        cls,
        backend: CacheBackend | None = None,
        fetcher: MediaFetcher | None = None,
    ) -> MediaCache:
        """Factory method to create MediaCache from settings.

        Args:
            backend: Storage backend. If None, builds the one named by
                settings.cache_backend with settings.cache_capacity.
            fetcher: Transport. If None, uses HttpMediaFetcher.create().

        Returns:
            Configured MediaCache instance
        """
        if backend is None:
            if settings.uses_disk:
                backend = DiskCacheRepository.create()
            else:
                backend = MemoryCacheRepository.create(capacity=settings.cache_capacity)

        return cls(
            backend=backend,
            store_strategy=StoreStrategy(settings.store_strategy),
            fetcher=fetcher or HttpMediaFetcher.create(),
        )

    @property
    def storage(self) -> CacheBackend:
        """The active backend."""
        return self._backend

    @property
    def fetcher(self) -> MediaFetcher:
        return self._fetcher

    @property
    def metrics(self) -> CacheMetrics:
        return self._metrics

    @property
    def store_strategy(self) -> StoreStrategy:
        return self._store_strategy

    def set_store_strategy(self, strategy: StoreStrategy) -> MediaCache:
        self._store_strategy = StoreStrategy(strategy)
        return self

    def cache_config(self, factory: Callable[[], CacheBackend]) -> MediaCache:
        """Replace the active backend with the one built by ``factory``.

        The previous backend is dropped as is: nothing is migrated, cleared or
        closed.
        """
        self._backend = factory()
        logger.info("Cache backend set to %r", self._backend)
        return self

    def request(
        self,
        source: str | Path | None,
        *,
        overwrite: bool = False,
        transforms: Iterable[Transform] = (),
        store_strategy: StoreStrategy | None = None,
        configure: Callable[[Any], None] | None = None,
        output_format: str = "PNG",
    ) -> MediaRequest:
        """Build a request for ``source``.

        Paths are converted to absolute ``file://`` URLs.
        """
        if isinstance(source, Path):
            source = source.expanduser().resolve().as_uri()
        return MediaRequest(
            source=source,
            overwrite=overwrite,
            transforms=tuple(transforms),
            store_strategy=store_strategy,
            configure=configure,
            output_format=output_format,
        )

    def execute(
        self, request: MediaRequest, callback: ResultCallback | None = None
    ) -> RequestResult:
        """Run ``request`` and return its terminal result."""
        return self._engine.execute(request, callback)

    async def execute_async(
        self, request: MediaRequest, callback: ResultCallback | None = None
    ) -> RequestResult:
        """Run ``request`` in a worker thread.

        Example:
            ```python
            result = await cache.execute_async(cache.request(url))

            # Fire and forget
            task = asyncio.create_task(cache.execute_async(request, on_state_change))
            ```
        """
        return await self._engine.execute_async(request, callback)

    def fetch(
        self,
        source: str | Path | None,
        callback: ResultCallback | None = None,
        **options: Any,
    ) -> RequestResult:
        """Build a request for ``source`` and execute it."""
        return self.execute(self.request(source, **options), callback)

    def store(
        self,
        request: MediaRequest,
        source_media: CachedMedia | None,
        output_media: CachedMedia | None,
    ) -> None:
        """Store the payload selected by the store strategy under the request's id.

        The request's own strategy wins over the cache's.
        """
        strategy = request.store_strategy or self._store_strategy
        to_save = source_media if strategy == StoreStrategy.SAVE_ORIGINAL else output_media
        if to_save is None or request.id is None:
            return
        self._backend.store(request.id, to_save)

    def remove(self, target: str | MediaRequest) -> bool:
        """Remove an entry by id, or the entry a request would be cached under."""
        id = target.id if isinstance(target, MediaRequest) else target
        if id is None:
            return False
        return self._backend.remove(id)

    def clear(self) -> MediaCache:
        """Remove every entry from the active backend."""
        self._backend.clear()
        return self

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with backend stats, the store strategy and request metrics
        """
        return {
            **self._backend.get_stats(),
            "store_strategy": self._store_strategy.value,
            **self._metrics.to_dict(),
        }

    def close(self) -> None:
        """Release the fetcher's resources."""
        close = getattr(self._fetcher, "close", None)
        if callable(close):
            close()
