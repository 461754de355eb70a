"""Request lifecycle engine.

Runs a ``MediaRequest`` through the cache lookup, fetch, transform and
write-back steps, reporting every state change to an optional callback:

    READY -> STARTED -> SUCCEEDED | CACHE_HIT | FAILED

Errors never escape ``execute``: they end the request in FAILED with the
cause stored on the result.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from media_cache.entities import CachedMedia, MediaRequest, RequestResult, RequestState
from media_cache.exceptions import InvalidSourceError
from media_cache.transforms import TransformPipeline

if TYPE_CHECKING:
    from media_cache.services.cache_service import MediaCache

logger = logging.getLogger(__name__)

ResultCallback = Callable[[RequestResult], None]


class RequestEngine:
    """Executes requests against a MediaCache.

    The engine reads the cache's current backend, fetcher and store strategy
    on every execution, so swapping any of them on the cache takes effect for
    the next request.
    """

    def __init__(self, cache: MediaCache) -> None:
        self._cache = cache

    def execute(
        self, request: MediaRequest, callback: ResultCallback | None = None
    ) -> RequestResult:
        """Execute ``request`` synchronously.

        Args:
            request: The request to run
            callback: Called with a fresh result for every state change,
                including the terminal one

        Returns:
            The terminal result (SUCCEEDED, CACHE_HIT or FAILED)
        """
        result = RequestResult(request).with_state(RequestState.STARTED)
        self._notify(callback, result)

        source_media: CachedMedia | None = None
        output_media: CachedMedia | None = None
        try:
            if not request.has_source:
                raise InvalidSourceError(f"Cannot execute {request!r}: source is missing")

            state = RequestState.SUCCEEDED
            if not request.overwrite:
                source_media = self._cache.storage.get_decoded(request.id)
                if source_media is not None:
                    state = RequestState.CACHE_HIT
            if source_media is None:
                source_media = self._fetch(request)

            pipeline = TransformPipeline(request.transforms, request.output_format)
            output_media = pipeline.apply(source_media)
            self._cache.store(request, source_media, output_media)

            result = replace(
                result, state=state, source_media=source_media, output_media=output_media
            )
        except Exception as e:
            logger.warning("Request for %s failed: %s", request.source, e)
            result = replace(
                result,
                state=RequestState.FAILED,
                source_media=source_media,
                output_media=output_media,
                error=e,
            )

        self._cache.metrics.record_result(result.state)
        self._notify(callback, result)
        return result

    async def execute_async(
        self, request: MediaRequest, callback: ResultCallback | None = None
    ) -> RequestResult:
        """Execute ``request`` in a worker thread.

        The callback is invoked from that worker thread.
        """
        return await asyncio.to_thread(self.execute, request, callback)

    def _fetch(self, request: MediaRequest) -> CachedMedia:
        start = time.perf_counter()
        data = self._cache.fetcher.fetch(request.source, request.configure)
        self._cache.metrics.record_fetch((time.perf_counter() - start) * 1000)
        return CachedMedia(source=request.source, data=data)

    @staticmethod
    def _notify(callback: ResultCallback | None, result: RequestResult) -> None:
        logger.debug("%r -> %s", result.request, result.state.value)
        if callback is None:
            return
        try:
            callback(result)
        except Exception:
            logger.exception("Callback raised for %r in state %s", result.request, result.state.value)
