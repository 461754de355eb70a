"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from media_cache.config import settings
from media_cache.handlers import CacheHandler
from media_cache.services import MediaCache
from media_cache.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def get_media_cache(request: Request) -> MediaCache:
    """Dependency injection for MediaCache from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The MediaCache instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    cache = getattr(request.app.state, "media_cache", None)
    if cache is None:
        raise RuntimeError("MediaCache not initialized. Check lifespan setup.")
    return cache


def get_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CacheHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Service (backend, fetcher, strategy from settings) - app.state.media_cache
    2. Handler (HTTP endpoints) - app.state.cache_handler

    A cache already placed in app.state (by tests, for instance) is reused.

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the fetcher and removes all services from app.state on shutdown
    """
    configure_logging(settings.log_level)

    media_cache = getattr(app.state, "media_cache", None) or MediaCache.create()
    app.state.media_cache = media_cache
    app.state.cache_handler = CacheHandler(cache=media_cache)

    stats = media_cache.storage.get_stats()
    logger.info(
        "Media cache initialized (backend=%s, capacity=%s, strategy=%s)",
        stats.get("backend"),
        stats.get("capacity"),
        media_cache.store_strategy.value,
    )

    yield

    media_cache.close()
    del app.state.cache_handler
    del app.state.media_cache
    logger.info("Media cache shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CacheHandler, Depends(get_handler)]
CacheDep = Annotated[MediaCache, Depends(get_media_cache)]
