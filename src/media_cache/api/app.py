from typing import Any

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from media_cache.api.dependencies import HandlerDep, lifespan
from media_cache.config import settings
from media_cache.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    CapacityRequest,
    CapacityResponse,
    FetchMediaRequest,
    FetchMediaResponse,
    HealthCheckResponse,
    MediaDeleteResponse,
    ScanRequest,
    ScanResponse,
)

app = FastAPI(
    title="Media Cache API",
    description="Bounded image and video cache with memory and disk backends",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Media Cache API",
        "version": "0.1.0",
        "description": "Bounded image and video cache with memory and disk backends",
        "endpoints": {
            "media": "/media",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/media/fetch", response_model=FetchMediaResponse)
async def fetch_media(request: FetchMediaRequest, handler: HandlerDep) -> FetchMediaResponse:
    """
    Load a resource through the cache.

    Args:
        request: Source locator, transforms and cache options.

    Returns:
        The terminal state, the cache id and the payload sizes.
    """
    return await handler.fetch_media(request)


@app.get("/media/{id}")
async def get_media(id: str, handler: HandlerDep) -> Response:
    """Return the cached bytes for an id."""
    return await handler.get_media(id)


@app.delete("/media/{id}", response_model=MediaDeleteResponse)
async def delete_media(id: str, handler: HandlerDep) -> MediaDeleteResponse:
    """Remove one entry from the cache."""
    return await handler.delete_media(id)


@app.delete("/media", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
    """Clear all entries from the cache."""
    return await handler.clear_cache()


@app.post("/media/scan", response_model=ScanResponse)
async def scan_directory(request: ScanRequest, handler: HandlerDep) -> ScanResponse:
    """Index the files of a cache directory (disk backend only)."""
    return await handler.scan(request)


@app.put("/media/capacity", response_model=CapacityResponse)
async def set_capacity(request: CapacityRequest, handler: HandlerDep) -> CapacityResponse:
    """Change the cache capacity, evicting the oldest entries if it shrinks."""
    return await handler.set_capacity(request)


@app.get("/stats", response_model=CacheStatsResponse)
async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache statistics."""
    return await handler.get_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "media_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
