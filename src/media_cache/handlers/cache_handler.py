"""HTTP handlers for media cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging
import mimetypes
from pathlib import Path

from fastapi import HTTPException, Response, status

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
    TransformOptions,
)
from media_cache.entities import RequestState
from media_cache.exceptions import (
    EntryNotFoundError,
    FetchError,
    InvalidSourceError,
    MediaCacheError,
    UnsupportedContentTypeError,
)
from media_cache.protocols import Transform
from media_cache.repositories import DiskCacheRepository
from media_cache.services import MediaCache
from media_cache.transforms import (
    Brightness,
    CenterCrop,
    Flip,
    GaussianBlur,
    Grayscale,
    Resize,
    Rotate,
)

logger = logging.getLogger(__name__)

_ERROR_STATUS: list[tuple[type[BaseException], int]] = [
    (InvalidSourceError, status.HTTP_400_BAD_REQUEST),
    (UnsupportedContentTypeError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (FetchError, status.HTTP_502_BAD_GATEWAY),
    (EntryNotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_for(error: BaseException) -> int:
    """Map a media_cache error to an HTTP status code."""
    for error_type, code in _ERROR_STATUS:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_transform(options: TransformOptions) -> Transform:
    """Convert a transform DTO to a transform.

    Raises:
        ValueError: If a parameter required by the transform is missing or invalid
    """
    if options.type in ("resize", "center_crop"):
        if options.width is None or options.height is None:
            raise ValueError(f"'{options.type}' requires width and height")
        cls = Resize if options.type == "resize" else CenterCrop
        return cls(options.width, options.height)
    if options.type == "rotate":
        if options.degrees is None:
            raise ValueError("'rotate' requires degrees")
        return Rotate(options.degrees)
    if options.type == "flip":
        return Flip(options.orientation)
    if options.type == "grayscale":
        return Grayscale()
    if options.type == "brightness":
        if options.delta is None:
            raise ValueError("'brightness' requires delta")
        return Brightness(options.delta)
    return GaussianBlur() if options.radius is None else GaussianBlur(options.radius)


class CacheHandler:
    """HTTP handlers for media cache operations.

    This handler delegates business logic to MediaCache
    and handles HTTP-specific concerns like:
    - Converting DTOs to requests and results to DTOs
    - Setting appropriate status codes
    - Error handling and responses

    Example:
        ```python
        from media_cache.services import MediaCache
        from media_cache.handlers import CacheHandler

        handler = CacheHandler(cache=MediaCache.create())

        # Use in FastAPI route
        @app.post("/media/fetch", response_model=FetchMediaResponse)
        async def fetch_media(request: FetchMediaRequest):
            return await handler.fetch_media(request)
        ```
    """

    def __init__(self, cache: MediaCache) -> None:
        """Initialize the cache handler.

        Args:
            cache: The media cache for business logic (required).
        """
        self._cache = cache

    @property
    def cache(self) -> MediaCache:
        return self._cache

    async def fetch_media(self, request: FetchMediaRequest) -> FetchMediaResponse:
        """Handle POST /media/fetch requests.

        Args:
            request: The fetch request DTO

        Returns:
            FetchMediaResponse describing the completed request

        Raises:
            HTTPException: 400 for bad transform parameters, otherwise the
                status mapped from the request's error
        """
        try:
            transforms = [build_transform(options) for options in request.transforms]
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e

        headers = dict(request.headers)
        media_request = self._cache.request(
            request.source,
            overwrite=request.overwrite,
            transforms=transforms,
            store_strategy=request.store_strategy,
            configure=(lambda r: r.headers.update(headers)) if headers else None,
            output_format=request.output_format,
        )
        result = await self._cache.execute_async(media_request)

        if result.is_failed:
            error = result.unwrap_error()
            raise HTTPException(
                status_code=status_for(error),
                detail=f"Failed to fetch {request.source}: {error}",
            ) from error

        return FetchMediaResponse(
            id=result.id,
            source=request.source,
            state=result.state,
            cache_hit=result.state == RequestState.CACHE_HIT,
            source_size=result.unwrap_source().size,
            output_size=result.unwrap_output().size,
        )

    async def get_media(self, id: str) -> Response:
        """Handle GET /media/{id} requests.

        Returns:
            The cached bytes, with a content type guessed from the source

        Raises:
            HTTPException: 404 if the entry is not cached
        """
        try:
            media = self._cache.storage.get_decoded(id)
        except MediaCacheError as e:
            raise HTTPException(status_code=status_for(e), detail=f"Failed to read {id}: {e}") from e

        if media is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{id} is not cached")

        content_type, _ = mimetypes.guess_type(media.source)
        return Response(content=media.data, media_type=content_type or "application/octet-stream")

    async def delete_media(self, id: str) -> MediaDeleteResponse:
        """Handle DELETE /media/{id} requests."""
        try:
            removed = self._cache.remove(id)
        except MediaCacheError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to delete {id}: {e}",
            ) from e

        if not removed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{id} is not cached")
        return MediaDeleteResponse(success=True, id=id, message="Entry removed")

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /media requests."""
        try:
            count = self._cache.storage.size()
            self._cache.clear()
        except MediaCacheError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        return CacheClearResponse(
            success=True,
            cleared_count=count,
            message="Cache cleared successfully",
        )

    async def scan(self, request: ScanRequest) -> ScanResponse:
        """Handle POST /media/scan requests.

        Raises:
            HTTPException: 400 if the active backend is not on disk
        """
        backend = self._cache.storage
        if not isinstance(backend, DiskCacheRepository):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Scanning requires the disk backend",
            )

        directory = Path(request.directory) if request.directory else backend.directory
        try:
            backend.scan(directory)
        except MediaCacheError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to scan {directory}: {e}",
            ) from e

        return ScanResponse(directory=str(directory), total_entries=backend.size())

    async def set_capacity(self, request: CapacityRequest) -> CapacityResponse:
        """Handle PUT /media/capacity requests."""
        backend = self._cache.storage
        try:
            backend.set_capacity(request.capacity)
        except MediaCacheError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to set capacity: {e}",
            ) from e

        logger.info("Capacity set to %d (%d entries)", backend.capacity, backend.size())
        return CapacityResponse(capacity=backend.capacity, total_entries=backend.size())

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        return CacheStatsResponse(**self._cache.get_stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        stats = self._cache.storage.get_stats()
        return HealthCheckResponse(
            status="healthy",
            backend=stats.get("backend", "unknown"),
            total_entries=stats.get("total_entries", 0),
        )
