"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

from media_cache.entities import RequestState


class FetchMediaResponse(BaseModel):
    """Response DTO for a completed fetch."""

    id: str = Field(..., description="Cache identifier derived from the source")
    source: str = Field(..., description="The requested source locator")
    state: RequestState = Field(..., description="Terminal state: SUCCEEDED or CACHE_HIT")
    cache_hit: bool = Field(..., description="Whether the bytes came from the cache")
    source_size: int = Field(..., description="Size of the loaded resource in bytes", ge=0)
    output_size: int = Field(..., description="Size of the transformed output in bytes", ge=0)


class MediaDeleteResponse(BaseModel):
    """Response DTO for removing one entry."""

    success: bool = Field(..., description="Whether the operation succeeded")
    id: str = Field(..., description="The removed entry's identifier")
    message: str = Field(..., description="Human-readable status message")


class CacheClearResponse(BaseModel):
    """Response DTO for clearing the cache."""

    success: bool = Field(..., description="Whether the operation succeeded")
    cleared_count: int = Field(..., description="Number of entries removed", ge=0)
    message: str = Field(..., description="Human-readable status message")


class CapacityResponse(BaseModel):
    """Response DTO for capacity changes."""

    capacity: int = Field(..., description="Current maximum number of entries", ge=0)
    total_entries: int = Field(..., description="Entries left after eviction", ge=0)


class ScanResponse(BaseModel):
    """Response DTO for a directory scan."""

    directory: str = Field(..., description="The scanned directory")
    total_entries: int = Field(..., description="Entries indexed after the scan", ge=0)


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    backend: str = Field(..., description="Active backend: 'memory' or 'disk'")
    total_entries: int = Field(..., description="Total number of cached entries", ge=0)
    capacity: int = Field(..., description="Maximum number of entries", ge=0)
    store_strategy: str = Field(..., description="Which payload is stored on completion")
    total_requests: int = Field(0, description="Requests executed", ge=0)
    cache_hits: int = Field(0, description="Requests served from the cache", ge=0)
    cache_misses: int = Field(0, description="Requests fetched from the source", ge=0)
    failures: int = Field(0, description="Failed requests", ge=0)
    hit_rate: float = Field(0.0, description="cache_hits / total_requests", ge=0.0, le=1.0)
    avg_fetch_time_ms: float = Field(0.0, description="Mean fetch duration in milliseconds")

    model_config = {"extra": "allow"}


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    backend: str = Field(..., description="Active backend")
    total_entries: int = Field(..., description="Total number of cached entries", ge=0)
