"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CapacityRequest, FetchMediaRequest, ScanRequest, TransformOptions
from .responses import (
    CacheClearResponse,
    CacheStatsResponse,
    CapacityResponse,
    FetchMediaResponse,
    HealthCheckResponse,
    MediaDeleteResponse,
    ScanResponse,
)

__all__ = [
    "FetchMediaRequest",
    "TransformOptions",
    "CapacityRequest",
    "ScanRequest",
    "FetchMediaResponse",
    "MediaDeleteResponse",
    "CacheClearResponse",
    "CapacityResponse",
    "ScanResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
