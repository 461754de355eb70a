"""Request DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field

from media_cache.entities import StoreStrategy
from media_cache.transforms import FlipOrientation

TransformName = Literal[
    "resize", "center_crop", "rotate", "flip", "grayscale", "brightness", "gaussian_blur"
]


class TransformOptions(BaseModel):
    """One image transform.

    Only the parameters used by ``type`` are read:
    - resize, center_crop: width, height
    - rotate: degrees
    - flip: orientation
    - brightness: delta
    - gaussian_blur: radius
    """

    type: TransformName = Field(..., description="Transform to apply")
    width: int | None = Field(None, description="Target width in pixels", gt=0)
    height: int | None = Field(None, description="Target height in pixels", gt=0)
    degrees: float | None = Field(None, description="Clockwise rotation in degrees")
    orientation: FlipOrientation = Field(
        FlipOrientation.HORIZONTAL, description="Flip axis"
    )
    delta: int | None = Field(None, description="Brightness offset added to each channel")
    radius: float | None = Field(None, description="Blur radius", ge=0.0)


class FetchMediaRequest(BaseModel):
    """Request DTO for fetching a resource through the cache.

    The handler will convert this to a MediaRequest for the service layer.
    """

    source: str = Field(..., description="URL or file path of the resource", min_length=1)
    overwrite: bool = Field(False, description="Skip the cache lookup and always fetch")
    transforms: list[TransformOptions] = Field(
        default_factory=list,
        description="Transforms applied in order after loading",
    )
    store_strategy: StoreStrategy | None = Field(
        None,
        description="Override the cache's store strategy for this request",
    )
    output_format: str = Field("PNG", description="Image format used after transforms")
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra HTTP headers sent when fetching the source",
    )


class CapacityRequest(BaseModel):
    """Request DTO for resizing the cache."""

    capacity: int = Field(..., description="New maximum number of entries", ge=0)


class ScanRequest(BaseModel):
    """Request DTO for indexing a cache directory (disk backend only)."""

    directory: str | None = Field(
        None,
        description="Directory to scan (if null, scans the backend's current directory)",
    )
