"""Supported image and video media types.

A resource is accepted when its MIME type is on ``SUPPORTED_MIME_TYPES``,
or, as a fallback for servers that send a generic content type, when the
locator's extension is on ``SUPPORTED_EXTENSIONS``.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from urllib.parse import urlsplit


class MediaType(str, Enum):
    # Images
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    BMP = "image/bmp"
    WEBP = "image/webp"
    SVG = "image/svg+xml"
    TIFF = "image/tiff"
    ICON = "image/x-icon"
    HEIC = "image/heic"
    HEIF = "image/heif"
    JXR = "image/jxr"
    AVIF = "image/avif"

    # Videos
    MP4 = "video/mp4"
    WEBM = "video/webm"
    AVI = "video/x-msvideo"
    FLV = "video/x-flv"
    MKV = "video/x-matroska"
    MPEG = "video/mpeg"


SUPPORTED_MIME_TYPES: frozenset[str] = frozenset(t.value for t in MediaType)

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
    {
        # Images
        "jpg", "jpeg", "png", "gif", "bmp", "webp", "svg", "tiff", "tif",
        "ico", "cur", "heic", "heif", "jxr", "wdp", "hdp", "avif",
        # Videos
        "mp4", "m4v", "webm", "avi", "flv", "mkv", "mpeg", "mpg",
    }
)


def normalize_mime_type(content_type: str | None) -> str | None:
    """Strip parameters (``; charset=...``) and lowercase a Content-Type value."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower() or None


def is_supported_mime_type(content_type: str | None) -> bool:
    mime = normalize_mime_type(content_type)
    return mime is not None and mime in SUPPORTED_MIME_TYPES


def is_supported_extension(locator: str | None) -> bool:
    """Check the extension of a URL path or file path against the allow-list."""
    if not locator:
        return False
    path = urlsplit(locator).path or locator
    suffix = PurePosixPath(path).suffix
    if not suffix or suffix == ".":
        return False
    return suffix[1:].lower() in SUPPORTED_EXTENSIONS


def is_supported(content_type: str | None, locator: str | None) -> bool:
    """MIME allow-list first, extension allow-list as the fallback."""
    return is_supported_mime_type(content_type) or is_supported_extension(locator)
