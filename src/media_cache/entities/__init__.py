"""Domain entities for internal representation.

These are pure dataclasses (frozen) used by services and repositories.
They are NOT used for API contracts - use DTOs from the dto package for that.
"""

from .cached_media import CachedMedia, FileRef, Payload, RawBytes
from .media_request import MediaRequest, RequestResult, RequestState, StoreStrategy

__all__ = [
    "CachedMedia",
    "FileRef",
    "Payload",
    "RawBytes",
    "MediaRequest",
    "RequestResult",
    "RequestState",
    "StoreStrategy",
]
