"""Request and result domain entities.

A ``MediaRequest`` is an immutable description of what to load. Every
execution produces fresh ``RequestResult`` values, one per state change, so a
request can be executed any number of times, concurrently, without sharing
mutable state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

from media_cache.entities.cached_media import CachedMedia
from media_cache.utils.identifiers import generate_id

if TYPE_CHECKING:
    import httpx

    from media_cache.protocols.transform import Transform


class RequestState(str, Enum):
    """Lifecycle states of a request execution."""

    # Not executed yet
    READY = "READY"
    # Being worked on
    STARTED = "STARTED"
    # Terminal; the captured cause is in RequestResult.error
    FAILED = "FAILED"
    # Terminal; loaded from the source locator
    SUCCEEDED = "SUCCEEDED"
    # Terminal; found in the cache, no connection was made
    CACHE_HIT = "CACHE_HIT"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestState.FAILED, RequestState.SUCCEEDED, RequestState.CACHE_HIT)


class StoreStrategy(str, Enum):
    """Which payload is persisted when a request completes."""

    SAVE_ORIGINAL = "save_original"
    SAVE_TRANSFORMED = "save_transformed"


@dataclass(frozen=True)
class MediaRequest:
    """Immutable description of a resource request.

    Attributes:
        source: URL or file path of the resource (None or blank is invalid)
        overwrite: Skip the cache lookup and always fetch from the source
        transforms: Image operations applied, in order, after loading
        store_strategy: Per-request override of the cache's store strategy
        configure: Hook called with the outgoing ``httpx.Request`` before it is sent
        output_format: Pillow format used to re-encode transformed images
    """

    source: str | None
    overwrite: bool = False
    transforms: tuple[Transform, ...] = field(default_factory=tuple)
    store_strategy: StoreStrategy | None = None
    configure: Callable[[httpx.Request], None] | None = None
    output_format: str = "PNG"

    @property
    def has_source(self) -> bool:
        return self.source is not None and self.source.strip() != ""

    @property
    def id(self) -> str | None:
        """Cache identifier derived from the source, None when there is no source."""
        if not self.has_source:
            return None
        return generate_id(self.source)

    def with_transform(self, transform: Transform) -> MediaRequest:
        """Return a copy of this request with one more transform appended."""
        return replace(self, transforms=(*self.transforms, transform))

    def with_overwrite(self, overwrite: bool = True) -> MediaRequest:
        """Return a copy of this request with the overwrite flag set."""
        return replace(self, overwrite=overwrite)

    def __repr__(self) -> str:
        return (
            f"MediaRequest(source={self.source!r}, overwrite={self.overwrite}, "
            f"transforms={len(self.transforms)})"
        )


@dataclass(frozen=True)
class RequestResult:
    """Outcome of a request execution at a given state.

    Which fields are populated depends on the state, so check ``state`` (or
    ``is_success``/``is_failed``) before unwrapping:

    - READY/STARTED: nothing
    - SUCCEEDED/CACHE_HIT: source_media and output_media
    - FAILED: error, plus whatever media was loaded before the failure
    """

    request: MediaRequest
    state: RequestState = RequestState.READY
    source_media: CachedMedia | None = None
    output_media: CachedMedia | None = None
    error: BaseException | None = None

    @property
    def id(self) -> str | None:
        """The request's cache identifier."""
        return self.request.id

    @property
    def is_success(self) -> bool:
        return self.state in (RequestState.SUCCEEDED, RequestState.CACHE_HIT)

    @property
    def is_failed(self) -> bool:
        return self.state == RequestState.FAILED

    def with_state(self, state: RequestState) -> RequestResult:
        return replace(self, state=state)

    def unwrap_source(self) -> CachedMedia:
        if self.source_media is None:
            raise ValueError(f"Result in state {self.state.value} has no source media")
        return self.source_media

    def unwrap_output(self) -> CachedMedia:
        if self.output_media is None:
            raise ValueError(f"Result in state {self.state.value} has no output media")
        return self.output_media

    def unwrap_error(self) -> BaseException:
        if self.error is None:
            raise ValueError(f"Result in state {self.state.value} has no error")
        return self.error
