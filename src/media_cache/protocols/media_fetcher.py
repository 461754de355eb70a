"""Media fetcher protocol.

Defines the boundary to the transport layer: given a source locator, return
the raw bytes of a supported image or video, or raise a typed error.

Implementations can include:
- HttpMediaFetcher (httpx, also resolves file:// URLs and local paths)
- In-memory fakes for tests
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class MediaFetcher(Protocol):
    """Protocol for resource fetchers."""

    def fetch(
        self,
        source: str,
        configure: Callable[[httpx.Request], None] | None = None,
    ) -> bytes:
        """Fetch a resource.

        Args:
            source: URL or local path of the resource
            configure: Optional hook to adjust the outgoing request (headers, etc.)

        Returns:
            The resource's raw bytes

        Raises:
            InvalidSourceError: If the source cannot be parsed
            UnsupportedContentTypeError: If the resource is not a supported media type
            FetchError: If the transport fails
        """
        ...
