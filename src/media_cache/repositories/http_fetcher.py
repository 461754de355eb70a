"""httpx-based media fetcher.

Loads images and videos from ``http``/``https`` URLs, ``file`` URLs and
plain local paths. A resource is accepted when its content type is on the
MIME allow-list, or when its path has an allowed extension.
"""

import logging
import mimetypes
import string
import threading
from collections.abc import Callable
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx

from media_cache.config import settings
from media_cache.exceptions import FetchError, InvalidSourceError, UnsupportedContentTypeError
from media_cache.utils.media_types import is_supported

logger = logging.getLogger(__name__)

_HTTP_SCHEMES = ("http", "https")


class HttpMediaFetcher:
    """httpx implementation of the MediaFetcher protocol.

    This class satisfies the MediaFetcher protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        fetcher = HttpMediaFetcher.create()

        data = fetcher.fetch("https://example.com/cat.png")
        data = fetcher.fetch(
            "https://example.com/cat.png",
            configure=lambda request: request.headers.update({"Authorization": "Bearer ..."}),
        )
        fetcher.close()
        ```
    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds. Defaults to settings.fetch_timeout.
            user_agent: User-Agent header sent with every request.
                       Defaults to settings.fetch_user_agent.
            transport: Custom httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._timeout = timeout or settings.fetch_timeout
        self._user_agent = user_agent or settings.fetch_user_agent
        self._transport = transport
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client.

        Returns:
            The httpx.Client instance
        """
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        headers={"User-Agent": self._user_agent},
                        follow_redirects=True,
                        transport=self._transport,
                    )
        return self._client

    @classmethod
    def create(cls, timeout: float | None = None) -> "HttpMediaFetcher":
        """Factory method to create HttpMediaFetcher with defaults.

        Args:
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured HttpMediaFetcher
        """
        return cls(timeout=timeout)

    def fetch(
        self,
        source: str,
        configure: Callable[[httpx.Request], None] | None = None,
    ) -> bytes:
        """Fetch the bytes of a supported media resource.

        Args:
            source: http(s) URL, file URL or local path
            configure: Optional hook called with the outgoing request before
                it is sent. Ignored for local files.

        Returns:
            The resource's raw bytes

        Raises:
            InvalidSourceError: If the source is not a usable URL or existing path
            UnsupportedContentTypeError: If the resource is not an image or video
            FetchError: If the request fails or returns a non-2xx status
        """
        if source is None or not source.strip():
            raise InvalidSourceError("Source locator is empty")

        parts = urlsplit(source)
        scheme = parts.scheme.lower()
        if scheme in _HTTP_SCHEMES:
            return self._fetch_url(source, configure)
        if scheme == "file":
            return self._fetch_file(Path(url2pathname(parts.path)), source)
        if _is_local_path(scheme):
            path = Path(source).expanduser()
            if not path.exists():
                raise InvalidSourceError(f"Not a URL or an existing file: {source}")
            return self._fetch_file(path, source)
        raise InvalidSourceError(f"Unsupported URL scheme '{parts.scheme}' in {source}")

    def _fetch_url(
        self, url: str, configure: Callable[[httpx.Request], None] | None
    ) -> bytes:
        try:
            request = self.client.build_request("GET", url)
        except httpx.InvalidURL as e:
            raise InvalidSourceError(f"Invalid URL {url}: {e}") from e

        if configure is not None:
            configure(request)

        try:
            response = self.client.send(request)
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            raise FetchError(f"Request to {url} returned HTTP {response.status_code}")

        content_type = response.headers.get("content-type")
        if not is_supported(content_type, str(response.url)) and not is_supported(None, url):
            raise UnsupportedContentTypeError(
                f"{url} has unsupported content type {content_type!r}"
            )

        logger.debug("Fetched %d bytes from %s", len(response.content), url)
        return response.content

    def _fetch_file(self, path: Path, source: str) -> bytes:
        content_type, _ = mimetypes.guess_type(path.name)
        if not is_supported(content_type, path.name):
            raise UnsupportedContentTypeError(
                f"{source} has unsupported content type {content_type!r}"
            )
        try:
            data = path.read_bytes()
        except OSError as e:
            raise FetchError(f"Cannot read {path}: {e}") from e
        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    def close(self) -> None:
        """Close the HTTP client.

        Should be called when shutting down the application.
        """
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None


def _is_local_path(scheme: str) -> bool:
    # No scheme, or a Windows drive letter parsed as one.
    return scheme == "" or (len(scheme) == 1 and scheme in string.ascii_lowercase)
