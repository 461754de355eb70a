"""Shared fixtures for the media cache tests."""

import io
from pathlib import Path

import pytest
from PIL import Image

from media_cache.entities import CachedMedia
from media_cache.exceptions import FetchError

SOURCE_URL = "https://images.example.com/cat.png"


def make_png(size: tuple[int, int] = (8, 6), color: tuple[int, ...] = (200, 30, 30)) -> bytes:
    """Encode a solid-color PNG."""
    mode = "RGBA" if len(color) == 4 else "RGB"
    buffer = io.BytesIO()
    Image.new(mode, size, color=color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeFetcher:
    """In-memory MediaFetcher recording every call."""

    def __init__(self, resources: dict[str, bytes] | None = None) -> None:
        self.resources = dict(resources or {})
        self.calls: list[str] = []
        self.closed = False

    def fetch(self, source, configure=None) -> bytes:
        self.calls.append(source)
        try:
            return self.resources[source]
        except KeyError:
            raise FetchError(f"No resource at {source}") from None

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def media(png_bytes) -> CachedMedia:
    return CachedMedia(source=SOURCE_URL, data=png_bytes)


@pytest.fixture
def fetcher(png_bytes) -> FakeFetcher:
    return FakeFetcher({SOURCE_URL: png_bytes})


@pytest.fixture
def cache_dir(tmp_path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def image_file(tmp_path, png_bytes) -> Path:
    path = tmp_path / "images" / "local.png"
    path.parent.mkdir()
    path.write_bytes(png_bytes)
    return path
