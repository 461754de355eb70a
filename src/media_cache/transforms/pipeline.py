"""Decode, transform, re-encode."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable

from PIL import Image, UnidentifiedImageError

from media_cache.entities import CachedMedia
from media_cache.exceptions import TransformError
from media_cache.protocols import Transform

logger = logging.getLogger(__name__)


class TransformPipeline:
    """Apply a sequence of transforms to cached media.

    The media is decoded once before the first transform and encoded once,
    in ``output_format``, after the last one. The output keeps the source
    locator of its input.

    Example:
        ```python
        pipeline = TransformPipeline([Resize(64, 64), Grayscale()])
        thumbnail = pipeline.apply(media)
        ```
    """

    def __init__(self, transforms: Iterable[Transform] = (), output_format: str = "PNG") -> None:
        self._transforms = tuple(transforms)
        self._output_format = output_format

    @property
    def transforms(self) -> tuple[Transform, ...]:
        return self._transforms

    @property
    def output_format(self) -> str:
        return self._output_format

    def __len__(self) -> int:
        return len(self._transforms)

    def apply(self, media: CachedMedia) -> CachedMedia:
        """Run every transform on ``media``.

        Returns:
            ``media`` itself when there are no transforms, otherwise new media
            holding the re-encoded image

        Raises:
            TransformError: If the data cannot be decoded or a transform or the
                encoder fails
        """
        if not self._transforms:
            return media

        try:
            with Image.open(io.BytesIO(media.data)) as decoded:
                decoded.load()
                image = decoded
                for transform in self._transforms:
                    image = transform(image)
                data = _encode(image, self._output_format)
        except UnidentifiedImageError as e:
            raise TransformError(f"Cannot decode image from {media.source}") from e
        except (OSError, ValueError, KeyError) as e:
            raise TransformError(f"Transform of {media.source} failed: {e}") from e

        logger.debug(
            "Applied %d transforms to %s (%d -> %d bytes)",
            len(self._transforms), media.source, media.size, len(data),
        )
        return CachedMedia(source=media.source, data=data)


def _encode(image: Image.Image, output_format: str) -> bytes:
    if output_format.upper() in ("JPEG", "JPG") and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format=output_format)
    return buffer.getvalue()
