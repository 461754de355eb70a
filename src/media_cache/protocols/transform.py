"""Transform protocol.

A transform is a single image operation: it takes a decoded Pillow image
and returns a new one. Transforms never see encoded bytes; the pipeline
decodes once before the first transform and re-encodes once after the last.
"""

from typing import Protocol, runtime_checkable

from PIL import Image


@runtime_checkable
class Transform(Protocol):
    """Protocol for image transforms.

    Any callable with this signature satisfies it, so plain functions work
    as well as the classes in ``media_cache.transforms``.
    """

    def __call__(self, image: Image.Image) -> Image.Image:
        """Transform the image.

        Args:
            image: The decoded source image

        Returns:
            The transformed image
        """
        ...
