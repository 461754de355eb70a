"""Image transforms and the pipeline that applies them.

Usage:
    ```python
    from media_cache.transforms import Grayscale, Resize, TransformPipeline

    pipeline = TransformPipeline([Resize(128, 128), Grayscale()])
    output = pipeline.apply(media)
    ```
"""

from .operations import (
    Brightness,
    CenterCrop,
    Flip,
    FlipOrientation,
    GaussianBlur,
    Grayscale,
    Resize,
    Rotate,
)
from .pipeline import TransformPipeline

__all__ = [
    "Brightness",
    "CenterCrop",
    "Flip",
    "FlipOrientation",
    "GaussianBlur",
    "Grayscale",
    "Resize",
    "Rotate",
    "TransformPipeline",
]
