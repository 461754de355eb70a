"""Image transforms.

Each transform is a small frozen dataclass that is called with a decoded
Pillow image and returns a new image. They are meant to be chained through
``TransformPipeline``, which handles decoding and encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from PIL import Image, ImageFilter

# Luminosity weights for red, green and blue.
GRAYSCALE_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)


class FlipOrientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Resize:
    """Scale to exactly ``width`` x ``height``. The aspect ratio may change."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resize target must be positive, got {self.width}x{self.height}")

    def __call__(self, image: Image.Image) -> Image.Image:
        if image.size == (self.width, self.height):
            return image
        return image.resize((self.width, self.height), Image.Resampling.LANCZOS)


@dataclass(frozen=True)
class CenterCrop:
    """Crop the centered region with the target aspect ratio, then resize to the target."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Crop target must be positive, got {self.width}x{self.height}")

    def __call__(self, image: Image.Image) -> Image.Image:
        src_w, src_h = image.size
        if (src_w, src_h) == (self.width, self.height):
            return image

        target_ratio = self.width / self.height
        if src_w / src_h > target_ratio:
            crop_w, crop_h = round(src_h * target_ratio), src_h
        else:
            crop_w, crop_h = src_w, round(src_w / target_ratio)
        crop_w, crop_h = max(crop_w, 1), max(crop_h, 1)

        left = (src_w - crop_w) // 2
        top = (src_h - crop_h) // 2
        cropped = image.crop((left, top, left + crop_w, top + crop_h))
        return cropped.resize((self.width, self.height), Image.Resampling.LANCZOS)


@dataclass(frozen=True)
class Rotate:
    """Rotate around the center by ``degrees``, clockwise for positive values.

    The canvas keeps its size, so corners may be clipped.
    """

    degrees: float

    def __call__(self, image: Image.Image) -> Image.Image:
        if self.degrees % 360 == 0:
            return image
        # Pillow rotates counterclockwise.
        return image.rotate(-self.degrees, resample=Image.Resampling.BICUBIC)


@dataclass(frozen=True)
class Flip:
    orientation: FlipOrientation = FlipOrientation.HORIZONTAL

    def __call__(self, image: Image.Image) -> Image.Image:
        if self.orientation == FlipOrientation.HORIZONTAL:
            return image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        return image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)


@dataclass(frozen=True)
class Grayscale:
    """Convert to 8-bit grayscale with the luminosity method."""

    def __call__(self, image: Image.Image) -> Image.Image:
        rgb = np.asarray(image.convert("RGB"), dtype=np.float32)
        gray = rgb @ GRAYSCALE_WEIGHTS
        return Image.fromarray(gray.astype(np.uint8))


@dataclass(frozen=True)
class Brightness:
    """Add ``delta`` to every color channel, clamped to [0, 255].

    Positive values brighten, negative values darken. Alpha is preserved.
    """

    delta: int

    def __call__(self, image: Image.Image) -> Image.Image:
        if self.delta == 0:
            return image
        has_alpha = image.mode in ("RGBA", "LA") or "transparency" in image.info
        rgba = np.asarray(image.convert("RGBA"), dtype=np.int16)
        out = rgba.copy()
        out[..., :3] = np.clip(rgba[..., :3] + self.delta, 0, 255)
        result = Image.fromarray(out.astype(np.uint8))
        return result if has_alpha else result.convert("RGB")


@dataclass(frozen=True)
class GaussianBlur:
    radius: float = 2.0

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Blur radius must be >= 0, got {self.radius}")

    def __call__(self, image: Image.Image) -> Image.Image:
        return image.filter(ImageFilter.GaussianBlur(self.radius))
