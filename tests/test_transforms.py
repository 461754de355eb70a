"""Tests for image transforms and the pipeline."""

import io

import pytest
from PIL import Image

from conftest import make_png
from media_cache.entities import CachedMedia
from media_cache.exceptions import TransformError
from media_cache.protocols import Transform
from media_cache.transforms import (
    Brightness,
    CenterCrop,
    Flip,
    FlipOrientation,
    GaussianBlur,
    Grayscale,
    Resize,
    Rotate,
    TransformPipeline,
)


def _decode(media: CachedMedia) -> Image.Image:
    image = Image.open(io.BytesIO(media.data))
    image.load()
    return image


def _two_tone(size=(4, 2)) -> Image.Image:
    """Left half red, right half blue."""
    image = Image.new("RGB", size, (255, 0, 0))
    image.paste((0, 0, 255), (size[0] // 2, 0, size[0], size[1]))
    return image


def test_transforms_satisfy_protocol():
    for transform in (Resize(1, 1), CenterCrop(1, 1), Rotate(90), Flip(), Grayscale(),
                      Brightness(1), GaussianBlur()):
        assert isinstance(transform, Transform)


def test_resize():
    assert Resize(10, 4)(Image.new("RGB", (3, 3))).size == (10, 4)


def test_resize_same_size_is_identity():
    image = Image.new("RGB", (3, 3))
    assert Resize(3, 3)(image) is image


def test_center_crop_to_square():
    result = CenterCrop(2, 2)(_two_tone((6, 2)))
    assert result.size == (2, 2)
    assert result.getpixel((0, 0))[0] > 0 and result.getpixel((1, 0))[2] > 0


def test_rotate_clockwise():
    image = Image.new("RGB", (3, 3), (0, 0, 0))
    image.putpixel((1, 0), (255, 255, 255))
    rotated = Rotate(90)(image)
    assert rotated.size == (3, 3)
    assert rotated.getpixel((2, 1)) == (255, 255, 255)


def test_flip_horizontal_and_vertical():
    flipped = Flip(FlipOrientation.HORIZONTAL)(_two_tone())
    assert flipped.getpixel((0, 0)) == (0, 0, 255)

    image = Image.new("RGB", (1, 2), (0, 0, 0))
    image.putpixel((0, 0), (255, 255, 255))
    assert Flip(FlipOrientation.VERTICAL)(image).getpixel((0, 1)) == (255, 255, 255)


def test_grayscale_luminosity():
    result = Grayscale()(Image.new("RGB", (1, 1), (255, 0, 0)))
    assert result.mode == "L"
    assert result.getpixel((0, 0)) == 76


def test_brightness_clamps():
    image = Image.new("RGB", (1, 1), (250, 10, 100))
    assert Brightness(20)(image).getpixel((0, 0)) == (255, 30, 120)
    assert Brightness(-20)(image).getpixel((0, 0)) == (230, 0, 80)


def test_brightness_keeps_alpha():
    image = Image.new("RGBA", (1, 1), (10, 10, 10, 128))
    assert Brightness(5)(image).getpixel((0, 0)) == (15, 15, 15, 128)


def test_gaussian_blur_keeps_size():
    assert GaussianBlur(1.5)(_two_tone((8, 8))).size == (8, 8)


@pytest.mark.parametrize("factory", [lambda: Resize(0, 5), lambda: CenterCrop(5, -1), lambda: GaussianBlur(-1)])
def test_invalid_parameters(factory):
    with pytest.raises(ValueError):
        factory()


def test_empty_pipeline_returns_input(media):
    assert TransformPipeline().apply(media) is media


def test_pipeline_applies_in_order(media):
    pipeline = TransformPipeline([Resize(4, 4), Grayscale()])
    output = pipeline.apply(media)

    assert output.source == media.source
    image = _decode(output)
    assert image.format == "PNG"
    assert image.size == (4, 4)
    assert image.mode == "L"


def test_pipeline_output_format():
    media = CachedMedia(source="s", data=make_png(color=(1, 2, 3, 255)))
    output = TransformPipeline([Flip()], output_format="JPEG").apply(media)
    assert _decode(output).format == "JPEG"


def test_pipeline_accepts_plain_callables(media):
    output = TransformPipeline([lambda image: image.convert("1")]).apply(media)
    assert _decode(output).mode == "1"


def test_pipeline_rejects_undecodable_data():
    media = CachedMedia(source="s", data=b"not an image")
    with pytest.raises(TransformError):
        TransformPipeline([Grayscale()]).apply(media)
