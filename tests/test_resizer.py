import numpy as np
import pytest
from PIL import Image

from image_banner.rendering.resizer import ImageResizer, RasterImage, target_size


def test_downscale_applies_ratio_to_height():
    assert target_size(200, 100, 100, 0.5) == (100, 25)


def test_no_downscale_keeps_width():
    assert target_size(50, 40, 100, 0.5) == (50, 20)


def test_height_rounds_up():
    # 0.5 * 0.5 * 11 = 2.75
    assert target_size(200, 11, 100, 0.5) == (100, 3)


def test_vertical_stretch_without_horizontal_scaling():
    assert target_size(10, 10, 100, 2.0) == (10, 20)


def test_width_equal_to_max_is_not_scaled():
    assert target_size(100, 10, 100, 1.0) == (100, 10)


def test_resize_produces_raster_of_target_size():
    img = Image.new("RGB", (200, 100), (10, 20, 30))
    raster = ImageResizer().resize(img, 100, 0.5)
    assert (raster.width, raster.height) == (100, 25)
    assert raster.pixels.shape == (25, 100, 3)
    assert raster.pixels.dtype == np.uint8
    assert raster.pixel(0, 0) == (10, 20, 30)


def test_raster_is_read_only():
    raster = RasterImage.from_image(Image.new("RGB", (2, 2), (1, 2, 3)))
    with pytest.raises(ValueError):
        raster.pixels[0, 0, 0] = 9


def test_transparent_pixels_become_black():
    img = Image.new("RGBA", (2, 1), (255, 255, 255, 255))
    img.putpixel((1, 0), (255, 255, 255, 0))
    raster = ImageResizer("nearest").resize(img, 10, 1.0)
    assert raster.pixel(0, 0) == (255, 255, 255)
    assert raster.pixel(1, 0) == (0, 0, 0)


def test_grayscale_is_converted_to_rgb():
    raster = ImageResizer().resize(Image.new("L", (3, 2), 128), 10, 1.0)
    assert raster.pixel(2, 1) == (128, 128, 128)


def test_unknown_filter_rejected():
    with pytest.raises(ValueError):
        ImageResizer("sinc")


def test_16bit_png_is_scaled_not_clipped(tmp_path):
    path = tmp_path / "gray16.png"
    Image.new("I;16", (1, 1), 32896).save(path)
    with Image.open(path) as img:
        raster = ImageResizer().resize(img, 10, 1.0)
    assert raster.pixel(0, 0) == (128, 128, 128)


def test_32bit_int_image_uses_16bit_range():
    raster = ImageResizer().resize(Image.new("I", (1, 1), 65535), 10, 1.0)
    assert raster.pixel(0, 0) == (255, 255, 255)
    raster = ImageResizer().resize(Image.new("I", (1, 1), 256 * 64), 10, 1.0)
    assert raster.pixel(0, 0) == (64, 64, 64)


def test_float_image_is_clipped_to_8bit():
    assert ImageResizer().resize(Image.new("F", (1, 1), 300.0), 10, 1.0).pixel(0, 0) == (255, 255, 255)
    assert ImageResizer().resize(Image.new("F", (1, 1), 100.0), 10, 1.0).pixel(0, 0) == (100, 100, 100)
