#!/usr/bin/env python3
# image_banner/rendering/resizer.py
"""
Resize a decoded image onto the banner's character grid.

Width is only ever reduced (down to max_width); height is always multiplied
by the aspect ratio correction, so narrow images may be stretched vertically.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
from PIL import Image

from image_banner.palette import RGB

__all__ = [
    "RasterImage",
    "ImageResizer",
    "RESAMPLE_FILTERS",
    "target_size",
]

RESAMPLE_FILTERS: Dict[str, int] = {
    "lanczos": Image.LANCZOS,
    "bicubic": Image.BICUBIC,
    "bilinear": Image.BILINEAR,
    "box": Image.BOX,
    "hamming": Image.HAMMING,
    "nearest": Image.NEAREST,
}


@dataclass(frozen=True, eq=False)
class RasterImage:
    """Read-only RGB pixel grid, shape (height, width, 3)."""
    width: int
    height: int
    pixels: np.ndarray

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "RasterImage":
        arr = np.array(arr, dtype=np.uint8, copy=True)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"expected (height, width, 3) array, got {arr.shape}")
        arr.setflags(write=False)
        return cls(width=int(arr.shape[1]), height=int(arr.shape[0]), pixels=arr)

    @classmethod
    def from_image(cls, img: Image.Image) -> "RasterImage":
        return cls.from_array(np.asarray(img.convert("RGB"), dtype=np.uint8))

    def pixel(self, x: int, y: int) -> RGB:
        r, g, b = self.pixels[y, x].tolist()
        return r, g, b


def target_size(src_w: int, src_h: int, max_width: int, aspect_ratio: float) -> Tuple[int, int]:
    """Return the (width, height) of the character grid for a source image."""
    if src_w > max_width:
        resize_ratio = max_width / src_w
        width = max_width
    else:
        resize_ratio = 1.0
        width = src_w
    height = int(math.ceil(resize_ratio * aspect_ratio * src_h))
    return width, height


def _to_8bit(img: Image.Image) -> Image.Image:
    """
    Rescale high-depth single-channel images to mode "L".
    Pillow's own convert() clips these at 255, which turns 16-bit images white.
    I;16* and I hold 16-bit samples (PNG decodes 16-bit gray to either),
    F is clipped to 0..255.
    """
    if img.mode.startswith("I;16") or img.mode == "I":
        arr = np.clip(np.asarray(img, dtype=np.int64), 0, 65535) >> 8
    elif img.mode == "F":
        arr = np.clip(np.asarray(img, dtype=np.float64), 0.0, 255.0)
    else:
        return img
    return Image.fromarray(arr.astype(np.uint8))


def _to_rgb(img: Image.Image) -> Image.Image:
    """Return an 8-bit RGB image, compositing transparent pixels onto black."""
    img = _to_8bit(img)
    if img.mode == "RGB":
        return img
    if img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        canvas = Image.new("RGB", rgba.size, (0, 0, 0))
        canvas.paste(rgba, mask=rgba.getchannel("A"))
        return canvas
    return img.convert("RGB")


class ImageResizer:
    """Resample Pillow images to the banner grid with a fixed filter."""

    def __init__(self, resample: str = "lanczos"):
        if resample not in RESAMPLE_FILTERS:
            raise ValueError(f"unknown resample filter: {resample}")
        self.resample = resample

    @staticmethod
    def target_size(src_w: int, src_h: int, max_width: int, aspect_ratio: float) -> Tuple[int, int]:
        return target_size(src_w, src_h, max_width, aspect_ratio)

    def _resize(self, img: Image.Image, w: int, h: int) -> Image.Image:
        if img.width == w and img.height == h:
            return img
        return img.resize((w, h), RESAMPLE_FILTERS[self.resample])

    def resize(self, img: Image.Image, max_width: int, aspect_ratio: float) -> RasterImage:
        w, h = target_size(img.width, img.height, max_width, aspect_ratio)
        rgb = _to_rgb(img)
        return RasterImage.from_image(self._resize(rgb, w, h))
