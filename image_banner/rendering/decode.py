#!/usr/bin/env python3
# image_banner/rendering/decode.py
"""
Image decoding under a scoped Pillow safety limit.

Image.MAX_IMAGE_PIXELS is process-wide. decoding_guard() sets it for the
duration of a decode and restores the previous value on every exit path.
The module lock serializes renders so two threads never interleave the
set/restore pair.
"""

from __future__ import annotations

import contextlib
import io
import logging
import threading
from typing import Iterator, Optional

from PIL import Image

from image_banner.errors import DecodeError

__all__ = ["decoding_guard", "decode_image", "DEFAULT_MAX_IMAGE_PIXELS"]

log = logging.getLogger(__name__)

DEFAULT_MAX_IMAGE_PIXELS = 89_478_485

_lock = threading.Lock()


@contextlib.contextmanager
def decoding_guard(max_image_pixels: Optional[int] = DEFAULT_MAX_IMAGE_PIXELS) -> Iterator[None]:
    with _lock:
        previous = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = max_image_pixels
        try:
            yield
        finally:
            Image.MAX_IMAGE_PIXELS = previous


def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes into a fully loaded Pillow image."""
    if not data:
        raise DecodeError("image data is empty")
    img = Image.open(io.BytesIO(data))
    img.load()
    log.debug("Decoded %s image %dx%d (mode %s)", img.format, img.width, img.height, img.mode)
    return img
