#!/usr/bin/env python3
# image_banner/rendering/quantizer.py
"""
Nearest-color quantization onto a Palette.

Distance is the BT.709-weighted squared RGB delta. That is a cheap
approximation, not a perceptual metric; outputs depend on it exactly.
"""

from __future__ import annotations

import numpy as np

from image_banner.palette import (
    ANSI_16,
    BLUE_WEIGHT,
    GREEN_WEIGHT,
    RED_WEIGHT,
    RGB,
    Palette,
    PaletteEntry,
)

__all__ = ["ColorQuantizer"]


class ColorQuantizer:
    def __init__(self, palette: Palette = ANSI_16):
        self.palette = palette
        self._names = np.array(palette.names())
        self._rgb = np.array([e.rgb for e in palette], dtype=np.float64)  # (N, 3)

    def nearest_to(self, pixel: RGB) -> PaletteEntry:
        return self.palette.nearest_to(pixel)

    def distances(self, pixels: np.ndarray) -> np.ndarray:
        """Distance from every pixel of an (..., 3) array to every entry, shape (..., N)."""
        arr = np.asarray(pixels, dtype=np.float64)[..., np.newaxis, :]
        delta = arr - self._rgb
        red = delta[..., 0] * RED_WEIGHT
        green = delta[..., 1] * GREEN_WEIGHT
        blue = delta[..., 2] * BLUE_WEIGHT
        return red * red + green * green + blue * blue

    def indices(self, pixels: np.ndarray) -> np.ndarray:
        # argmin returns the first minimum, same tie-break as Palette.nearest_to.
        return np.argmin(self.distances(pixels), axis=-1)

    def quantize_grid(self, pixels: np.ndarray) -> np.ndarray:
        """Palette color name for every pixel of an (..., 3) array."""
        return self._names[self.indices(pixels)]
