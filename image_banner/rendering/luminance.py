#!/usr/bin/env python3
# image_banner/rendering/luminance.py
"""
Luminance to glyph mapping.

Brightness uses the BT.709 weights, scaled to an integer percentage and
looked up in a 9-step ramp from ' ' (brightest) down to '@'.
Inverting flips the ramp so bright pixels get dense glyphs on dark consoles.
"""

from __future__ import annotations

import numpy as np

from image_banner.palette import BLUE_WEIGHT, GREEN_WEIGHT, RED_WEIGHT, RGB

__all__ = [
    "GLYPH_BANDS",
    "DARKEST_GLYPH",
    "LuminanceMapper",
    "luminance_grid",
    "glyph_grid",
    "glyph_for_luminance",
    "glyphs_for_luminance",
]

# (lower bound, glyph), brightest first. Anything below the last bound is DARKEST_GLYPH.
GLYPH_BANDS = (
    (90, " "),
    (80, "."),
    (70, "*"),
    (60, ":"),
    (50, "o"),
    (40, "&"),
    (30, "8"),
    (20, "#"),
)
DARKEST_GLYPH = "@"

# Ascending lookup tables for searchsorted.
_THRESHOLDS = np.array([lo for lo, _ in reversed(GLYPH_BANDS)], dtype=np.int64)
_RAMP = np.array([DARKEST_GLYPH] + [g for _, g in reversed(GLYPH_BANDS)])


def luminance_grid(pixels: np.ndarray, invert: bool = False) -> np.ndarray:
    """Integer luminance percentage (0..100) for every pixel of an (..., 3) array."""
    arr = np.asarray(pixels, dtype=np.float64)
    if invert:
        arr = 255.0 - arr
    lum = RED_WEIGHT * arr[..., 0] + GREEN_WEIGHT * arr[..., 1] + BLUE_WEIGHT * arr[..., 2]
    pct = np.ceil((lum / 255.0) * 100)
    return np.clip(pct, 0, 100).astype(np.int64)


def glyph_for_luminance(lum: int) -> str:
    """First band whose lower bound lum reaches, brightest first."""
    for low, glyph in GLYPH_BANDS:
        if lum >= low:
            return glyph
    return DARKEST_GLYPH


def glyphs_for_luminance(lum: np.ndarray) -> np.ndarray:
    idx = np.searchsorted(_THRESHOLDS, lum, side="right")
    return _RAMP[idx]


def glyph_grid(pixels: np.ndarray, invert: bool = False) -> np.ndarray:
    """Glyph for every pixel of an (..., 3) array."""
    return glyphs_for_luminance(luminance_grid(pixels, invert))


class LuminanceMapper:
    """Per-pixel front end for luminance_grid/glyph_grid."""

    def __init__(self, invert: bool = False):
        self.invert = bool(invert)

    def luminance(self, pixel: RGB) -> int:
        return int(luminance_grid(np.array(pixel, dtype=np.float64), self.invert))

    def glyph_for(self, pixel: RGB) -> str:
        return glyph_for_luminance(self.luminance(pixel))

    def glyphs(self, pixels: np.ndarray) -> np.ndarray:
        return glyph_grid(pixels, self.invert)
