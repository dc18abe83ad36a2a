#!/usr/bin/env python3
# image_banner/rendering/renderer.py
"""
Banner renderer: image resource in, marked-up ASCII art out.

Pipeline per render call:
- read and decode the source image (under decoding_guard)
- resize to the character grid (ImageResizer)
- per pixel, pick a palette color (ColorQuantizer) and a glyph (LuminanceMapper)
- join rows of "${AnsiColor.NAME}<glyph>" with background/reset markers

render() never raises once its parameters are valid. Failures are logged
and come back as an empty string (or as a RenderFailure from try_render()).
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Iterator, List, Optional

from image_banner import markers
from image_banner.errors import FailureKind, InvalidParameterError, classify
from image_banner.palette import ANSI_16, Palette
from image_banner.rendering.decode import DEFAULT_MAX_IMAGE_PIXELS, decode_image, decoding_guard
from image_banner.rendering.luminance import LuminanceMapper
from image_banner.rendering.quantizer import ColorQuantizer
from image_banner.rendering.resizer import ImageResizer, RasterImage
from image_banner.source import ImageSource, open_source

__all__ = [
    "AsciiCell",
    "RenderParameters",
    "RenderFailure",
    "RenderResult",
    "BannerRenderer",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AsciiCell:
    glyph: str
    color_name: str


@dataclass(frozen=True)
class RenderParameters:
    max_width: int
    aspect_ratio: float
    invert: bool = False

    def __post_init__(self):
        mw = self.max_width
        if isinstance(mw, bool) or not isinstance(mw, numbers.Integral) or mw <= 0:
            raise InvalidParameterError(f"max_width must be a positive integer, got {mw!r}")
        ar = self.aspect_ratio
        if isinstance(ar, bool) or not isinstance(ar, numbers.Real) or not math.isfinite(ar) or ar <= 0:
            raise InvalidParameterError(f"aspect_ratio must be a positive number, got {ar!r}")
        object.__setattr__(self, "max_width", int(mw))
        object.__setattr__(self, "aspect_ratio", float(ar))
        object.__setattr__(self, "invert", bool(self.invert))


@dataclass(frozen=True)
class RenderFailure:
    kind: FailureKind
    message: str
    exception_type: str


@dataclass(frozen=True)
class RenderResult:
    text: str = ""
    failure: Optional[RenderFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class BannerRenderer:
    """
    Turns one image resource into banner text.

    image: file path, http(s) URL or ImageSource. A missing resource raises
    ResourceNotFoundError here, so no half-built renderer exists.
    """

    def __init__(
        self,
        image,
        palette: Palette = ANSI_16,
        resample: str = "lanczos",
        max_image_pixels: Optional[int] = DEFAULT_MAX_IMAGE_PIXELS,
        **source_kwargs,
    ):
        self.source: ImageSource = open_source(image, **source_kwargs)
        self.quantizer = ColorQuantizer(palette)
        self.resizer = ImageResizer(resample)
        self.max_image_pixels = max_image_pixels

    def __repr__(self) -> str:
        return f"BannerRenderer({self.source.name!r})"

    # -------- public API --------

    def render(self, max_width: int, aspect_ratio: float, invert: bool = False) -> str:
        return self.try_render(max_width, aspect_ratio, invert).text

    def try_render(self, max_width: int, aspect_ratio: float, invert: bool = False) -> RenderResult:
        params = RenderParameters(max_width, aspect_ratio, invert)
        try:
            raster = self.load_raster(params)
            text = self.render_image(raster, params.invert)
        except Exception as exc:
            failure = RenderFailure(classify(exc), str(exc), type(exc).__name__)
            log.warning(
                "Image banner not printable: %s (%s: '%s')",
                self.source, failure.exception_type, failure.message,
            )
            log.debug("Banner render traceback", exc_info=True)
            return RenderResult(failure=failure)
        return RenderResult(text=text)

    def load_raster(self, params: RenderParameters) -> RasterImage:
        """Decode the source and resize it to the banner grid."""
        with decoding_guard(self.max_image_pixels):
            img = decode_image(self.source.read_bytes())
            raster = self.resizer.resize(img, params.max_width, params.aspect_ratio)
        log.debug("Banner grid for %s: %dx%d", self.source, raster.width, raster.height)
        return raster

    # -------- text generation --------

    def cells(self, raster: RasterImage, invert: bool = False) -> Iterator[List[AsciiCell]]:
        """Yield one list of AsciiCell per row."""
        glyphs = LuminanceMapper(invert).glyphs(raster.pixels)
        names = self.quantizer.quantize_grid(raster.pixels)
        for y in range(raster.height):
            yield [AsciiCell(str(g), str(n)) for g, n in zip(glyphs[y], names[y])]

    def render_image(self, raster: RasterImage, invert: bool = False) -> str:
        if raster.width == 0 or raster.height == 0:
            return ""
        row_start = markers.bg(markers.DARK_BACKGROUND if invert else markers.DEFAULT)
        row_end = (markers.bg(markers.DEFAULT) if invert else "") + markers.fg(markers.DEFAULT) + "\n"

        glyphs = LuminanceMapper(invert).glyphs(raster.pixels)
        names = self.quantizer.quantize_grid(raster.pixels)
        color_markers = {name: markers.fg(name) for name in self.quantizer.palette.names()}

        lines = []
        for y in range(raster.height):
            row = "".join(color_markers[n] + g for n, g in zip(names[y].tolist(), glyphs[y].tolist()))
            lines.append(row_start + row + row_end)
        return "".join(lines)
