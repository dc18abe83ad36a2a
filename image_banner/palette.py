#!/usr/bin/env python3
# image_banner/palette.py
"""
The 16-color terminal palette used for nearest-color quantization.

Entries keep a fixed order (8 standard colors, then their bright variants).
The order decides ties in nearest_to(), so it must never change.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple, Sequence, Tuple

RGB = Tuple[int, int, int]

__all__ = [
    "RGB",
    "RED_WEIGHT",
    "GREEN_WEIGHT",
    "BLUE_WEIGHT",
    "PaletteEntry",
    "Palette",
    "ANSI_16",
    "color_distance",
]

# ITU-R BT.709 luma coefficients, reused as channel weights for color distance.
RED_WEIGHT = 0.2126
GREEN_WEIGHT = 0.7152
BLUE_WEIGHT = 0.0722


class PaletteEntry(NamedTuple):
    name: str
    rgb: RGB


def color_distance(a: RGB, b: RGB) -> float:
    """Weighted squared distance between two RGB triples."""
    red_delta = (a[0] - b[0]) * RED_WEIGHT
    green_delta = (a[1] - b[1]) * GREEN_WEIGHT
    blue_delta = (a[2] - b[2]) * BLUE_WEIGHT
    return red_delta * red_delta + green_delta * green_delta + blue_delta * blue_delta


class Palette:
    """Immutable, ordered registry of named colors."""

    __slots__ = ("_entries", "_by_name")

    def __init__(self, entries: Sequence[Tuple[str, RGB]]):
        built = tuple(PaletteEntry(str(name), tuple(int(c) for c in rgb)) for name, rgb in entries)
        by_name = {}
        for entry in built:
            if entry.name in by_name:
                raise ValueError(f"duplicate palette color: {entry.name}")
            if len(entry.rgb) != 3 or not all(0 <= c <= 255 for c in entry.rgb):
                raise ValueError(f"invalid RGB for {entry.name}: {entry.rgb}")
            by_name[entry.name] = entry
        if not built:
            raise ValueError("palette must not be empty")
        self._entries = built
        self._by_name = by_name

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> PaletteEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"Palette({', '.join(self.names())})"

    def names(self) -> Tuple[str, ...]:
        return tuple(e.name for e in self._entries)

    def color_named(self, name: str) -> RGB:
        """Return the RGB value of a color. Raises KeyError for unknown names."""
        return self._by_name[name].rgb

    def nearest_to(self, pixel: RGB) -> PaletteEntry:
        """
        Return the entry closest to pixel by color_distance().
        Linear scan; only a strictly smaller distance replaces the best match,
        so exact ties resolve to the entry that comes first.
        """
        best = None
        best_distance = None
        for entry in self._entries:
            d = color_distance(pixel, entry.rgb)
            if best_distance is None or d < best_distance:
                best_distance = d
                best = entry
        return best


ANSI_16 = Palette((
    ("BLACK", (0, 0, 0)),
    ("RED", (170, 0, 0)),
    ("GREEN", (0, 170, 0)),
    ("YELLOW", (170, 85, 0)),
    ("BLUE", (0, 0, 170)),
    ("MAGENTA", (170, 0, 170)),
    ("CYAN", (0, 170, 170)),
    ("WHITE", (170, 170, 170)),
    ("BRIGHT_BLACK", (85, 85, 85)),
    ("BRIGHT_RED", (255, 85, 85)),
    ("BRIGHT_GREEN", (85, 255, 85)),
    ("BRIGHT_YELLOW", (255, 255, 85)),
    ("BRIGHT_BLUE", (85, 85, 255)),
    ("BRIGHT_MAGENTA", (255, 85, 255)),
    ("BRIGHT_CYAN", (85, 255, 255)),
    ("BRIGHT_WHITE", (255, 255, 255)),
))
