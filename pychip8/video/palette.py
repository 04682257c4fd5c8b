"""Two-colour palettes for the monochrome CHIP-8 display.

A palette is ``(off, on)``: the colour of unlit pixels first, then lit ones.
"""

from __future__ import annotations

from typing import Sequence, Tuple

RGBColor = Tuple[int, int, int]
Palette = Tuple[RGBColor, RGBColor]


MONOCHROME: Palette = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
# Teal background with white pixels, as used by the browser frontend.
OCEAN: Palette = ((0x0A, 0x84, 0xA0), (0xFF, 0xFF, 0xFF))


def validate_palette(palette: Sequence[RGBColor]) -> Palette:
    """Return ``palette`` as an ``(off, on)`` pair with channels masked to a byte."""

    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (off and on)")
    off, on = palette
    if len(off) != 3 or len(on) != 3:
        raise ValueError("palette entries must be RGB tuples")
    return _as_rgb(off), _as_rgb(on)


def _as_rgb(color: Sequence[int]) -> RGBColor:
    red, green, blue = (int(channel) & 0xFF for channel in color)
    return red, green, blue
