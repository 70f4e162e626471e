"""Colour conversions used by the lighting effects."""

from __future__ import annotations

import math
from typing import NamedTuple


class RGB(NamedTuple):
    """An 8-bit red, green, blue triple."""

    r: int
    g: int
    b: int


def _to_byte(value: float) -> int:
    return max(0, min(255, int(value * 255)))


def hsl_to_rgb(h: int, s: int, l: int) -> RGB:
    """Convert hue, saturation and lightness, each 0-255, to an RGB colour."""
    hue = (h & 0xFF) / 255.0 * 360.0
    sat = (s & 0xFF) / 255.0
    light = (l & 0xFF) / 255.0

    chroma = (1.0 - abs(2 * light - 1)) * sat
    x = chroma * (1 - abs(math.fmod(hue / 60.0, 2) - 1))
    m = light - chroma / 2

    region = int(hue / 60.0) % 6
    rf, gf, bf = {
        0: (chroma, x, 0.0),
        1: (x, chroma, 0.0),
        2: (0.0, chroma, x),
        3: (0.0, x, chroma),
        4: (x, 0.0, chroma),
    }.get(region, (chroma, 0.0, x))

    return RGB(_to_byte(rf + m), _to_byte(gf + m), _to_byte(bf + m))


def complementary_color(h: int, s: int, l: int) -> RGB:
    """Return the colour on the opposite side of the hue wheel."""
    return hsl_to_rgb((h + 128) & 0xFF, s, l)