"""Derived names for palette colors published as library assets.

Names look like ``blue-100`` .. ``blue-900``: a base name from the hue and a
weight that grows as the color gets darker. Naming is cosmetic and never feeds
back into the palette math.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from okpalette import defaults
from okpalette.colorspace import hex_to_rgb

# (upper bound of hue bucket in degrees, name); first match wins
_HUE_NAMES: tuple[tuple[float, str], ...] = (
    (15, "red"),
    (45, "orange"),
    (75, "yellow"),
    (105, "lime"),
    (135, "green"),
    (165, "teal"),
    (195, "cyan"),
    (225, "blue"),
    (255, "indigo"),
    (285, "purple"),
    (315, "pink"),
    (345, "rose"),
    (360, "red"),
)

ACHROMATIC_NAME = "gray"


@dataclass(frozen=True)
class Hsl:
    h: float  # degrees, rounded
    s: float
    l: float


def hex_to_hsl(hex_color: str) -> Hsl:
    """Convert hex to HSL with hue rounded to whole degrees."""
    r, g, b = hex_to_rgb(hex_color)
    hi, lo = max(r, g, b), min(r, g, b)
    diff = hi - lo
    l = (hi + lo) / 2
    s = 0.0 if diff == 0 else diff / (1 - abs(2 * l - 1))

    h = 0.0
    if diff != 0:
        if hi == r:
            h = ((g - b) / diff) % 6
        elif hi == g:
            h = (b - r) / diff + 2
        else:
            h = (r - g) / diff + 4
    h = float(math.floor(h * 60 + 0.5)) % 360
    return Hsl(h=h, s=s, l=l)


def base_color_name(hue: float, saturation: float) -> str:
    if saturation <= defaults.NAMING_ACHROMATIC_SATURATION:
        return ACHROMATIC_NAME
    for upper, name in _HUE_NAMES:
        if hue < upper:
            return name
    return "red"


def hues_similar(h1: float, h2: float, tolerance: float = defaults.NAMING_HUE_TOLERANCE) -> bool:
    """Circular hue distance check (0 and 360 are the same hue)."""
    diff = abs(h1 - h2) % 360
    return min(diff, 360 - diff) <= tolerance


def _weight(rank: int) -> int:
    return min(900, 100 + rank * 100)


def generate_palette_color_names(colors: list[str]) -> list[str]:
    """Name every color of a palette, in input order.

    When all colors share one hue family (or are all achromatic) they get a
    single base name and weights by descending lightness. Otherwise colors are
    grouped by base name; a color alone in its group is ``-500``.

    Raises:
        ValueError: If a color is not a hex string.
    """
    if not colors:
        return []

    hsl = [hex_to_hsl(color) for color in colors]
    order = sorted(range(len(colors)), key=lambda i: hsl[i].l, reverse=True)
    lightest = hsl[order[0]]

    def _same_family(c: Hsl) -> bool:
        achromatic = defaults.NAMING_ACHROMATIC_SATURATION
        return hues_similar(c.h, lightest.h) or (c.s <= achromatic and lightest.s <= achromatic)

    if all(_same_family(c) for c in hsl):
        base = base_color_name(lightest.h, lightest.s)
        # Duplicate hex values share the weight of their first occurrence
        sorted_hex = [colors[i] for i in order]
        return [f"{base}-{_weight(sorted_hex.index(color))}" for color in colors]

    groups: dict[str, list[int]] = {}
    for i, c in enumerate(hsl):
        groups.setdefault(base_color_name(c.h, c.s), []).append(i)

    names = [""] * len(colors)
    for base, members in groups.items():
        members.sort(key=lambda i: hsl[i].l, reverse=True)
        if len(members) == 1:
            names[members[0]] = f"{base}-500"
            continue
        for rank, i in enumerate(members):
            names[i] = f"{base}-{_weight(rank)}"
    return names
