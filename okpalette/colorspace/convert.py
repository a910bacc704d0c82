"""Hex <-> OKLCH adapter used by the palette engine.

Both directions are total over well-formed input: colors outside the sRGB
gamut are clipped to a representable color rather than rejected.
"""

from __future__ import annotations

import re
from typing import Literal

import numpy as np

from okpalette import defaults
from okpalette.types import OklchColor
from .gamut import gamut_map_to_srgb
from .oklch import srgb_to_oklch

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_STRICT_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_valid_hex_color(value: object) -> bool:
    """True for ``#rrggbb`` strings, the form the host library accepts."""
    return isinstance(value, str) and _STRICT_HEX_RE.match(value) is not None


def hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    """Convert hex color string to RGB tuple (0-1 range).

    Accepts ``#rgb`` and ``#rrggbb``, with or without the '#' prefix.

    Raises:
        ValueError: If the string is not a hex color.

    Example:
        >>> hex_to_rgb("#ff0000")
        (1.0, 0.0, 0.0)
    """
    match = _HEX_RE.match(hex_color.strip()) if isinstance(hex_color, str) else None
    if match is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    r = int(digits[0:2], 16) / 255.0
    g = int(digits[2:4], 16) / 255.0
    b = int(digits[4:6], 16) / 255.0
    return (r, g, b)


def rgb_to_hex(rgb) -> str:
    """Format RGB in [0, 1] as ``#rrggbb`` (channels clamped, half rounds up)."""
    channels = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0)
    return "#" + "".join(f"{int(np.floor(v * 255 + 0.5)):02x}" for v in channels)


def hex_to_oklch(hex_color: str) -> OklchColor:
    """Convert a hex color to OKLCH.

    Achromatic colors report hue 0.

    Raises:
        ValueError: If the string is not a hex color.
    """
    L, C, H = srgb_to_oklch(np.array(hex_to_rgb(hex_color)))
    L, C, H = float(L), float(C), float(H)
    if C < defaults.ACHROMATIC_CHROMA_EPSILON:
        C, H = 0.0, 0.0
    return OklchColor(l=L, c=C, h=H)


def oklch_to_hex(
    color: OklchColor,
    method: Literal['clip', 'compress'] = 'clip',
) -> str:
    """Convert an OKLCH color to ``#rrggbb``, gamut-mapping as needed."""
    rgb = gamut_map_to_srgb(
        np.float64(color.l), np.float64(color.c), np.float64(color.h), method=method,
    )
    return rgb_to_hex(rgb)
