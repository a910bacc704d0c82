"""OKLCH color space conversions and gamut mapping.

This module provides:
- OKLCH <-> sRGB conversions
- Gamut mapping (clip or chroma compression)
- Hex <-> OKLCH adapter used by the palette engine

Example:
    from okpalette.colorspace import hex_to_oklch, oklch_to_hex

    base = hex_to_oklch("#3366CC")
    oklch_to_hex(base)  # '#3366cc'
"""

from .oklch import (
    oklch_to_oklab,
    oklab_to_oklch,
    oklab_to_linear_rgb,
    linear_rgb_to_oklab,
    linear_to_srgb,
    srgb_to_linear,
    oklch_to_srgb,
    srgb_to_oklch,
)

from .gamut import (
    is_in_gamut,
    gamut_clip,
    gamut_compress,
    gamut_map_to_srgb,
    max_chroma_for_lh,
)

from .convert import (
    hex_to_oklch,
    hex_to_rgb,
    is_valid_hex_color,
    oklch_to_hex,
    rgb_to_hex,
)

__all__ = [
    # Palette adapter
    'hex_to_oklch',
    'oklch_to_hex',
    'hex_to_rgb',
    'rgb_to_hex',
    'is_valid_hex_color',
    # OKLCH conversions
    'oklch_to_oklab',
    'oklab_to_oklch',
    'oklab_to_linear_rgb',
    'linear_rgb_to_oklab',
    'linear_to_srgb',
    'srgb_to_linear',
    'oklch_to_srgb',
    'srgb_to_oklch',
    # Gamut mapping
    'is_in_gamut',
    'gamut_clip',
    'gamut_compress',
    'gamut_map_to_srgb',
    'max_chroma_for_lh',
]
