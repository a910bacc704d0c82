"""Gamut mapping for out-of-gamut OKLCH values.

Not all (L, C, H) combinations produce valid sRGB. High chroma at
extreme lightness is particularly problematic.

Strategies:
- clip: Hard-clip RGB to [0,1], fast but can shift hue/lightness
- compress: Reduce C until in-gamut, preserving L and H intent
"""

from typing import Literal

import numpy as np

from .oklch import oklch_to_srgb


def is_in_gamut(L, C, H, tolerance: float = 1e-4):
    """Check if OKLCH values produce valid sRGB (all channels in [0,1])."""
    rgb = oklch_to_srgb(L, C, H)
    in_range = (rgb >= -tolerance) & (rgb <= 1 + tolerance)
    return np.all(in_range, axis=-1)


def gamut_clip(L, C, H) -> np.ndarray:
    """Convert to sRGB and hard-clip to [0,1].

    Returns:
        RGB array (..., 3) with values clamped to [0,1]
    """
    return np.clip(oklch_to_srgb(L, C, H), 0.0, 1.0)


def max_chroma_for_lh(L, H, steps: int = 20):
    """Find maximum valid chroma for given L and H via binary search."""
    L = np.asarray(L, dtype=np.float64)
    lo = np.zeros_like(L)
    hi = np.full_like(L, 0.5)  # 0.5 is always out of gamut

    for _ in range(steps):
        mid = (lo + hi) / 2
        valid = is_in_gamut(L, mid, H)
        lo = np.where(valid, mid, lo)
        hi = np.where(valid, hi, mid)

    return lo


def gamut_compress(L, C, H):
    """Reduce chroma to the sRGB boundary, keeping L and H."""
    max_C = max_chroma_for_lh(L, H)
    return L, np.minimum(C, max_C), H


def gamut_map_to_srgb(
    L,
    C,
    H,
    method: Literal['clip', 'compress'] = 'clip',
) -> np.ndarray:
    """Map OKLCH to sRGB with gamut handling.

    Args:
        L: Lightness (0-1)
        C: Chroma (0-~0.4)
        H: Hue degrees (0-360)
        method: 'clip' for RGB clipping, 'compress' for chroma reduction

    Returns:
        RGB array (..., 3) with values in [0, 1]
    """
    if method == 'clip':
        return gamut_clip(L, C, H)

    elif method == 'compress':
        L_safe, C_safe, H_safe = gamut_compress(L, C, H)
        # Final clip for numerical safety
        return np.clip(oklch_to_srgb(L_safe, C_safe, H_safe), 0.0, 1.0)

    raise ValueError(f"Unknown method: {method}")
