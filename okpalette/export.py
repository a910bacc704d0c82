"""Swatch image export for palettes."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from okpalette import defaults
from okpalette.colorspace import hex_to_rgb


def render_swatches(
    colors: Sequence[str],
    swatch_width: int = int(defaults.PREVIEW_RECT_WIDTH),
    swatch_height: int = int(defaults.PREVIEW_RECT_HEIGHT),
    spacing: int = int(defaults.PREVIEW_RECT_SPACING),
    background: str = "#ffffff",
) -> Image.Image:
    """Lay colors out left to right, like the preview rectangles on the canvas.

    Raises:
        ValueError: If there are no colors or a color is not valid hex.
    """
    if not colors:
        raise ValueError("Cannot render an empty palette")

    width = len(colors) * swatch_width + (len(colors) - 1) * spacing
    canvas = np.empty((swatch_height, width, 3), dtype=np.uint8)
    canvas[:, :] = _to_uint8(background)

    for i, color in enumerate(colors):
        x0 = i * (swatch_width + spacing)
        canvas[:, x0:x0 + swatch_width] = _to_uint8(color)

    return Image.fromarray(canvas)


def save_swatches(colors: Sequence[str], filepath: str | Path, **kwargs) -> Path:
    """Render swatches and write them as PNG."""
    filepath = Path(filepath)
    if filepath.suffix.lower() != ".png":
        filepath = filepath.with_suffix(".png")
    filepath.parent.mkdir(parents=True, exist_ok=True)
    render_swatches(colors, **kwargs).save(filepath)
    return filepath


def _to_uint8(hex_color: str) -> np.ndarray:
    rgb = np.array(hex_to_rgb(hex_color))
    return np.floor(rgb * 255 + 0.5).astype(np.uint8)
