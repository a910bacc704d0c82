"""Publish palette colors as named library assets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from okpalette import defaults
from okpalette.colorspace import is_valid_hex_color
from okpalette.host.port import HostPort
from okpalette.naming import generate_palette_color_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColorAsset:
    name: str
    color: str
    group_name: str

    @property
    def full_name(self) -> str:
        return f"{self.group_name}/{self.name}"


@dataclass
class AssetBatchResult:
    """Outcome of a batch: created assets and the input colors that failed."""
    success: list[ColorAsset] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def batch_create_color_assets(
    port: HostPort,
    colors: list[str],
    group_name: str = defaults.DEFAULT_ASSET_GROUP,
) -> AssetBatchResult:
    """Create one library color per valid hex string.

    Malformed colors and colors the host rejects are collected in ``failed``;
    the rest of the batch still goes through.
    """
    result = AssetBatchResult()

    valid = []
    for color in colors:
        if is_valid_hex_color(color):
            valid.append(color)
        else:
            result.failed.append(color)

    if not valid:
        return result

    names = generate_palette_color_names(valid)

    for color, name in zip(valid, names):
        asset = ColorAsset(name=name, color=color, group_name=group_name)
        try:
            port.create_library_color(asset.full_name, color)
        except Exception:
            logger.warning("Failed to create asset for color %s", color, exc_info=True)
            result.failed.append(color)
            continue
        result.success.append(asset)
        logger.debug("Created color asset %s (%s)", asset.full_name, color)

    return result
