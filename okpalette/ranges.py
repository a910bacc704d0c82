"""Range helpers: clamping, hue wrapping, channel ranges and slider scaling."""

from __future__ import annotations

import math
from typing import Any, Optional

from okpalette import defaults
from okpalette.types import Channel, ChannelRange

_CHANNEL_RANGES: dict[Channel, tuple[float, float]] = {
    Channel.LUMINANCE: defaults.LUMINANCE_RANGE,
    Channel.CHROMA: defaults.CHROMA_RANGE,
    Channel.HUE: defaults.HUE_RANGE,
}

_SLIDER_MAX: dict[Channel, float] = {
    Channel.LUMINANCE: defaults.LUMINANCE_SLIDER_MAX,
    Channel.CHROMA: defaults.CHROMA_SLIDER_MAX,
    Channel.HUE: defaults.HUE_SLIDER_MAX,
}


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def wrap_hue(h: float) -> float:
    """Wrap hue degrees into [0, 360)."""
    return h % 360.0


def range_for(channel: Channel) -> ChannelRange:
    """Fixed output range for a channel."""
    start, end = _CHANNEL_RANGES[channel]
    return ChannelRange(start, end)


def fit_channel_value(channel: Channel, value: float) -> float:
    """Bring a formula output into its channel's valid domain.

    Luminance and chroma clamp; hue wraps since it is circular.
    """
    if channel is Channel.HUE:
        return wrap_hue(value)
    start, end = _CHANNEL_RANGES[channel]
    return clamp(value, start, end)


def clamp_channel_value(channel: Channel, value: float) -> float:
    """Clamp manual input to the channel range (hue clamps to [0, 360] here)."""
    start, end = _CHANNEL_RANGES[channel]
    return clamp(value, start, end)


def parse_number(value: Any) -> Optional[float]:
    """Parse user input as a finite float, or None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


# === Curve parameter bounds ===

def param_bounds(name: str) -> tuple[float, float]:
    return defaults.PARAM_BOUNDS.get(name, defaults.DEFAULT_PARAM_BOUNDS)


def param_in_bounds(name: str, value: float) -> bool:
    lo, hi = param_bounds(name)
    return lo <= value <= hi


def param_from_slider(name: str, raw: float) -> float:
    """Map a 0-100 parameter slider position to the parameter value."""
    lo, hi = param_bounds(name)
    return lo + (raw / defaults.PARAM_SLIDER_MAX) * (hi - lo)


def param_to_slider(name: str, value: float) -> float:
    lo, hi = param_bounds(name)
    return (value - lo) / (hi - lo) * defaults.PARAM_SLIDER_MAX


# === Manual shade sliders ===

def slider_max(channel: Channel) -> float:
    return _SLIDER_MAX[channel]


def channel_from_slider(channel: Channel, raw: float) -> float:
    """Map a manual slider position (0..slider_max) to a channel value."""
    start, end = _CHANNEL_RANGES[channel]
    return start + (raw / _SLIDER_MAX[channel]) * (end - start)


def channel_to_slider(channel: Channel, value: float) -> float:
    start, end = _CHANNEL_RANGES[channel]
    return (value - start) / (end - start) * _SLIDER_MAX[channel]
