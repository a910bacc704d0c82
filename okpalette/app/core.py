"""Toolkit-neutral palette state and helpers for okpalette."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from okpalette import defaults
from okpalette.colorspace import oklch_to_hex
from okpalette.curves import normalized_positions
from okpalette.ranges import range_for
from okpalette.types import Channel, ChannelFormula, OklchColor, Shade

CHANNELS: tuple[Channel, ...] = (Channel.LUMINANCE, Channel.CHROMA, Channel.HUE)


def manual_formula(channel: Channel) -> ChannelFormula:
    """Formula configuration for a channel with no active curve."""
    return ChannelFormula(range=range_for(channel))


def default_formulas() -> dict[Channel, ChannelFormula]:
    return {channel: manual_formula(channel) for channel in CHANNELS}


def initialize_shades(base_color: OklchColor, steps: int) -> tuple[Shade, ...]:
    """Build a uniform lightness ramp that inherits the base chroma and hue."""
    steps = max(int(steps), 1)
    shades = []
    for i, x in enumerate(normalized_positions(steps)):
        l = float(x)
        shades.append(Shade(
            index=i,
            l=l,
            c=base_color.c,
            h=base_color.h,
            hex=oklch_to_hex(OklchColor(l, base_color.c, base_color.h)),
        ))
    return tuple(shades)


@dataclass(frozen=True)
class PaletteState:
    """Authoritative palette model.

    Instances are never mutated; every edit produces a new state via
    ``dataclasses.replace`` and is passed through ``recompute`` before use.

    Attributes:
        base_color: Color the palette was built from
        shade_count: Number of shades (len(shades))
        active_channel: Channel currently shown/edited
        shades: Per-shade channel values and cached hex
        formulas: Per-channel curve configuration
        snapshot: Shades captured when the first formula was activated
    """

    base_color: OklchColor
    shade_count: int
    active_channel: Channel = Channel.LUMINANCE
    shades: tuple[Shade, ...] = ()
    formulas: dict[Channel, ChannelFormula] = field(default_factory=default_formulas)
    snapshot: Optional[tuple[Shade, ...]] = None

    def __post_init__(self):
        if len(self.shades) != self.shade_count:
            raise ValueError(
                f"PaletteState has {len(self.shades)} shades, expected {self.shade_count}"
            )

    @property
    def active_formula(self) -> ChannelFormula:
        return self.formulas[self.active_channel]

    @property
    def colors(self) -> list[str]:
        """Hex strings of all shades, in order."""
        return [shade.hex for shade in self.shades]

    def has_any_active_formula(self) -> bool:
        return any(formula.is_active for formula in self.formulas.values())

    def values(self, channel: Channel) -> list[float]:
        return [shade.value(channel) for shade in self.shades]


def create_initial_state(
    base_color: Optional[OklchColor] = None,
    steps: int = defaults.DEFAULT_SHADE_COUNT,
) -> PaletteState:
    """Create the session's first palette state."""
    if base_color is None:
        base_color = OklchColor(*defaults.DEFAULT_BASE_COLOR)
    shades = initialize_shades(base_color, steps)
    return PaletteState(
        base_color=base_color,
        shade_count=len(shades),
        shades=shades,
    )
