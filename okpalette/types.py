"""Core data types for okpalette - framework-agnostic."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


class Channel(enum.Enum):
    """OKLCH channel selected for editing."""

    LUMINANCE = "Luminance"
    CHROMA = "Chroma"
    HUE = "Hue"

    @property
    def attr(self) -> str:
        """Name of the Shade/OklchColor attribute holding this channel."""
        return _CHANNEL_ATTRS[self]


_CHANNEL_ATTRS = {
    Channel.LUMINANCE: "l",
    Channel.CHROMA: "c",
    Channel.HUE: "h",
}


class CurveKind(enum.Enum):
    """Closed set of easing curves a channel formula can use."""

    LINEAR = "Linear"
    NORMAL = "Normal"
    QUADRATIC = "Quadratic"
    ARCTANGENT = "Arctangent"
    SINE = "Sine"
    EXPONENTIAL = "Exponential"

    @classmethod
    def from_name(cls, name: str) -> "CurveKind":
        """Resolve a curve from its name, accepting short legacy names.

        Raises:
            ValueError: If the name matches no curve.
        """
        key = str(name).strip().lower()
        try:
            return _CURVE_ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown curve: {name!r}") from None


_CURVE_ALIASES: dict[str, CurveKind] = {kind.value.lower(): kind for kind in CurveKind}
_CURVE_ALIASES.update({
    "quad": CurveKind.QUADRATIC,
    "arctan": CurveKind.ARCTANGENT,
    "expo": CurveKind.EXPONENTIAL,
})


@dataclass(frozen=True)
class OklchColor:
    """A color in OKLCH. H in degrees."""
    l: float  # Lightness (0-1)
    c: float  # Chroma (0-0.4)
    h: float  # Hue (0-360)


@dataclass(frozen=True)
class Shade:
    """One row of the palette.

    ``hex`` is derived from (l, c, h) and refreshed on every recompute.
    """
    index: int
    l: float
    c: float
    h: float
    hex: str = "#000000"

    @property
    def color(self) -> OklchColor:
        return OklchColor(self.l, self.c, self.h)

    def value(self, channel: Channel) -> float:
        return getattr(self, channel.attr)


@dataclass(frozen=True)
class ChannelRange:
    """Output range a formula is scaled into."""
    start: float
    end: float

    def lerp(self, t):
        return self.start + t * (self.end - self.start)


@dataclass(frozen=True)
class ChannelFormula:
    """Per-channel formula configuration.

    ``curve=None`` means the channel is in manual mode: its per-shade values are
    authoritative and ``params`` must be empty.
    """
    range: ChannelRange
    curve: Optional[CurveKind] = None
    params: dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        if self.curve is None and self.params:
            raise ValueError("Manual channel formula cannot carry curve parameters")

    @property
    def is_active(self) -> bool:
        return self.curve is not None
