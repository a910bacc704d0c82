"""Derive final per-shade values and hex codes from a palette state."""

from __future__ import annotations

from dataclasses import replace

from okpalette.app.core import CHANNELS, PaletteState
from okpalette.colorspace import oklch_to_hex
from okpalette.curves import sample_curve
from okpalette.ranges import fit_channel_value


def recompute(state: PaletteState) -> PaletteState:
    """Apply every active channel formula, then refresh all hex codes.

    Channels are resolved independently: a channel without a curve keeps
    whatever values manual edits or an earlier formula left behind. The hex
    refresh always runs, so manual edits become visible too.
    """
    columns = {channel: state.values(channel) for channel in CHANNELS}

    for channel in CHANNELS:
        formula = state.formulas[channel]
        if formula.curve is None:
            continue
        eased = sample_curve(formula.curve, state.shade_count, formula.params)
        columns[channel] = [
            fit_channel_value(channel, float(formula.range.lerp(t)))
            for t in eased
        ]

    shades = []
    for i, shade in enumerate(state.shades):
        updated = replace(shade, **{ch.attr: columns[ch][i] for ch in CHANNELS})
        shades.append(replace(updated, hex=oklch_to_hex(updated.color)))

    return replace(state, shades=tuple(shades))
