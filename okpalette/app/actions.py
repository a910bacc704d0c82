"""High-level transitions on PaletteState reused across front ends.

Every function returns a new, recomputed state. Input that is not a finite
number (or points at a shade that does not exist) is ignored and the state is
returned unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from okpalette import defaults
from okpalette.app.core import PaletteState, default_formulas, initialize_shades, manual_formula
from okpalette.app.recompute import recompute
from okpalette.app.snapshot import reset, save_snapshot
from okpalette.colorspace import hex_to_oklch
from okpalette.curves import default_parameters, parameter_names
from okpalette.ranges import (
    channel_from_slider,
    clamp_channel_value,
    param_from_slider,
    param_in_bounds,
    parse_number,
)
from okpalette.types import Channel, ChannelFormula, CurveKind, OklchColor

logger = logging.getLogger(__name__)


def _with_active_formula(state: PaletteState, formula: ChannelFormula) -> PaletteState:
    formulas = dict(state.formulas)
    formulas[state.active_channel] = formula
    return replace(state, formulas=formulas)


def _valid_position(position: Any, length: int) -> bool:
    """True for a plain int (not bool) in ``range(length)``."""
    return isinstance(position, int) and not isinstance(position, bool) and 0 <= position < length


def _rebuild(state: PaletteState, base_color: OklchColor, steps: int) -> PaletteState:
    """Structural change: fresh ramp, manual formulas, no snapshot."""
    shades = initialize_shades(base_color, steps)
    return recompute(replace(
        state,
        base_color=base_color,
        shade_count=len(shades),
        shades=shades,
        formulas=default_formulas(),
        snapshot=None,
    ))


def select_channel(state: PaletteState, channel: Channel) -> PaletteState:
    """Switch the edited channel; values and formulas are untouched."""
    if state.active_channel is channel:
        return state
    return replace(state, active_channel=channel)


def toggle_curve(state: PaletteState, curve: CurveKind) -> PaletteState:
    """Activate ``curve`` on the active channel, or turn it off if already active.

    Turning a curve off freezes the channel at its last computed values.
    The first activation while no channel has a formula captures the snapshot.
    """
    current = state.active_formula
    if current.curve is curve:
        return recompute(_with_active_formula(state, manual_formula(state.active_channel)))

    if not state.has_any_active_formula():
        state = save_snapshot(state)

    formula = replace(current, curve=curve, params=default_parameters(curve))
    return recompute(_with_active_formula(state, formula))


def set_curve_param(state: PaletteState, name: str, value: Any) -> PaletteState:
    """Edit one parameter of the active channel's curve.

    Ignored when the channel has no curve, the name is not a parameter of the
    curve, or the value is not a number within the parameter bounds.
    """
    formula = state.active_formula
    if formula.curve is None or name not in parameter_names(formula.curve):
        return state
    number = parse_number(value)
    if number is None or not param_in_bounds(name, number):
        logger.debug("Ignoring parameter %s=%r for %s", name, value, formula.curve.value)
        return state
    params = dict(formula.params)
    params[name] = number
    return recompute(_with_active_formula(state, replace(formula, params=params)))


def set_curve_param_from_slider(state: PaletteState, slot: int, raw: Any) -> PaletteState:
    """Edit the parameter shown in slider ``slot`` from a 0-100 position."""
    formula = state.active_formula
    if formula.curve is None:
        return state
    names = parameter_names(formula.curve)
    number = parse_number(raw)
    if not _valid_position(slot, len(names)) or number is None:
        return state
    name = names[slot]
    return set_curve_param(state, name, param_from_slider(name, number))


def set_shade_value(state: PaletteState, index: int, value: Any) -> PaletteState:
    """Manually set one shade's value for the active channel.

    A manual edit always wins: the active channel's curve is switched off,
    the other channels keep their formulas.
    """
    number = parse_number(value)
    if number is None or not _valid_position(index, state.shade_count):
        logger.debug("Ignoring manual value %r for shade %r", value, index)
        return state

    channel = state.active_channel
    state = _with_active_formula(state, manual_formula(channel))

    shades = list(state.shades)
    shades[index] = replace(shades[index], **{channel.attr: clamp_channel_value(channel, number)})
    return recompute(replace(state, shades=tuple(shades)))


def set_shade_value_from_slider(state: PaletteState, index: int, raw: Any) -> PaletteState:
    """Manual edit from a vertical slider position in slider units."""
    number = parse_number(raw)
    if number is None:
        return state
    return set_shade_value(state, index, channel_from_slider(state.active_channel, number))


def set_base_color(state: PaletteState, color: OklchColor) -> PaletteState:
    """Rebuild the palette around a new base color."""
    return _rebuild(state, color, state.shade_count)


def set_base_color_hex(state: PaletteState, hex_color: str) -> PaletteState:
    """Rebuild the palette from a hex base color; malformed hex is ignored."""
    try:
        color = hex_to_oklch(hex_color)
    except ValueError:
        logger.debug("Ignoring invalid base color %r", hex_color)
        return state
    return set_base_color(state, color)


def set_shade_count(state: PaletteState, count: Any) -> PaletteState:
    """Rebuild the palette with ``count`` shades (clamped to the allowed range)."""
    number = parse_number(count)
    if number is None:
        return state
    steps = max(defaults.MIN_SHADE_COUNT, min(defaults.MAX_SHADE_COUNT, int(number)))
    return _rebuild(state, state.base_color, steps)


def reset_palette(state: PaletteState) -> PaletteState:
    """Revert to the snapshot taken before the first formula, if any."""
    return recompute(reset(state))
