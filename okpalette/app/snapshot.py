"""Single-checkpoint snapshot of the pre-formula palette."""

from __future__ import annotations

from dataclasses import replace

from okpalette.app.core import PaletteState, default_formulas


def save_snapshot(state: PaletteState) -> PaletteState:
    """Capture the current shades as the restore point, unless one exists.

    Shades are immutable, so the captured tuple stays independent of every
    later state.
    """
    if state.snapshot is not None:
        return state
    return replace(state, snapshot=tuple(state.shades))


def reset(state: PaletteState) -> PaletteState:
    """Restore the snapshot and put every channel back in manual mode."""
    if state.snapshot is None:
        return state
    return replace(
        state,
        shades=tuple(state.snapshot),
        snapshot=None,
        formulas=default_formulas(),
    )
