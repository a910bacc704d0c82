"""Palette state serialization - save/load okpalette sessions as JSON."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from okpalette import defaults
from okpalette.app.core import CHANNELS, PaletteState, initialize_shades, manual_formula
from okpalette.app.recompute import recompute
from okpalette.curves import parameter_names
from okpalette.ranges import parse_number
from okpalette.types import Channel, ChannelFormula, CurveKind, OklchColor, Shade

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

# Identity pass-through used when a stored curve name is not recognized
_FALLBACK_CURVE = CurveKind.LINEAR
_FALLBACK_PARAMS = {"m": 1.0, "c": 0.0}


class StateLoadError(Exception):
    """Error loading a palette state."""
    pass


def state_to_dict(state: PaletteState) -> dict[str, Any]:
    return {
        'schema_version': SCHEMA_VERSION,
        'created_at': datetime.now().isoformat(),
        'base_color': _color_to_dict(state.base_color),
        'shade_count': state.shade_count,
        'active_channel': state.active_channel.value,
        'shades': [_shade_to_dict(s) for s in state.shades],
        'formulas': {
            channel.value: {
                'curve': formula.curve.value if formula.curve is not None else None,
                'params': dict(formula.params),
            }
            for channel, formula in state.formulas.items()
        },
        'snapshot': (
            [_shade_to_dict(s) for s in state.snapshot]
            if state.snapshot is not None else None
        ),
    }


def state_from_dict(data: dict[str, Any]) -> PaletteState:
    """Rebuild a palette state and recompute it.

    Also reads the camelCase layout of earlier plugin builds
    (``paletteData``, ``amountOfShades``, ``activeProperty``, ``activeCurve``...).

    Raises:
        StateLoadError: If required data is missing or inconsistent
    """
    if not isinstance(data, dict):
        raise StateLoadError("Palette state must be a JSON object")

    try:
        base_color = _dict_to_color(data['baseColor'] if 'baseColor' in data else data['base_color'])
        shade_count = int(data.get('shade_count', data.get('amountOfShades', defaults.DEFAULT_SHADE_COUNT)))
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise StateLoadError(f"Missing or invalid base color or shade count: {e}") from e

    if not 1 <= shade_count <= defaults.MAX_SHADE_COUNT:
        raise StateLoadError(f"Shade count {shade_count} out of range")

    raw_shades = data.get('shades', data.get('paletteData'))
    shades = (
        initialize_shades(base_color, shade_count)
        if raw_shades is None else _dict_to_shades(raw_shades, shade_count)
    )

    raw_snapshot = data.get('snapshot', data.get('originalPaletteData'))
    snapshot = None if raw_snapshot is None else _dict_to_shades(raw_snapshot, shade_count)

    try:
        active_channel = Channel(data.get('active_channel', data.get('activeProperty', 'Luminance')))
    except ValueError as e:
        raise StateLoadError(f"Unknown channel: {e}") from e

    formulas = {channel: manual_formula(channel) for channel in CHANNELS}
    for name, raw in (data.get('formulas') or {}).items():
        try:
            channel = Channel(name)
        except ValueError:
            logger.warning("Skipping formula for unknown channel %r", name)
            continue
        formulas[channel] = _dict_to_formula(channel, raw)

    return recompute(PaletteState(
        base_color=base_color,
        shade_count=shade_count,
        active_channel=active_channel,
        shades=shades,
        formulas=formulas,
        snapshot=snapshot,
    ))


def save_state(state: PaletteState, filepath: str | Path) -> Path:
    """Write the state as JSON (``.json`` suffix added if missing)."""
    filepath = Path(filepath)
    if filepath.suffix != '.json':
        filepath = filepath.with_suffix('.json')
    filepath.parent.mkdir(parents=True, exist_ok=True)
    filepath.write_text(json.dumps(state_to_dict(state), indent=2))
    return filepath


def load_state(filepath: str | Path) -> PaletteState:
    """Load a state written by ``save_state``.

    Raises:
        StateLoadError: If file is corrupt, wrong version, or missing data
        FileNotFoundError: If file doesn't exist
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Palette file not found: {filepath}")

    try:
        data = json.loads(filepath.read_text())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StateLoadError(f"Corrupt palette file {filepath}: {e}") from e

    schema_version = data.get('schema_version', SCHEMA_VERSION) if isinstance(data, dict) else None
    if schema_version != SCHEMA_VERSION:
        raise StateLoadError(
            f"Schema version {schema_version} not supported. Expected {SCHEMA_VERSION}."
        )
    return state_from_dict(data)


def palette_to_dict(state: PaletteState, names: Optional[list[str]] = None) -> dict[str, Any]:
    """Export-friendly view: hex colors plus OKLCH values (and names if given)."""
    entries = []
    for i, shade in enumerate(state.shades):
        entry = {'hex': shade.hex, 'l': shade.l, 'c': shade.c, 'h': shade.h}
        if names is not None:
            entry['name'] = names[i]
        entries.append(entry)
    return {'base_color': _color_to_dict(state.base_color), 'colors': entries}


# === Helpers ===

def _color_to_dict(color: OklchColor) -> dict[str, float]:
    return {'l': color.l, 'c': color.c, 'h': color.h}


def _number(value: Any, what: str) -> float:
    """Finite float or StateLoadError; JSON allows NaN and Infinity literals."""
    number = parse_number(value)
    if number is None:
        raise StateLoadError(f"Invalid {what}: {value!r}")
    return number


def _dict_to_color(data: dict[str, Any]) -> OklchColor:
    return OklchColor(
        l=_number(data['l'], "base color l"),
        c=_number(data['c'], "base color c"),
        h=_number(data['h'], "base color h"),
    )


def _shade_to_dict(shade: Shade) -> dict[str, Any]:
    return {'index': shade.index, 'l': shade.l, 'c': shade.c, 'h': shade.h, 'hex': shade.hex}


def _dict_to_shades(raw: Any, shade_count: int) -> tuple[Shade, ...]:
    if not isinstance(raw, list) or len(raw) != shade_count:
        raise StateLoadError(f"Expected {shade_count} shades")
    shades = []
    for i, item in enumerate(raw):
        try:
            shades.append(Shade(
                index=i,
                l=_number(item['l'], f"shade {i} l"),
                c=_number(item['c'], f"shade {i} c"),
                h=_number(item['h'], f"shade {i} h"),
                hex=str(item.get('hex', '#000000')),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise StateLoadError(f"Invalid shade {i}: {e}") from e
    return tuple(shades)


def _dict_to_formula(channel: Channel, raw: Any) -> ChannelFormula:
    if not isinstance(raw, dict):
        raise StateLoadError(f"Invalid formula for {channel.value}")
    name = raw.get('curve', raw.get('activeCurve'))
    params = raw.get('params', raw.get('curveParams')) or {}
    if name is None:
        return manual_formula(channel)

    try:
        curve = CurveKind.from_name(name)
    except ValueError:
        logger.warning(
            "Unknown curve %r for %s, falling back to identity %s",
            name, channel.value, _FALLBACK_CURVE.value,
        )
        return ChannelFormula(
            range=manual_formula(channel).range,
            curve=_FALLBACK_CURVE,
            params=dict(_FALLBACK_PARAMS),
        )

    known = set(parameter_names(curve))
    try:
        clean = {
            k: _number(v, f"{channel.value} parameter {k}")
            for k, v in params.items() if k in known and v is not None
        }
    except (AttributeError, TypeError, ValueError) as e:
        raise StateLoadError(f"Invalid parameters for {channel.value}: {e}") from e
    return ChannelFormula(range=manual_formula(channel).range, curve=curve, params=clean)
