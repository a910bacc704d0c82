"""Tests for palette serialization (save/load)."""

import json
import logging
import tempfile
from pathlib import Path

import numpy as np
import pytest

from okpalette.app import actions
from okpalette.serialization import (
    SCHEMA_VERSION,
    StateLoadError,
    load_state,
    palette_to_dict,
    save_state,
    state_from_dict,
    state_to_dict,
)
from okpalette.types import Channel, CurveKind


@pytest.fixture
def edited_state(state):
    """Formulas on two channels, a parameter edit and a snapshot."""
    s = actions.toggle_curve(state, CurveKind.LINEAR)
    s = actions.set_curve_param(s, "m", 0.8)
    s = actions.select_channel(s, Channel.HUE)
    s = actions.toggle_curve(s, CurveKind.SINE)
    return s


def _legacy_dict(**overrides):
    data = {
        "baseColor": {"l": 0.5, "c": 0.1, "h": 200.0},
        "amountOfShades": 3,
    }
    data.update(overrides)
    return data


def test_roundtrip(edited_state):
    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = Path(tmpdir) / "palette.json"
        save_state(edited_state, filepath)

        assert filepath.exists()
        loaded = load_state(filepath)

    assert loaded == edited_state


def test_file_layout(edited_state):
    data = state_to_dict(edited_state)
    assert data["schema_version"] == SCHEMA_VERSION
    assert data["active_channel"] == "Hue"
    assert data["formulas"]["Luminance"] == {"curve": "Linear", "params": {"m": 0.8, "c": 0.0}}
    assert data["formulas"]["Chroma"] == {"curve": None, "params": {}}
    assert len(data["snapshot"]) == 5
    json.dumps(data)


def test_suffix_added(state):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = save_state(state, Path(tmpdir) / "nested" / "palette")
        assert path.name == "palette.json"
        assert path.exists()


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_state("/nonexistent/palette.json")


def test_corrupt_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "bad.json"
        path.write_text("{not json")
        with pytest.raises(StateLoadError):
            load_state(path)


def test_wrong_schema_version(state):
    data = state_to_dict(state)
    data["schema_version"] = "9.9"
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "future.json"
        path.write_text(json.dumps(data))
        with pytest.raises(StateLoadError):
            load_state(path)


def test_legacy_layout():
    state = state_from_dict(_legacy_dict(
        activeProperty="Hue",
        formulas={"Luminance": {"activeCurve": "Quad", "curveParams": {"a": 0.5, "zz": 1.0}}},
    ))

    assert state.shade_count == 3
    assert state.active_channel is Channel.HUE
    formula = state.formulas[Channel.LUMINANCE]
    assert formula.curve is CurveKind.QUADRATIC
    assert formula.params == {"a": 0.5}
    assert state.formulas[Channel.CHROMA].curve is None


def test_unknown_curve_falls_back_to_identity(caplog):
    with caplog.at_level(logging.WARNING, logger="okpalette.serialization"):
        state = state_from_dict(_legacy_dict(formulas={"Luminance": {"curve": "Bezier"}}))

    formula = state.formulas[Channel.LUMINANCE]
    assert formula.curve is CurveKind.LINEAR
    assert formula.params == {"m": 1.0, "c": 0.0}
    np.testing.assert_allclose(state.values(Channel.LUMINANCE), [0.0, 0.5, 1.0])
    assert "Bezier" in caplog.text


def test_loading_recomputes_hex():
    state = state_from_dict(_legacy_dict(paletteData=[
        {"l": 0.2, "c": 0.1, "h": 200.0, "hex": "#000000"},
        {"l": 0.5, "c": 0.1, "h": 200.0},
        {"l": 0.8, "c": 0.1, "h": 200.0},
    ]))
    assert state.shades[0].hex != "#000000"
    assert state.values(Channel.LUMINANCE) == [0.2, 0.5, 0.8]


@pytest.mark.parametrize("data", [
    [],
    {"amountOfShades": 3},
    {"base_color": {"l": 0.5}},
    _legacy_dict(amountOfShades=0),
    _legacy_dict(amountOfShades=21),
    _legacy_dict(paletteData=[{"l": 0.1, "c": 0.1, "h": 0.0}]),
    _legacy_dict(paletteData=[{"l": "x", "c": 0.1, "h": 0.0}] * 3),
    _legacy_dict(activeProperty="Alpha"),
    _legacy_dict(formulas={"Hue": "Sine"}),
    _legacy_dict(formulas={"Hue": {"curve": "Sine", "params": {"a": "big"}}}),
])
def test_invalid_data(data):
    with pytest.raises(StateLoadError):
        state_from_dict(data)


def test_unknown_channel_skipped():
    state = state_from_dict(_legacy_dict(formulas={"Alpha": {"curve": "Sine"}}))
    assert not state.has_any_active_formula()


def test_palette_to_dict(state):
    data = palette_to_dict(state, names=[f"blue-{w}" for w in range(100, 600, 100)])
    assert [c["hex"] for c in data["colors"]] == state.colors
    assert data["colors"][0]["name"] == "blue-100"
    assert data["base_color"]["c"] == state.base_color.c
    assert "name" not in palette_to_dict(state)["colors"][0]


@pytest.mark.parametrize("path, value", [
    (("shades", 0, "h"), float("nan")),
    (("shades", 0, "c"), float("inf")),
    (("snapshot", 1, "l"), float("-inf")),
    (("base_color", "l"), float("nan")),
    (("formulas", "Hue", "params", "a"), float("nan")),
    (("shade_count",), float("inf")),
])
def test_non_finite_numbers_rejected(edited_state, path, value):
    """JSON parses NaN/Infinity literals; they must not reach recompute."""
    data = state_to_dict(edited_state)
    target = data
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value

    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = Path(tmpdir) / "bad.json"
        filepath.write_text(json.dumps(data))
        with pytest.raises(StateLoadError):
            load_state(filepath)
