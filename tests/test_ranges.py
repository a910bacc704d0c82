"""Tests for okpalette.ranges."""

import math

import pytest

from okpalette.ranges import (
    channel_from_slider,
    channel_to_slider,
    clamp_channel_value,
    fit_channel_value,
    param_bounds,
    param_from_slider,
    param_in_bounds,
    param_to_slider,
    parse_number,
    range_for,
    wrap_hue,
)
from okpalette.types import Channel, ChannelRange


def test_channel_ranges():
    assert range_for(Channel.LUMINANCE) == ChannelRange(0.0, 1.0)
    assert range_for(Channel.CHROMA) == ChannelRange(0.0, 0.4)
    assert range_for(Channel.HUE) == ChannelRange(0.0, 360.0)


def test_lerp():
    assert range_for(Channel.CHROMA).lerp(0.5) == pytest.approx(0.2)


@pytest.mark.parametrize("h, expected", [(-30.0, 330.0), (360.0, 0.0), (370.0, 10.0), (45.0, 45.0)])
def test_wrap_hue(h, expected):
    assert wrap_hue(h) == pytest.approx(expected)


def test_fit_clamps_luminance_and_chroma():
    assert fit_channel_value(Channel.LUMINANCE, 1.2) == 1.0
    assert fit_channel_value(Channel.CHROMA, 0.5) == 0.4
    assert fit_channel_value(Channel.CHROMA, -0.1) == 0.0


def test_fit_wraps_hue():
    assert fit_channel_value(Channel.HUE, 360.0) == 0.0


def test_manual_clamp_does_not_wrap_hue():
    assert clamp_channel_value(Channel.HUE, 400.0) == 360.0
    assert clamp_channel_value(Channel.HUE, -5.0) == 0.0


@pytest.mark.parametrize("value, expected", [
    ("0.5", 0.5),
    (3, 3.0),
    (" 2 ", 2.0),
    ("abc", None),
    ("", None),
    (None, None),
    (True, None),
    (float("nan"), None),
    (math.inf, None),
    ("-inf", None),
    ([1], None),
])
def test_parse_number(value, expected):
    assert parse_number(value) == expected


class TestParameterBounds:

    def test_bounds(self):
        assert param_bounds("k") == (0.0, 2.0)
        assert param_bounds("d") == (0.0, 5.0)
        assert param_bounds("a") == (0.0, 1.0)

    def test_in_bounds(self):
        assert param_in_bounds("k", 1.5)
        assert not param_in_bounds("m", 1.5)
        assert not param_in_bounds("c", -0.1)

    @pytest.mark.parametrize("name, raw, expected", [("k", 50, 1.0), ("d", 100, 5.0), ("a", 25, 0.25)])
    def test_from_slider(self, name, raw, expected):
        assert param_from_slider(name, raw) == pytest.approx(expected)

    def test_to_slider(self):
        assert param_to_slider("k", 0.6) == pytest.approx(30.0)
        assert param_to_slider("d", 2.5) == pytest.approx(50.0)


class TestChannelSliders:

    @pytest.mark.parametrize("channel, raw, expected", [
        (Channel.LUMINANCE, 50, 0.5),
        (Channel.CHROMA, 20, 0.2),
        (Channel.HUE, 180, 180.0),
    ])
    def test_from_slider(self, channel, raw, expected):
        assert channel_from_slider(channel, raw) == pytest.approx(expected)

    def test_to_slider(self):
        assert channel_to_slider(Channel.CHROMA, 0.4) == pytest.approx(40.0)
