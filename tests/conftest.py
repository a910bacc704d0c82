"""Test configuration for okpalette."""

import pytest

from okpalette.app.core import create_initial_state
from okpalette.app.recompute import recompute
from okpalette.colorspace import hex_to_oklch
from okpalette.host.memory import InMemoryHost


class FakeClock:
    """Deterministic clock for debounce tests."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def __call__(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def base_color():
    return hex_to_oklch("#3366CC")


@pytest.fixture
def state(base_color):
    """Five-shade palette around #3366CC, no formulas active."""
    return recompute(create_initial_state(base_color, 5))


@pytest.fixture
def host():
    return InMemoryHost(viewport_center=(500.0, 300.0))
