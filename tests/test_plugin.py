"""Tests for the host-side palette plugin."""

from types import SimpleNamespace

import pytest

from okpalette import defaults
from okpalette.host.memory import InMemoryHost
from okpalette.host.plugin import PalettePlugin, extract_fill_color, preview_layout


@pytest.fixture
def plugin(host, fake_clock):
    return PalettePlugin(host, _clock=fake_clock)


def _add(plugin, colors, create_assets=False):
    plugin.handle_message({"type": "add-palette", "colors": colors, "createAssets": create_assets})


# ---------------------------------------------------------------------------
# Fill color extraction
# ---------------------------------------------------------------------------

class TestExtractFillColor:

    def test_fill_color_key(self):
        assert extract_fill_color({"fills": [{"fillColor": "#112233"}]}) == "#112233"

    def test_bare_string_fill(self):
        assert extract_fill_color({"fills": ["#112233"]}) == "#112233"

    def test_alternate_keys(self):
        assert extract_fill_color({"fills": [{"color": "#aabbcc"}]}) == "#aabbcc"
        assert extract_fill_color({"fills": [{"fill": "#aabbcc"}]}) == "#aabbcc"

    def test_skips_fills_without_color(self):
        shape = {"fills": [{"fillOpacity": 1}, {"fillColor": "#445566"}]}
        assert extract_fill_color(shape) == "#445566"

    def test_shape_level_fallback(self):
        assert extract_fill_color({"fills": [], "fillColor": "#010203"}) == "#010203"

    def test_attribute_style_shape(self):
        shape = SimpleNamespace(fills=[SimpleNamespace(fillColor="#0a0b0c")])
        assert extract_fill_color(shape) == "#0a0b0c"

    def test_attribute_style_fallback(self):
        assert extract_fill_color(SimpleNamespace(fills=None, color="#abcdef")) == "#abcdef"

    def test_no_color(self):
        assert extract_fill_color({"fills": [{"fillOpacity": 1}]}) is None
        assert extract_fill_color(SimpleNamespace()) is None


def test_preview_layout():
    corners = preview_layout(3, (0.0, 0.0))
    assert corners == [(-165.0, -50.0), (-55.0, -50.0), (55.0, -50.0)]


# ---------------------------------------------------------------------------
# Base color requests
# ---------------------------------------------------------------------------

class TestBaseColor:

    def test_reports_selection_fill(self, plugin, host):
        host.set_selection([{"fills": [{"fillColor": "#3366cc"}]}, {"fills": ["#000000"]}])
        plugin.handle_message({"type": "get-base-color"})
        assert host.outbox == [{"type": "base-color", "color": "#3366cc"}]

    def test_empty_selection(self, plugin, host):
        plugin.handle_message({"type": "get-base-color"})
        assert host.outbox == [{"type": "base-color", "color": None}]

    def test_selection_error_reports_none(self, fake_clock):
        class BrokenHost(InMemoryHost):
            def selection(self):
                raise RuntimeError("no document")

        host = BrokenHost()
        PalettePlugin(host, _clock=fake_clock).send_base_color()
        assert host.outbox == [{"type": "base-color", "color": None}]

    def test_malformed_message_ignored(self, plugin, host):
        plugin.handle_message({"type": "bogus"})
        plugin.handle_message("get-base-color")
        assert host.outbox == []


# ---------------------------------------------------------------------------
# Debounced notifications
# ---------------------------------------------------------------------------

class TestDebounce:

    def test_selection_burst_sends_once(self, plugin, host, fake_clock):
        host.set_selection([{"fills": ["#ff0000"]}])
        for _ in range(3):
            plugin.on_selection_change()
            fake_clock.advance(0.05)
            plugin.poll()
        assert host.outbox == []

        fake_clock.advance(defaults.SELECTION_DEBOUNCE_DELAY)
        plugin.poll()
        plugin.poll()
        assert host.outbox == [{"type": "base-color", "color": "#ff0000"}]

    def test_initial_color_after_start(self, plugin, host, fake_clock):
        plugin.start()
        fake_clock.advance(0.1)
        plugin.poll()
        assert host.outbox == []

        fake_clock.advance(0.1)
        plugin.poll()
        assert host.outbox == [{"type": "base-color", "color": None}]

    def test_theme_forwarded(self, plugin, host):
        plugin.on_theme_change("dark")
        assert host.outbox == [{"source": "host", "type": "themechange", "theme": "dark"}]


# ---------------------------------------------------------------------------
# Adding palettes
# ---------------------------------------------------------------------------

class TestAddPalette:

    def test_rectangles_only(self, plugin, host):
        colors = ["#ff0000", "#00ff00"]
        _add(plugin, colors)

        assert [(r.x, r.y) for r in host.rectangles] == [(390.0, 250.0), (500.0, 250.0)]
        assert all(r.width == 100 and r.height == 100 for r in host.rectangles)
        assert [r.fills[0]["fillColor"] for r in host.rectangles] == colors
        assert host.selection() == host.rectangles
        assert host.library == {}
        assert host.outbox == [{
            "type": "palette-added",
            "success": True,
            "message": "Palette rectangles created successfully",
        }]

    def test_with_assets(self, plugin, host):
        _add(plugin, ["#99b3e6", "#3366cc", "#1a3366"], create_assets=True)

        assert host.library == {
            "new-palette/blue-100": "#99b3e6",
            "new-palette/blue-200": "#3366cc",
            "new-palette/blue-300": "#1a3366",
        }
        assert host.outbox == [{
            "type": "palette-added",
            "success": True,
            "assetsCreated": 3,
            "message": 'Created 3 color assets in "new-palette" group',
        }]

    def test_partial_asset_failure(self, fake_clock):
        host = InMemoryHost(reject_colors=["#3366cc"])
        _add(PalettePlugin(host, _clock=fake_clock), ["#99b3e6", "#3366cc", "#1a3366"], True)

        reply = host.outbox[-1]
        assert reply["success"] is True
        assert reply["assetsCreated"] == 2
        assert reply["message"].endswith("(1 failed: #3366cc)")

    def test_all_assets_fail(self, fake_clock):
        host = InMemoryHost(reject_colors=["#ff0000", "#00ff00"])
        _add(PalettePlugin(host, _clock=fake_clock), ["#ff0000", "#00ff00"], True)

        assert len(host.rectangles) == 2
        assert host.outbox[-1] == {
            "type": "palette-added",
            "success": False,
            "assetsCreated": 0,
            "error": "Failed to create color assets (2 failed)",
        }

    def test_rectangle_failure(self, fake_clock):
        class NoShapes(InMemoryHost):
            def create_rectangle(self, *args):
                raise RuntimeError("read-only page")

        host = NoShapes()
        _add(PalettePlugin(host, _clock=fake_clock), ["#ff0000"], True)

        reply = host.outbox[-1]
        assert reply["success"] is False
        assert reply["error"] == "Failed to create palette rectangles: read-only page"
        assert host.library == {}

    def test_custom_group(self, host, fake_clock):
        plugin = PalettePlugin(host, group_name="brand", _clock=fake_clock)
        _add(plugin, ["#ff0000"], True)
        assert host.library == {"brand/red-100": "#ff0000"}
