"""Tests for okpalette.host.protocol."""

import pytest

from okpalette.host.protocol import (
    AddPalette,
    BaseColor,
    GetBaseColor,
    PaletteAdded,
    ProtocolError,
    ThemeChange,
    parse_message,
    to_wire,
)


class TestParse:

    def test_get_base_color(self):
        assert parse_message({"type": "get-base-color"}) == GetBaseColor()

    def test_base_color(self):
        assert parse_message({"type": "base-color", "color": "#abcdef"}) == BaseColor("#abcdef")
        assert parse_message({"type": "base-color", "color": None}) == BaseColor(None)

    def test_add_palette(self):
        message = parse_message({"type": "add-palette", "colors": ["#000000"], "createAssets": True})
        assert message == AddPalette(colors=("#000000",), create_assets=True)

    def test_add_palette_defaults_to_no_assets(self):
        assert parse_message({"type": "add-palette", "colors": []}).create_assets is False

    def test_palette_added(self):
        message = parse_message({
            "type": "palette-added", "success": True, "assetsCreated": 3, "message": "ok",
        })
        assert message == PaletteAdded(success=True, assets_created=3, message="ok")

    def test_theme(self):
        assert parse_message({"source": "host", "type": "themechange", "theme": "dark"}) == ThemeChange("dark")

    @pytest.mark.parametrize("data", [
        {"type": "nope"},
        {},
        {"type": "add-palette"},
        {"type": "add-palette", "colors": "#000000"},
        {"type": "base-color", "color": 12},
        {"type": "palette-added", "success": "yes"},
        {"type": "palette-added", "success": True, "assetsCreated": "3"},
        {"type": "themechange"},
        ["get-base-color"],
    ])
    def test_malformed(self, data):
        with pytest.raises(ProtocolError):
            parse_message(data)


class TestWire:

    def test_optional_fields_omitted(self):
        assert to_wire(PaletteAdded(success=True)) == {"type": "palette-added", "success": True}

    def test_base_color_keeps_none(self):
        assert to_wire(BaseColor()) == {"type": "base-color", "color": None}

    def test_add_palette(self):
        assert to_wire(AddPalette(colors=("#111111",), create_assets=False)) == {
            "type": "add-palette", "colors": ["#111111"], "createAssets": False,
        }

    def test_roundtrip(self):
        message = PaletteAdded(success=False, assets_created=0, error="boom")
        assert parse_message(to_wire(message)) == message

    def test_unknown_object(self):
        with pytest.raises(ProtocolError):
            to_wire(object())
