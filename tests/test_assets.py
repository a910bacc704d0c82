"""Tests for batch library asset creation."""

from okpalette.host.assets import ColorAsset, batch_create_color_assets
from okpalette.host.memory import InMemoryHost


def test_full_name():
    assert ColorAsset(name="blue-100", color="#99b3e6", group_name="new-palette").full_name == "new-palette/blue-100"


def test_creates_named_assets(host):
    result = batch_create_color_assets(host, ["#ff0000", "#00ff00"])

    assert result.failed == []
    assert [a.full_name for a in result.success] == ["new-palette/red-500", "new-palette/green-500"]
    assert host.library == {"new-palette/red-500": "#ff0000", "new-palette/green-500": "#00ff00"}


def test_malformed_colors_fail_individually(host):
    result = batch_create_color_assets(host, ["#ff0000", "nope", "#f00", "#00ff00"])

    assert result.failed == ["nope", "#f00"]
    assert [a.color for a in result.success] == ["#ff0000", "#00ff00"]


def test_all_malformed(host):
    result = batch_create_color_assets(host, ["", "red"])
    assert result.success == []
    assert result.failed == ["", "red"]
    assert host.library == {}


def test_host_rejection_does_not_stop_batch(caplog):
    host = InMemoryHost(reject_colors=["#FF0000"])
    result = batch_create_color_assets(host, ["#ff0000", "#00ff00", "#0000ff"], group_name="brand")

    assert result.failed == ["#ff0000"]
    assert [a.full_name for a in result.success] == ["brand/green-500", "brand/indigo-500"]
    assert "Failed to create asset" in caplog.text
