"""Messages exchanged between the palette UI and the host document.

Messages travel as plain dicts with a ``type`` key (camelCase field names on
the wire). ``parse_message`` turns a wire dict into one of the dataclasses
below and ``to_wire`` does the reverse.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union


class ProtocolError(Exception):
    """Malformed or unknown host message."""
    pass


@dataclass(frozen=True)
class GetBaseColor:
    """UI -> host: report the fill color of the current selection."""
    type: str = field(default="get-base-color", init=False)


@dataclass(frozen=True)
class BaseColor:
    """Host -> UI: selection fill color, or None when there is none."""
    color: Optional[str] = None
    type: str = field(default="base-color", init=False)


@dataclass(frozen=True)
class AddPalette:
    """UI -> host: place preview shapes and optionally create library assets."""
    colors: tuple[str, ...] = ()
    create_assets: bool = False
    type: str = field(default="add-palette", init=False)


@dataclass(frozen=True)
class PaletteAdded:
    """Host -> UI: outcome of an ``add-palette`` request."""
    success: bool
    assets_created: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None
    type: str = field(default="palette-added", init=False)


@dataclass(frozen=True)
class ThemeChange:
    """Host -> UI: cosmetic light/dark switch."""
    theme: str
    type: str = field(default="themechange", init=False)


Message = Union[GetBaseColor, BaseColor, AddPalette, PaletteAdded, ThemeChange]


def _require(data: Mapping[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ProtocolError(f"{data.get('type')!r} message missing {key!r}")
    value = data[key]
    if not isinstance(value, kind):
        raise ProtocolError(f"{data.get('type')!r} field {key!r} has type {type(value).__name__}")
    return value


def _optional(data: Mapping[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is not None and not isinstance(value, kind):
        raise ProtocolError(f"{data.get('type')!r} field {key!r} has type {type(value).__name__}")
    return value


def parse_message(data: Mapping[str, Any]) -> Message:
    """Build a message from its wire dict.

    Raises:
        ProtocolError: If the type is unknown or a field is missing/mistyped.
    """
    if not isinstance(data, Mapping):
        raise ProtocolError(f"Message must be a mapping, got {type(data).__name__}")
    kind = data.get("type")

    if kind == "get-base-color":
        return GetBaseColor()

    if kind == "base-color":
        return BaseColor(color=_optional(data, "color", str))

    if kind == "add-palette":
        colors = _optional(data, "colors", (list, tuple))
        if colors is None:
            raise ProtocolError("'add-palette' message missing 'colors'")
        return AddPalette(
            colors=tuple(colors),
            create_assets=bool(data.get("createAssets", False)),
        )

    if kind == "palette-added":
        return PaletteAdded(
            success=_require(data, "success", bool),
            assets_created=_optional(data, "assetsCreated", int),
            message=_optional(data, "message", str),
            error=_optional(data, "error", str),
        )

    if kind == "themechange":
        return ThemeChange(theme=_require(data, "theme", str))

    raise ProtocolError(f"Unknown message type: {kind!r}")


def to_wire(message: Message) -> dict[str, Any]:
    """Serialize a message to its wire dict, omitting unset optional fields."""
    if isinstance(message, GetBaseColor):
        return {"type": message.type}
    if isinstance(message, BaseColor):
        return {"type": message.type, "color": message.color}
    if isinstance(message, AddPalette):
        return {
            "type": message.type,
            "colors": list(message.colors),
            "createAssets": message.create_assets,
        }
    if isinstance(message, PaletteAdded):
        wire: dict[str, Any] = {"type": message.type, "success": message.success}
        if message.assets_created is not None:
            wire["assetsCreated"] = message.assets_created
        if message.message is not None:
            wire["message"] = message.message
        if message.error is not None:
            wire["error"] = message.error
        return wire
    if isinstance(message, ThemeChange):
        return {"source": "host", "type": message.type, "theme": message.theme}
    raise ProtocolError(f"Cannot serialize {message!r}")
