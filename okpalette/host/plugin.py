"""Host-side message handler for the palette UI.

PalettePlugin runs inside the host document. It answers base-color requests
from the current selection, places preview rectangles for a finished palette,
optionally publishes the colors as library assets, and forwards selection and
theme changes to the UI.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Optional, Sequence

from okpalette import defaults
from okpalette.host.assets import batch_create_color_assets
from okpalette.host.debounce import Debouncer
from okpalette.host.port import HostPort
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

logger = logging.getLogger(__name__)

# Keys that may hold a solid color, in lookup order
_COLOR_KEYS = ("fillColor", "color", "fill")


def _lookup(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def _color_from(obj: Any) -> Optional[str]:
    for key in _COLOR_KEYS:
        value = _lookup(obj, key)
        if isinstance(value, str) and value:
            return value
    return None


def extract_fill_color(shape: Any) -> Optional[str]:
    """First solid color of a shape: its fills first, then its own color keys."""
    fills = _lookup(shape, "fills")
    if isinstance(fills, (list, tuple)):
        for fill in fills:
            if isinstance(fill, str) and fill:
                return fill
            if fill is not None:
                color = _color_from(fill)
                if color is not None:
                    return color
    return _color_from(shape)


def preview_layout(
    count: int,
    center: tuple[float, float],
    width: float = defaults.PREVIEW_RECT_WIDTH,
    height: float = defaults.PREVIEW_RECT_HEIGHT,
    spacing: float = defaults.PREVIEW_RECT_SPACING,
) -> list[tuple[float, float]]:
    """Top-left corners of ``count`` evenly spaced rectangles around ``center``."""
    cx, cy = center
    start_x = cx - (count * (width + spacing)) / 2
    start_y = cy - height / 2
    return [(start_x + i * (width + spacing), start_y) for i in range(count)]


class PalettePlugin:
    """Handles UI messages against an injected host port."""

    def __init__(
        self,
        port: HostPort,
        *,
        group_name: str = defaults.DEFAULT_ASSET_GROUP,
        debounce: float = defaults.SELECTION_DEBOUNCE_DELAY,
        _clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._port = port
        self._group_name = group_name
        self._selection_debouncer = Debouncer(self.send_base_color, debounce, _clock=_clock)
        self._initial_debouncer = Debouncer(
            self.send_base_color, defaults.INITIAL_COLOR_DELAY, _clock=_clock,
        )

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Schedule the initial base color report once the UI has loaded."""
        self._initial_debouncer.trigger()

    def on_selection_change(self) -> None:
        logger.debug("Selection changed, scheduling color update")
        self._selection_debouncer.trigger()

    def on_theme_change(self, theme: str) -> None:
        self._port.send(to_wire(ThemeChange(theme=theme)))

    def poll(self) -> None:
        """Fire any debounced base-color report that is due."""
        self._initial_debouncer.poll()
        self._selection_debouncer.poll()

    # ------------------------------------------------------------------
    # UI messages
    # ------------------------------------------------------------------

    def handle_message(self, data: Mapping[str, Any]) -> None:
        try:
            message = parse_message(data)
        except ProtocolError as e:
            logger.warning("Ignoring message from UI: %s", e)
            return

        if isinstance(message, GetBaseColor):
            self.send_base_color()
        elif isinstance(message, AddPalette):
            self._port.send(to_wire(self.add_palette(list(message.colors), message.create_assets)))
        else:
            logger.debug("Ignoring %s message on host side", message.type)

    def base_color(self) -> Optional[str]:
        """Fill color of the first selected shape, or None."""
        try:
            selection = self._port.selection()
        except Exception:
            logger.error("Error reading selection", exc_info=True)
            return None
        if not selection:
            logger.debug("No objects selected")
            return None
        try:
            color = extract_fill_color(selection[0])
        except Exception:
            logger.error("Error extracting color from selection", exc_info=True)
            return None
        if color is None:
            logger.debug("No color found in selected object")
        return color

    def send_base_color(self) -> None:
        self._port.send(to_wire(BaseColor(color=self.base_color())))

    def create_palette_rectangles(self, colors: Sequence[str]) -> list[Any]:
        """Place one preview rectangle per color at the viewport center and select them."""
        corners = preview_layout(len(colors), self._port.viewport_center())
        shapes = []
        for color, (x, y) in zip(colors, corners):
            rect = self._port.create_rectangle(
                x, y, defaults.PREVIEW_RECT_WIDTH, defaults.PREVIEW_RECT_HEIGHT, color,
            )
            if rect is not None:
                shapes.append(rect)
        if shapes:
            self._port.select(shapes)
        return shapes

    def add_palette(self, colors: list[str], create_assets: bool) -> PaletteAdded:
        """Handle an add-palette request and describe the outcome."""
        try:
            self.create_palette_rectangles(colors)
        except Exception as e:
            logger.error("Failed to create palette rectangles", exc_info=True)
            return PaletteAdded(success=False, error=f"Failed to create palette rectangles: {e}")

        if not create_assets:
            return PaletteAdded(success=True, message="Palette rectangles created successfully")

        result = batch_create_color_assets(self._port, colors, self._group_name)
        if not result.success:
            return PaletteAdded(
                success=False,
                assets_created=0,
                error=f"Failed to create color assets ({len(result.failed)} failed)",
            )

        logger.info("Created %d color assets", len(result.success))
        text = f'Created {len(result.success)} color assets in "{self._group_name}" group'
        if result.failed:
            text += f" ({len(result.failed)} failed: {', '.join(map(str, result.failed))})"
        return PaletteAdded(success=True, assets_created=len(result.success), message=text)
