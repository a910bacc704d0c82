"""UI-side owner of the live palette state.

PaletteSession holds the single live ``PaletteState`` and routes every user
input and host message through ``okpalette.app.actions``:
- One update path: each input replaces the state with a recomputed one
- Per-event subscriber notifications, isolated from subscriber errors
- Outbound host requests through an injected ``send`` callable
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Mapping, Optional, Union

from okpalette import defaults
from okpalette.app import actions
from okpalette.app.core import CHANNELS, PaletteState, create_initial_state
from okpalette.app.recompute import recompute
from okpalette.curves import curve_initial, parameter_names, resolve_parameters
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
from okpalette.ranges import param_to_slider
from okpalette.types import Channel, CurveKind

logger = logging.getLogger(__name__)


class SessionEvent(enum.Enum):
    """What changed, passed to subscribers."""

    PALETTE = "palette"            # value: new PaletteState
    NODE_SELECTED = "node_selected"  # value: bool
    THEME = "theme"                # value: theme name
    CREATE_ASSETS = "create_assets"  # value: bool
    PALETTE_ADDED = "palette_added"  # value: PaletteAdded


def _as_channel(channel: Union[Channel, str]) -> Channel:
    if isinstance(channel, Channel):
        return channel
    return Channel(str(channel).strip().capitalize())


def _as_curve(curve: Union[CurveKind, str]) -> CurveKind:
    if isinstance(curve, CurveKind):
        return curve
    return CurveKind.from_name(curve)


class PaletteSession:
    """Explicitly owned palette context threaded through every UI handler."""

    def __init__(
        self,
        state: Optional[PaletteState] = None,
        send: Optional[Callable[[dict[str, Any]], None]] = None,
    ) -> None:
        self._state = state if state is not None else recompute(create_initial_state())
        self._send = send
        self._subscribers: dict[SessionEvent, list[Callable]] = {}

        self.create_assets: bool = False
        self.is_node_selected: bool = False
        self.theme: str = defaults.DEFAULT_THEME
        self.last_result: Optional[PaletteAdded] = None

    @property
    def state(self) -> PaletteState:
        return self._state

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, event: SessionEvent, callback: Callable) -> None:
        """Register *callback* for *event*. Signature: ``(event, value)``."""
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: SessionEvent, callback: Callable) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def _notify(self, event: SessionEvent, value: Any) -> None:
        for cb in list(self._subscribers.get(event, ())):
            try:
                cb(event, value)
            except Exception:
                logger.warning("Subscriber %r raised for %s", cb, event, exc_info=True)

    def _commit(self, new_state: PaletteState) -> PaletteState:
        if new_state is not self._state:
            self._state = new_state
            self._notify(SessionEvent.PALETTE, new_state)
        return self._state

    # ------------------------------------------------------------------
    # User input
    # ------------------------------------------------------------------

    def select_channel(self, channel: Union[Channel, str]) -> PaletteState:
        try:
            channel = _as_channel(channel)
        except ValueError:
            logger.debug("Ignoring unknown channel %r", channel)
            return self._state
        return self._commit(actions.select_channel(self._state, channel))

    def toggle_curve(self, curve: Union[CurveKind, str]) -> PaletteState:
        try:
            curve = _as_curve(curve)
        except ValueError:
            logger.debug("Ignoring unknown curve %r", curve)
            return self._state
        return self._commit(actions.toggle_curve(self._state, curve))

    def set_curve_param(self, name: str, value: Any) -> PaletteState:
        return self._commit(actions.set_curve_param(self._state, name, value))

    def set_curve_param_from_slider(self, slot: int, raw: Any) -> PaletteState:
        return self._commit(actions.set_curve_param_from_slider(self._state, slot, raw))

    def set_shade_value(self, index: int, value: Any) -> PaletteState:
        return self._commit(actions.set_shade_value(self._state, index, value))

    def set_shade_value_from_slider(self, index: int, raw: Any) -> PaletteState:
        return self._commit(actions.set_shade_value_from_slider(self._state, index, raw))

    def set_base_color_hex(self, hex_color: str) -> PaletteState:
        return self._commit(actions.set_base_color_hex(self._state, hex_color))

    def set_shade_count(self, count: Any) -> PaletteState:
        return self._commit(actions.set_shade_count(self._state, count))

    def reset(self) -> PaletteState:
        return self._commit(actions.reset_palette(self._state))

    def set_create_assets(self, enabled: bool) -> None:
        self.create_assets = bool(enabled)
        self._notify(SessionEvent.CREATE_ASSETS, self.create_assets)

    # ------------------------------------------------------------------
    # Host round-trips
    # ------------------------------------------------------------------

    def connect(self, send: Optional[Callable[[dict[str, Any]], None]]) -> None:
        """Attach (or detach with None) the outbound host channel."""
        self._send = send

    def _post(self, message) -> None:
        if self._send is None:
            logger.debug("No host connected, dropping %s", message.type)
            return
        self._send(to_wire(message))

    def request_base_color(self) -> None:
        self._post(GetBaseColor())

    def add_palette(self) -> None:
        """Ask the host to place the current palette (and maybe create assets)."""
        self._post(AddPalette(colors=tuple(self._state.colors), create_assets=self.create_assets))

    def handle_host_message(self, data: Mapping[str, Any]) -> None:
        try:
            message = parse_message(data)
        except ProtocolError as e:
            logger.warning("Ignoring message from host: %s", e)
            return

        if isinstance(message, BaseColor):
            self._on_base_color(message.color)
        elif isinstance(message, PaletteAdded):
            self.last_result = message
            if message.success:
                logger.info("Palette added: %s", message.message or "ok")
            else:
                logger.error("Failed to add palette: %s", message.error)
            self._notify(SessionEvent.PALETTE_ADDED, message)
        elif isinstance(message, ThemeChange):
            self.theme = message.theme
            self._notify(SessionEvent.THEME, message.theme)
        else:
            logger.debug("Ignoring %s message on UI side", message.type)

    def _on_base_color(self, color: Optional[str]) -> None:
        selected = color is not None
        if selected != self.is_node_selected:
            self.is_node_selected = selected
            self._notify(SessionEvent.NODE_SELECTED, selected)
        if color is None:
            logger.debug("No object selected or no color found")
            return
        self.set_base_color_hex(color)

    # ------------------------------------------------------------------
    # View data
    # ------------------------------------------------------------------

    @property
    def reset_available(self) -> bool:
        return self._state.snapshot is not None

    def tab_labels(self) -> list[str]:
        """Channel tab captions with the initial of any active curve."""
        labels = []
        for channel in CHANNELS:
            initial = curve_initial(self._state.formulas[channel].curve)
            name = channel.value.upper()
            labels.append(f"{name} {initial}" if initial else name)
        return labels

    def parameter_slots(self) -> list[tuple[str, float, float]]:
        """(name, value, slider position) per parameter of the active curve."""
        formula = self._state.active_formula
        if formula.curve is None:
            return []
        params = resolve_parameters(formula.curve, formula.params)
        return [
            (name, params[name], param_to_slider(name, params[name]))
            for name in parameter_names(formula.curve)
        ]

    def add_button_label(self) -> str:
        if self.create_assets:
            return "Add to my file + Create assets"
        return "Add to my file"
