"""Capabilities the palette plugin needs from the host document."""

from __future__ import annotations

from typing import Any, Protocol, Sequence


class HostPort(Protocol):
    """Side-effecting host operations, injected so the plugin runs without a live host.

    Any method may raise; the plugin catches failures at its boundary and
    reports them in result messages.
    """

    def selection(self) -> Sequence[Any]:
        """Currently selected shapes (mapping- or attribute-style objects)."""
        ...

    def viewport_center(self) -> tuple[float, float]:
        ...

    def create_rectangle(self, x: float, y: float, width: float, height: float, fill: str) -> Any:
        """Create a filled rectangle; may return None if the host refuses."""
        ...

    def select(self, shapes: Sequence[Any]) -> None:
        ...

    def create_library_color(self, name: str, color: str) -> Any:
        """Register ``color`` as a persisted library asset called ``name``."""
        ...

    def send(self, message: dict[str, Any]) -> None:
        """Post a wire message to the palette UI."""
        ...
