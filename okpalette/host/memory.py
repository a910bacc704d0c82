"""In-process host used by the CLI and tests.

InMemoryHost implements HostPort with plain Python lists. LoopbackChannel
queues messages in both directions and delivers them in arrival order, one
at a time, to a single handler per side.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence


@dataclass
class Rectangle:
    x: float
    y: float
    width: float
    height: float
    fills: list[dict[str, Any]] = field(default_factory=list)


class InMemoryHost:
    """HostPort over in-memory shapes and a color library."""

    def __init__(
        self,
        selection: Optional[Sequence[Any]] = None,
        viewport_center: tuple[float, float] = (0.0, 0.0),
        reject_colors: Sequence[str] = (),
    ) -> None:
        self._selection: list[Any] = list(selection or [])
        self._center = viewport_center
        self._reject = {c.lower() for c in reject_colors}
        self.rectangles: list[Rectangle] = []
        self.library: dict[str, str] = {}
        self.outbox: list[dict[str, Any]] = []
        self.on_send: Optional[Callable[[dict[str, Any]], None]] = None

    def set_selection(self, shapes: Sequence[Any]) -> None:
        self._selection = list(shapes)

    def selection(self) -> Sequence[Any]:
        return list(self._selection)

    def viewport_center(self) -> tuple[float, float]:
        return self._center

    def create_rectangle(self, x: float, y: float, width: float, height: float, fill: str) -> Rectangle:
        rect = Rectangle(x, y, width, height, fills=[{"fillColor": fill, "fillOpacity": 1}])
        self.rectangles.append(rect)
        return rect

    def select(self, shapes: Sequence[Any]) -> None:
        self._selection = list(shapes)

    def create_library_color(self, name: str, color: str) -> str:
        if color.lower() in self._reject:
            raise RuntimeError(f"Library rejected {color}")
        self.library[name] = color
        return name

    def send(self, message: dict[str, Any]) -> None:
        self.outbox.append(message)
        if self.on_send is not None:
            self.on_send(message)


class LoopbackChannel:
    """Two one-way queues between a UI handler and a host handler."""

    def __init__(
        self,
        to_host: Callable[[dict[str, Any]], None],
        to_ui: Callable[[dict[str, Any]], None],
    ) -> None:
        self._to_host = to_host
        self._to_ui = to_ui
        self._queue: deque[tuple[str, dict[str, Any]]] = deque()

    def post_to_host(self, message: dict[str, Any]) -> None:
        self._queue.append(("host", message))

    def post_to_ui(self, message: dict[str, Any]) -> None:
        self._queue.append(("ui", message))

    def pump(self) -> int:
        """Deliver queued messages (including replies they cause) until idle."""
        delivered = 0
        while self._queue:
            side, message = self._queue.popleft()
            if side == "host":
                self._to_host(message)
            else:
                self._to_ui(message)
            delivered += 1
        return delivered
