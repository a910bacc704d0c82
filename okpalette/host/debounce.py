"""Restartable debounce timer driven by polling.

The host loop calls ``poll()`` regularly (e.g. once per frame or event-loop
tick). Each ``trigger()`` restarts the delay, so a burst of triggers fires the
callback once, ``delay`` seconds after the last one.
"""

from __future__ import annotations

import time
from typing import Callable, Optional


class Debouncer:
    """Coalesce rapid triggers into a single deferred callback."""

    def __init__(
        self,
        callback: Callable[[], None],
        delay: float,
        *,
        _clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._callback = callback
        self._delay = delay
        self._clock = _clock
        self._deadline: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def trigger(self) -> None:
        """Schedule the callback, replacing any pending schedule."""
        self._deadline = self._clock() + self._delay

    def cancel(self) -> None:
        self._deadline = None

    def poll(self) -> bool:
        """Fire the callback if its delay has elapsed.

        Returns:
            True if the callback ran.
        """
        if self._deadline is None or self._clock() < self._deadline:
            return False
        self._deadline = None
        self._callback()
        return True

    def flush(self) -> bool:
        """Fire a pending callback immediately."""
        if self._deadline is None:
            return False
        self._deadline = None
        self._callback()
        return True
