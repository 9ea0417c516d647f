"""Change notification for renderers.

A notification carries no payload: it only means "state changed, re-read
and re-render". Delivery is fire-and-forget.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

_logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]


class ChangeNotifier:
    """Synchronous, non-coalescing change signal."""

    def __init__(self) -> None:
        self._subscribers: list[ChangeCallback] = []
        self._fired = 0

    @property
    def fired(self) -> int:
        """How many notifications have been emitted so far."""
        return self._fired

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register *callback*; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def notify(self) -> None:
        self._fired += 1
        # Copy so a callback may unsubscribe itself while being called.
        for callback in list(self._subscribers):
            try:
                callback()
            except Exception:
                _logger.debug("Change subscriber %r failed", callback, exc_info=True)
