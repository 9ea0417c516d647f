"""Event processor: the only writer of the location store."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyweasley.notifier import ChangeNotifier
from pyweasley.state.events import InboundEvent, WaypointEvent
from pyweasley.state.policy import decide, should_notify
from pyweasley.state.registry import LocationRegistry, TrackedPeople
from pyweasley.state.store import LocationStore

_logger = logging.getLogger(__name__)


class EventProcessor:
    """Apply typed presence events to a :class:`LocationStore`.

    Each event is either fully applied (one store write, at most one
    notification) or fully discarded.
    """

    def __init__(
        self,
        *,
        registry: LocationRegistry,
        people: TrackedPeople,
        store: LocationStore,
        notifier: ChangeNotifier,
        on_waypoint: Callable[[WaypointEvent], None] | None = None,
        notify_unchanged: bool = True,
        debug: bool = False,
    ) -> None:
        self._registry = registry
        self._people = people
        self._store = store
        self._notifier = notifier
        self._on_waypoint = on_waypoint
        self._notify_unchanged = notify_unchanged
        self._debug = debug

    def process(self, event: InboundEvent) -> bool:
        """Process one event. Returns whether the store was written."""
        if isinstance(event, WaypointEvent):
            self._forward_waypoint(event)
            return False

        change = decide(
            self._store.as_dict(),
            event,
            registry=self._registry,
            people=self._people,
            debug=self._debug,
        )
        if change is None:
            return False

        self._store.apply(change)
        if self._debug:
            _logger.debug("%s: %s -> %s", change.person, change.previous, change.location)
        if should_notify(change, notify_unchanged=self._notify_unchanged):
            self._notifier.notify()
        return True

    def _forward_waypoint(self, event: WaypointEvent) -> None:
        if self._on_waypoint is None:
            return
        try:
            self._on_waypoint(event)
        except Exception:
            _logger.debug("on_waypoint callback failed", exc_info=True)
