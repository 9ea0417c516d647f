"""Deterministic location update policy.

This module contains *no* payload parsing and never mutates anything. The
ingestion boundary hands it typed events; it answers whether an event
changes someone's location and to what.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pyweasley.state.events import (
    InboundEvent,
    LocationChange,
    LostEvent,
    RegionUpdateEvent,
    TravelingEvent,
    WaypointEvent,
)
from pyweasley.state.registry import LOST, TRAVELING, LocationRegistry, TrackedPeople

_logger = logging.getLogger(__name__)


def decide(
    current: Mapping[str, str],
    event: InboundEvent,
    *,
    registry: LocationRegistry,
    people: TrackedPeople,
    debug: bool = False,
) -> LocationChange | None:
    """Decide the effect of one event on the location state.

    Returns the change to apply, or ``None`` when the event must be discarded.

    Policy:
    - Traveling/Lost: accepted for tracked people only, always written.
    - Region update: only the first reported region counts; it must be a
      registered location and the person must be tracked.
    - Waypoint: never changes state.
    """
    if isinstance(event, WaypointEvent):
        return None

    if event.person not in people:
        if debug:
            _logger.debug("Ignoring %s event for untracked person %r", event.kind, event.person)
        return None

    target: str | None
    if isinstance(event, TravelingEvent):
        target = TRAVELING
    elif isinstance(event, LostEvent):
        target = LOST
    elif isinstance(event, RegionUpdateEvent):
        target = _region_target(event, registry, debug=debug)
    else:  # pragma: no cover - the union is exhaustive
        return None

    if target is None:
        return None
    return LocationChange(person=event.person, previous=current.get(event.person), location=target)


def _region_target(event: RegionUpdateEvent, registry: LocationRegistry, *, debug: bool) -> str | None:
    region = event.first_region
    if region is None:
        if debug:
            _logger.debug("Ignoring region update for %r without regions", event.person)
        return None
    if region not in registry:
        if debug:
            _logger.debug("Location %r not found, ignoring update for %r", region, event.person)
        return None
    return region


def should_notify(change: LocationChange, *, notify_unchanged: bool) -> bool:
    """Every accepted write notifies unless only real changes are wanted."""
    return notify_unchanged or change.is_change
