"""Deterministic in-memory location store.

Only the event processor is allowed to write to it.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from pyweasley.exceptions import WeasleyStateError
from pyweasley.state.events import LocationChange, PersonLocation
from pyweasley.state.registry import LOST, LocationRegistry, TrackedPeople


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PersonEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    location: str = LOST
    updated_at: datetime | None = None


class LocationStore:
    """In-memory store for where each tracked person is.

    The domain is fixed at construction: exactly one entry per tracked
    person, all starting at ``Lost``. Given the same sequence of changes it
    always produces the same snapshots.
    """

    def __init__(
        self,
        registry: LocationRegistry,
        people: TrackedPeople,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._registry = registry
        self._people = people
        self._clock = clock
        self._entries: dict[str, PersonEntry] = {person: PersonEntry() for person in people}

    def apply(self, change: LocationChange) -> None:
        """Write a change decided by the policy."""
        entry = self._entries.get(change.person)
        if entry is None:
            raise WeasleyStateError(f"{change.person!r} is not a tracked person")
        if change.location not in self._registry:
            raise WeasleyStateError(f"{change.location!r} is not a registered location")
        entry.location = change.location
        entry.updated_at = self._clock()

    def get(self, person: str) -> str | None:
        """Current location, or ``None`` for someone who is not tracked."""
        entry = self._entries.get(person)
        return entry.location if entry is not None else None

    def updated_at(self, person: str) -> datetime | None:
        """When the person's location was last written, if ever."""
        entry = self._entries.get(person)
        return entry.updated_at if entry is not None else None

    def as_dict(self) -> dict[str, str]:
        """Copy of the person -> location mapping."""
        return {person: entry.location for person, entry in self._entries.items()}

    def snapshot(self) -> tuple[PersonLocation, ...]:
        """Rows in configured person order."""
        return tuple(PersonLocation(person=person, location=self._entries[person].location) for person in self._people)

    def __contains__(self, person: object) -> bool:
        return person in self._entries

    def __len__(self) -> int:
        return len(self._entries)
