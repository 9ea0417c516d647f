from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pyweasley.exceptions import WeasleyStateError
from pyweasley.state.events import LocationChange, PersonLocation
from pyweasley.state.registry import LOST, LocationRegistry, TrackedPeople
from pyweasley.state.store import LocationStore, PersonEntry


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def _store() -> LocationStore:
    return LocationStore(
        LocationRegistry.from_config(["Home", "School", "Work"]),
        TrackedPeople.from_config(["Alice", "Bob", "Alice"]),
        clock=_dt,
    )


def test_every_tracked_person_starts_lost() -> None:
    store = _store()

    assert store.as_dict() == {"Alice": LOST, "Bob": LOST}
    assert len(store) == 2


def test_untracked_person_reads_as_unknown() -> None:
    store = _store()

    assert store.get("Mallory") is None
    assert store.updated_at("Mallory") is None
    assert "Mallory" not in store


def test_apply_writes_location_and_timestamp() -> None:
    store = _store()

    store.apply(LocationChange(person="Alice", previous=LOST, location="School"))

    assert store.get("Alice") == "School"
    assert store.updated_at("Alice") == _dt()
    assert store.updated_at("Bob") is None


def test_person_entry_holds_only_location_and_timestamp() -> None:
    assert set(PersonEntry.model_fields) == {"location", "updated_at"}


def test_apply_rejects_untracked_person() -> None:
    store = _store()

    with pytest.raises(WeasleyStateError):
        store.apply(LocationChange(person="Mallory", previous=None, location="Home"))

    assert "Mallory" not in store


def test_apply_rejects_unregistered_location() -> None:
    store = _store()

    with pytest.raises(WeasleyStateError):
        store.apply(LocationChange(person="Alice", previous=LOST, location="Mars"))

    assert store.get("Alice") == LOST


def test_snapshot_follows_configured_order_and_is_a_copy() -> None:
    store = _store()
    before = store.as_dict()

    store.apply(LocationChange(person="Bob", previous=LOST, location="Work"))

    assert store.snapshot() == (
        PersonLocation(person="Alice", location=LOST),
        PersonLocation(person="Bob", location="Work"),
    )
    assert before["Bob"] == LOST
