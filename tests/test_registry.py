from __future__ import annotations

import pytest

from pyweasley.state.registry import LOST, TRAVELING, LocationRegistry, TrackedPeople, unique_in_order


class TestLocationRegistry:
    def test_mandatory_locations_appended_in_order(self) -> None:
        registry = LocationRegistry.from_config(["Home", "School"])
        assert registry.names == ("Home", "School", LOST, TRAVELING)

    def test_configured_mandatory_location_keeps_its_position(self) -> None:
        registry = LocationRegistry.from_config(["Traveling", "Home"])
        assert registry.names == ("Traveling", "Home", LOST)

    def test_duplicates_collapse_to_first_occurrence(self) -> None:
        registry = LocationRegistry.from_config(["Home", "Work", "Home", "Lost", "Work"])
        assert registry.names == ("Home", "Work", LOST, TRAVELING)

    def test_empty_configuration_yields_only_mandatory_locations(self) -> None:
        registry = LocationRegistry.from_config([])
        assert registry.names == (LOST, TRAVELING)
        assert len(registry) == 2

    def test_membership_is_case_sensitive(self) -> None:
        registry = LocationRegistry.from_config(["Home"])
        assert "Home" in registry
        assert "home" not in registry
        assert " Home" not in registry

    def test_registry_is_immutable(self) -> None:
        registry = LocationRegistry.from_config(["Home"])
        with pytest.raises(AttributeError):
            registry.names = ("Mars",)  # type: ignore[misc]


class TestTrackedPeople:
    def test_duplicates_removed_silently_preserving_order(self) -> None:
        people = TrackedPeople.from_config(["Bob", "Alice", "Bob", "Carol", "Alice"])
        assert people.names == ("Bob", "Alice", "Carol")

    def test_empty_people_is_accepted(self) -> None:
        people = TrackedPeople.from_config([])
        assert len(people) == 0
        assert "Alice" not in people

    def test_iterates_in_configured_order(self) -> None:
        assert list(TrackedPeople.from_config(["Zed", "Amy"])) == ["Zed", "Amy"]


def test_unique_in_order_keeps_first_seen() -> None:
    assert unique_in_order(["b", "a", "b", "c", "a"]) == ("b", "a", "c")
