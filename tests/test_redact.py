from __future__ import annotations

from pyweasley._redact import redact_presence


def test_waypoint_coordinates_are_coarsened() -> None:
    payload = {
        "kind": "WAYPOINT",
        "person": "Alice",
        "lat": 52.09123,
        "lon": 5.12187,
        "acc": 12,
        "alt": 3,
        "tid": "al",
    }

    redacted = redact_presence(payload)

    assert redacted["lat"] == 52.1
    assert redacted["lon"] == 5.1
    assert redacted["acc"] == "<redacted>"
    assert redacted["alt"] == "<redacted>"
    assert redacted["tid"] == "al"
    assert payload["lat"] == 52.09123


def test_region_update_stays_readable() -> None:
    payload = {"kind": "UPDATE", "person": "Alice", "inregions": ["School", "Home"]}

    assert redact_presence(payload) == payload


def test_nested_bridge_message_and_credentials_masked() -> None:
    payload = {
        "kind": "WAYPOINT",
        "person": "Bob",
        "password": "hunter2",
        "payload": {"_type": "location", "LAT": "51.98", "lon": "not-a-number", "SSID": "home-wifi"},
    }

    redacted = redact_presence(payload)

    assert redacted["password"] == "<redacted>"
    assert redacted["payload"]["LAT"] == 52.0
    assert redacted["payload"]["lon"] == "<redacted>"
    assert redacted["payload"]["SSID"] == "<redacted>"
    assert redacted["payload"]["_type"] == "location"


def test_non_object_payload_summarized_by_type() -> None:
    assert redact_presence(["Alice", 52.09, 5.12]) == "<list>"
    assert redact_presence("Alice is at 52.09,5.12") == "<str>"
