"""Custom exception hierarchy for pyweasley."""

from __future__ import annotations


class WeasleyError(Exception):
    """Base exception for all pyweasley errors."""


class WeasleyConfigError(WeasleyError):
    """Invalid or missing configuration."""


class WeasleyEventError(WeasleyError):
    """Inbound payload could not be turned into a presence event."""

    def __init__(self, message: str, *, kind: str = "") -> None:
        self.kind = kind
        super().__init__(message)


class WeasleyTransportError(WeasleyError):
    """MQTT-level failure (undecodable payload, non-object JSON)."""

    def __init__(self, message: str, *, topic: str = "") -> None:
        self.topic = topic
        super().__init__(message)


class WeasleyStateError(WeasleyError):
    """A change would break the location-state invariants.

    Only the event processor writes to the store and it validates every
    change first, so seeing this means a caller bypassed the processor.
    """
