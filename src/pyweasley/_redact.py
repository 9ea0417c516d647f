"""Helpers for safe debug logging of presence payloads.

Waypoints from the geofencing bridge carry the exact position of real
people. Before a payload reaches DEBUG logs its coordinates are coarsened to
roughly town level, precision and network fields are masked, and broker
credentials are dropped. Event kind, person and regions stay readable.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MASK = "<redacted>"

# One decimal degree of latitude is about 11 km.
_COARSE_DIGITS = 1

_COORDINATE_KEYS: frozenset[str] = frozenset({"lat", "lon", "latitude", "longitude"})

_MASKED_KEYS: frozenset[str] = frozenset(
    {
        # Precision and motion
        "acc",
        "alt",
        "vac",
        "vel",
        "cog",
        # Network identity
        "ssid",
        "bssid",
        # Credentials
        "password",
        "username",
        "token",
        "authorization",
    }
)


def _coarsen(value: Any) -> Any:
    if isinstance(value, bool):
        return _MASK
    try:
        return round(float(value), _COARSE_DIGITS)
    except (TypeError, ValueError):
        return _MASK


def redact_presence(payload: Any) -> Any:
    """Return a copy of *payload* that is safe to log.

    Non-object payloads are summarized by type only, since their content
    cannot be vetted key by key.
    """
    if not isinstance(payload, Mapping):
        return f"<{type(payload).__name__}>"

    redacted: dict[str, Any] = {}
    for key, value in payload.items():
        name = str(key).lower()
        if name in _MASKED_KEYS:
            redacted[key] = _MASK
        elif name in _COORDINATE_KEYS:
            redacted[key] = _coarsen(value)
        elif isinstance(value, Mapping):
            # Waypoints nest the bridge's original message.
            redacted[key] = redact_presence(value)
        else:
            redacted[key] = value
    return redacted
