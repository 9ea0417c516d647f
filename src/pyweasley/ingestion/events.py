"""Boundary validation for inbound presence payloads.

Payloads look like ``{"kind": "UPDATE", "person": "Alice", "inregions":
["School"]}``. Everything past this module works with typed events only.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from pyweasley.exceptions import WeasleyEventError
from pyweasley.ingestion.normalize import normalize_kind
from pyweasley.state.events import EventKind, InboundEvent

_INBOUND_ADAPTER: TypeAdapter[InboundEvent] = TypeAdapter(InboundEvent)


def parse_inbound_event(payload: Any) -> InboundEvent:
    """Validate a raw payload into a typed event.

    Raises
    ------
    WeasleyEventError
        When the payload is not an object, has an unknown ``kind`` or is
        missing required fields.
    """
    if not isinstance(payload, dict):
        raise WeasleyEventError(f"Event payload must be an object, got {type(payload).__name__}")

    kind = normalize_kind(payload.get("kind"))
    if kind not in set(EventKind):
        raise WeasleyEventError(f"Unknown event kind {payload.get('kind')!r}", kind=str(payload.get("kind", "")))

    # Only these keys reach the models; anything else the bridge adds is ignored.
    candidate: dict[str, Any] = {"kind": kind}
    if "person" in payload:
        candidate["person"] = payload["person"]
    if kind == EventKind.UPDATE and "inregions" in payload:
        candidate["inregions"] = payload["inregions"]
    if kind == EventKind.WAYPOINT:
        # Waypoints keep the payload exactly as received.
        candidate["payload"] = payload

    try:
        return _INBOUND_ADAPTER.validate_python(candidate)
    except ValidationError as exc:
        raise WeasleyEventError(f"Invalid {kind} event: {exc.error_count()} error(s)", kind=kind) from exc
