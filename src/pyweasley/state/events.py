"""Typed presence events.

Every ingestion path converts its input into one of these events. Only the
state layer is allowed to act on them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class EventKind(StrEnum):
    TRAVELING = "TRAVELING"
    LOST = "LOST"
    UPDATE = "UPDATE"
    WAYPOINT = "WAYPOINT"


class _PresenceEvent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    person: str


class TravelingEvent(_PresenceEvent):
    """The person left a region and has not arrived anywhere yet."""

    kind: Literal["TRAVELING"] = "TRAVELING"


class LostEvent(_PresenceEvent):
    """Nothing is known about the person any more."""

    kind: Literal["LOST"] = "LOST"


class RegionUpdateEvent(_PresenceEvent):
    """The person is inside one or more geofenced regions.

    Regions are kept in the order the bridge reported them; only the first
    one is authoritative.
    """

    kind: Literal["UPDATE"] = "UPDATE"
    candidate_regions: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("inregions", "candidate_regions"),
    )

    @field_validator("candidate_regions", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def first_region(self) -> str | None:
        return self.candidate_regions[0] if self.candidate_regions else None


class WaypointEvent(_PresenceEvent):
    """Raw positional update; handed on untouched, never changes state."""

    kind: Literal["WAYPOINT"] = "WAYPOINT"
    person: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    """Full payload as received."""

    @model_validator(mode="before")
    @classmethod
    def _ensure_payload(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("payload", values)
        return merged


InboundEvent = Annotated[
    TravelingEvent | LostEvent | RegionUpdateEvent | WaypointEvent,
    Field(discriminator="kind"),
]


class LocationChange(BaseModel):
    """A decided write of one person's location."""

    model_config = ConfigDict(frozen=True)

    person: str
    previous: str | None
    location: str

    @property
    def is_change(self) -> bool:
        return self.previous != self.location


class PersonLocation(BaseModel):
    """One row of a state snapshot."""

    model_config = ConfigDict(frozen=True)

    person: str
    location: str
