"""pyweasley - Track where your people are from geofence presence events."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyweasley")
except PackageNotFoundError:
    __version__ = "0+local"
from pyweasley.config import WeasleyConfig
from pyweasley.exceptions import (
    WeasleyConfigError,
    WeasleyError,
    WeasleyEventError,
    WeasleyStateError,
    WeasleyTransportError,
)
from pyweasley.ingestion.events import parse_inbound_event
from pyweasley.notifier import ChangeNotifier
from pyweasley.state.events import (
    EventKind,
    InboundEvent,
    LocationChange,
    LostEvent,
    PersonLocation,
    RegionUpdateEvent,
    TravelingEvent,
    WaypointEvent,
)
from pyweasley.state.registry import LOST, TRAVELING, LocationRegistry, TrackedPeople
from pyweasley.tracker import WeasleyTracker

__all__ = [
    "__version__",
    "LOST",
    "TRAVELING",
    "ChangeNotifier",
    "EventKind",
    "InboundEvent",
    "LocationChange",
    "LocationRegistry",
    "LostEvent",
    "PersonLocation",
    "RegionUpdateEvent",
    "TrackedPeople",
    "TravelingEvent",
    "WaypointEvent",
    "WeasleyConfig",
    "WeasleyConfigError",
    "WeasleyError",
    "WeasleyEventError",
    "WeasleyStateError",
    "WeasleyTracker",
    "WeasleyTransportError",
    "parse_inbound_event",
]
