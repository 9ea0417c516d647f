"""High-level location tracker."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pyweasley._mqtt import MqttMessage, MqttSettings, WeasleyMqttRuntime
from pyweasley._redact import redact_presence
from pyweasley.config import WeasleyConfig
from pyweasley.exceptions import WeasleyEventError
from pyweasley.ingestion.events import parse_inbound_event
from pyweasley.notifier import ChangeNotifier
from pyweasley.state.events import InboundEvent, PersonLocation, WaypointEvent
from pyweasley.state.processor import EventProcessor
from pyweasley.state.registry import LocationRegistry, TrackedPeople
from pyweasley.state.store import LocationStore

_logger = logging.getLogger(__name__)


class WeasleyTracker:
    """Tracks where each configured person is.

    Usage::

        async with WeasleyTracker(config) as tracker:
            tracker.subscribe(redraw)
            ...

    The tracker can also be fed directly, without MQTT::

        tracker = WeasleyTracker(config)
        tracker.handle_payload({"kind": "TRAVELING", "person": "Bob"})
    """

    def __init__(
        self,
        config: WeasleyConfig,
        *,
        on_waypoint: Callable[[WaypointEvent], None] | None = None,
    ) -> None:
        self._config = config
        self._registry = LocationRegistry.from_config(config.locations)
        self._people = TrackedPeople.from_config(config.people)
        self._store = LocationStore(self._registry, self._people)
        self._notifier = ChangeNotifier()
        self._processor = EventProcessor(
            registry=self._registry,
            people=self._people,
            store=self._store,
            notifier=self._notifier,
            on_waypoint=on_waypoint,
            notify_unchanged=config.notify_unchanged,
            debug=config.debug,
        )
        self._loop: asyncio.AbstractEventLoop | None = None
        self._mqtt_runtime: WeasleyMqttRuntime | None = None
        _logger.debug(
            "Tracker started people=%s locations=%s",
            list(self._people),
            list(self._registry),
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WeasleyTracker:
        self._loop = asyncio.get_running_loop()
        await self._ensure_mqtt_started()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._stop_mqtt()
        self._loop = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def config(self) -> WeasleyConfig:
        return self._config

    @property
    def locations(self) -> tuple[str, ...]:
        """Registered locations in display order."""
        return self._registry.names

    @property
    def people(self) -> tuple[str, ...]:
        """Tracked people in display order."""
        return self._people.names

    def location_of(self, person: str) -> str | None:
        """Current location of *person*, ``None`` if they are not tracked."""
        return self._store.get(person)

    def snapshot(self) -> tuple[PersonLocation, ...]:
        """Current locations, one row per tracked person."""
        return self._store.snapshot()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call *callback* after every accepted change; returns an unsubscribe function."""
        return self._notifier.subscribe(callback)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def apply(self, event: InboundEvent) -> bool:
        """Apply a typed event. Returns whether a location was written."""
        return self._processor.process(event)

    def handle_payload(self, payload: Any) -> bool:
        """Validate and apply a raw bridge payload.

        Malformed payloads are discarded, never raised.
        """
        try:
            event = parse_inbound_event(payload)
        except WeasleyEventError:
            if self._config.debug:
                _logger.debug("Discarding malformed payload %s", redact_presence(payload), exc_info=True)
            return False
        return self.apply(event)

    # ------------------------------------------------------------------
    # MQTT
    # ------------------------------------------------------------------

    def _on_mqtt_message(self, message: MqttMessage) -> None:
        if self._config.debug:
            _logger.debug("MQTT event topic=%s payload=%s", message.topic, redact_presence(message.payload))
        self.handle_payload(message.payload)

    async def _ensure_mqtt_started(self) -> None:
        if not self._config.mqtt_enabled or self._loop is None:
            return

        try:
            runtime = WeasleyMqttRuntime(
                loop=self._loop,
                on_message=self._on_mqtt_message,
                keepalive=self._config.mqtt_keepalive,
                logger=_logger,
            )
            previous = self._mqtt_runtime
            await self._loop.run_in_executor(None, runtime.start, MqttSettings.from_config(self._config))
            self._mqtt_runtime = runtime
            if previous is not None:
                await self._loop.run_in_executor(None, previous.stop)
        except Exception:
            _logger.warning("MQTT startup failed; tracker keeps serving the last known state", exc_info=True)

    async def _stop_mqtt(self) -> None:
        runtime = self._mqtt_runtime
        self._mqtt_runtime = None
        if runtime is None or self._loop is None:
            return
        try:
            await self._loop.run_in_executor(None, runtime.stop)
        except Exception:
            _logger.debug("MQTT runtime stop failed", exc_info=True)
