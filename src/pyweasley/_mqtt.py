"""Internal MQTT connection settings, payload decoding and runtime."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

import paho.mqtt.client as mqtt

from pyweasley._redact import redact_presence
from pyweasley.config import WeasleyConfig
from pyweasley.exceptions import WeasleyTransportError


@dataclass(frozen=True)
class MqttSettings:
    """Broker details required to subscribe to presence events."""

    broker_host: str
    broker_port: int
    topic: str
    client_id: str
    username: str | None = None
    password: str | None = None
    tls: bool = True

    @classmethod
    def from_config(cls, config: WeasleyConfig) -> MqttSettings:
        return cls(
            broker_host=config.mqtt_host,
            broker_port=config.mqtt_port,
            topic=config.mqtt_topic,
            client_id=config.mqtt_client_id,
            username=config.mqtt_username,
            password=config.mqtt_password,
            tls=config.mqtt_tls,
        )


@dataclass(frozen=True)
class MqttMessage:
    """Decoded MQTT message."""

    topic: str
    payload: dict[str, Any]


def decode_mqtt_payload(payload: bytes, *, topic: str = "") -> dict[str, Any]:
    """Parse MQTT payload bytes into a JSON object."""
    try:
        parsed = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise WeasleyTransportError(f"MQTT payload is not valid JSON: {exc}", topic=topic) from exc
    if not isinstance(parsed, dict):
        raise WeasleyTransportError("MQTT payload decoded to non-object JSON", topic=topic)
    return parsed


class WeasleyMqttRuntime:
    """Threaded paho-mqtt runtime that emits decoded messages onto an asyncio loop.

    The network thread never calls into the tracker directly; messages are
    scheduled with ``call_soon_threadsafe`` and handled on the loop in
    arrival order.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        on_message: Callable[[MqttMessage], None],
        keepalive: int = 120,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._on_message = on_message
        self._keepalive = keepalive
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._topic: str | None = None

    @property
    def is_running(self) -> bool:
        """Whether the MQTT runtime is actively running."""
        return self._running

    def handle_raw(self, topic: str, payload: bytes) -> None:
        """Decode one raw message and schedule it on the loop."""
        try:
            parsed = decode_mqtt_payload(payload, topic=topic)
        except WeasleyTransportError:
            self._logger.debug("MQTT payload parse failure topic=%s", topic, exc_info=True)
            return
        self._logger.debug("Received PUBLISH topic=%s parsed=%s", topic, redact_presence(parsed))
        self._loop.call_soon_threadsafe(self._on_message, MqttMessage(topic=topic, payload=parsed))

    def start(self, settings: MqttSettings) -> None:
        """Connect and subscribe with provided broker details."""
        self.stop()
        self._logger.debug(
            "MQTT runtime start requested host=%s port=%s topic=%s client_id=%s tls=%s",
            settings.broker_host,
            settings.broker_port,
            settings.topic,
            settings.client_id,
            settings.tls,
        )

        client = self._build_client(settings)
        client.connect(settings.broker_host, settings.broker_port, keepalive=self._keepalive)
        self._topic = settings.topic
        client.loop_start()

        self._client = client
        self._running = True
        self._logger.debug("MQTT network loop started")

    def stop(self) -> None:
        """Stop and disconnect current MQTT client if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False
        self._topic = None

        if client is None:
            return
        try:
            if was_running:
                self._logger.debug("MQTT disconnect requested")
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")

    def _build_client(self, settings: MqttSettings) -> mqtt.Client:
        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=settings.client_id,
            protocol=mqtt.MQTTv5,
        )
        client.enable_logger(self._logger)
        # Anonymous brokers are allowed; a password without a user name is not.
        if settings.username:
            client.username_pw_set(settings.username, settings.password)
        if settings.tls:
            client.tls_set()
        client.on_connect = self._on_connect
        client.on_message = self._on_paho_message
        client.on_disconnect = self._on_disconnect
        return client

    # paho callbacks, run on the network thread

    def _on_connect(self, client: mqtt.Client, _userdata: Any, _flags: Any, reason_code: Any, _properties: Any) -> None:
        if reason_code.is_failure:
            self._logger.warning("MQTT connect refused: %s", reason_code)
            return
        if self._topic:
            self._logger.debug("MQTT connected, subscribing topic=%s", self._topic)
            client.subscribe(self._topic, qos=1)

    def _on_paho_message(self, _client: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
        self.handle_raw(msg.topic, msg.payload)

    def _on_disconnect(
        self,
        _client: mqtt.Client,
        _userdata: Any,
        _flags: Any,
        reason_code: Any,
        _properties: Any,
    ) -> None:
        if self._running:
            self._logger.debug("MQTT disconnected: %s", reason_code)
