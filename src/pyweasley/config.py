"""Tracker configuration for pyweasley."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyweasley.exceptions import WeasleyConfigError

DEFAULT_LOCATIONS: tuple[str, ...] = (
    "Home",
    "School",
    "Work",
    "Mortal Peril",
    "Jail",
    "Food",
    "Traveling",
)


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_list(value: str) -> tuple[str, ...]:
    # Names are compared exactly later on; only the separator padding is dropped.
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise WeasleyConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class WeasleyConfig:
    """Tracker configuration.

    Parameters
    ----------
    locations : tuple of str
        Named places a person can be at. ``Lost`` and ``Traveling`` are
        always added to the registry, whether listed here or not.
    people : tuple of str
        Identifiers of the people to track. Duplicates collapse to the
        first occurrence.
    debug : bool
        Emit DEBUG diagnostics for discarded events (unknown person,
        unknown region, malformed payload).
    notify_unchanged : bool
        Fire the change signal for every accepted event, even when the
        location did not actually change. Set to ``False`` to only notify
        on real changes.
    unique_id : str
        Suffix for the MQTT client id, so several trackers can share a broker.
    mqtt_enabled : bool
        Start the MQTT listener when the tracker is entered.
    mqtt_host : str
        Broker host name.
    mqtt_port : int
        Broker port.
    mqtt_topic : str
        Topic (filter) carrying presence event payloads.
    mqtt_username : str or None
        Broker user name.
    mqtt_password : str or None
        Broker password.
    mqtt_tls : bool
        Connect using TLS with the system CA bundle.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    """

    locations: tuple[str, ...] = DEFAULT_LOCATIONS
    people: tuple[str, ...] = ()
    debug: bool = False
    notify_unchanged: bool = True
    unique_id: str = "default"
    mqtt_enabled: bool = False
    mqtt_host: str = "localhost"
    mqtt_port: int = 8883
    mqtt_topic: str = "weasleyclock/events"
    mqtt_username: str | None = None
    mqtt_password: str | None = None
    mqtt_tls: bool = True
    mqtt_keepalive: int = 120

    def __post_init__(self) -> None:
        # Accept any sequence from callers but store immutable tuples.
        object.__setattr__(self, "locations", tuple(self.locations))
        object.__setattr__(self, "people", tuple(self.people))

    @property
    def mqtt_client_id(self) -> str:
        return f"pyweasley_{self.unique_id}"

    @classmethod
    def from_env(cls, **overrides: Any) -> WeasleyConfig:
        """Create configuration from environment variables.

        Reads ``WEASLEY_LOCATIONS`` and ``WEASLEY_PEOPLE`` (comma-separated)
        plus the optional ``WEASLEY_*`` switches below. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        WeasleyConfig
            Populated configuration.

        Raises
        ------
        WeasleyConfigError
            When a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        locations_env = env.get("WEASLEY_LOCATIONS")
        if locations_env is not None:
            config_kwargs["locations"] = _env_list(locations_env)
        people_env = env.get("WEASLEY_PEOPLE")
        if people_env is not None:
            config_kwargs["people"] = _env_list(people_env)

        _ENV_STR_MAP = {
            "WEASLEY_UNIQUE_ID": "unique_id",
            "WEASLEY_MQTT_HOST": "mqtt_host",
            "WEASLEY_MQTT_TOPIC": "mqtt_topic",
            "WEASLEY_MQTT_USERNAME": "mqtt_username",
            "WEASLEY_MQTT_PASSWORD": "mqtt_password",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_BOOL_MAP = {
            "WEASLEY_DEBUG": ("debug", False),
            "WEASLEY_NOTIFY_UNCHANGED": ("notify_unchanged", True),
            "WEASLEY_MQTT_ENABLED": ("mqtt_enabled", False),
            "WEASLEY_MQTT_TLS": ("mqtt_tls", True),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        port_env = env.get("WEASLEY_MQTT_PORT")
        if port_env is not None and "mqtt_port" not in overrides:
            config_kwargs["mqtt_port"] = _env_int("WEASLEY_MQTT_PORT", port_env)

        keepalive_env = env.get("WEASLEY_MQTT_KEEPALIVE")
        if keepalive_env is not None and "mqtt_keepalive" not in overrides:
            config_kwargs["mqtt_keepalive"] = _env_int("WEASLEY_MQTT_KEEPALIVE", keepalive_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
