"""Normalization helpers for raw bridge payloads."""

from __future__ import annotations

from typing import Any

# The bridge names its notifications "<prefix><KIND>".
NOTIFICATION_PREFIX = "MMM-WeasleyClock-"


def normalize_kind(value: Any) -> str | None:
    """Return the bare event kind (``TRAVELING``, ``UPDATE``, ...).

    Accepts both the bare kind and the bridge's prefixed notification name.
    Kinds are upper-cased; anything that is not a non-empty string yields
    ``None``.
    """
    if not isinstance(value, str):
        return None
    kind = value.strip()
    if kind.startswith(NOTIFICATION_PREFIX):
        kind = kind[len(NOTIFICATION_PREFIX) :]
    kind = kind.upper()
    return kind or None
