"""Ingestion layer.

Adapters that receive presence payloads from the geofencing bridge and turn
them into typed :mod:`pyweasley.state.events`.
"""

__all__: list[str] = []
