"""Service-layer helpers for the OGN beacon service."""

from .beacon_store import BeaconStore, aircraft_store, receiver_store
from .registry import DeviceRegistry, get_device_registry, parse_registry_line

__all__ = [
    "BeaconStore",
    "DeviceRegistry",
    "aircraft_store",
    "get_device_registry",
    "parse_registry_line",
    "receiver_store",
]
