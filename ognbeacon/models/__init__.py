"""Pydantic models for the OGN beacon service."""

from .beacon import AddressType, AircraftBeacon, AircraftType, ReceiverBeacon, merge
from .registry import AircraftDescriptor

__all__ = [
    "AddressType",
    "AircraftBeacon",
    "AircraftDescriptor",
    "AircraftType",
    "ReceiverBeacon",
    "merge",
]
