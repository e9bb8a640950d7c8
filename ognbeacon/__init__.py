"""Decoder and HTTP service for OGN aircraft and receiver beacons."""

__version__ = "0.1.0"
