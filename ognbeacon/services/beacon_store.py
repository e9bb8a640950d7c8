"""In-memory latest-state store for decoded beacons."""

from __future__ import annotations

from threading import Lock
from typing import Callable, Generic, TypeVar

from ognbeacon.models.beacon import AircraftBeacon, ReceiverBeacon, merge

T = TypeVar("T")


def _keep_newest(old: T, fresh: T) -> T:
    return fresh


class BeaconStore(Generic[T]):
    """Keep one record per key, combining each new record with the stored one."""

    def __init__(
        self,
        key: Callable[[T], str],
        combine: Callable[[T, T], T] = _keep_newest,
    ) -> None:
        self._key = key
        self._combine = combine
        self._lock = Lock()
        self._records: dict[str, T] = {}

    def __len__(self) -> int:
        return len(self._records)

    def upsert(self, record: T) -> T:
        """Store ``record`` and return the resulting state for its key."""

        key = self._key(record)
        with self._lock:
            existing = self._records.get(key)
            stored = record if existing is None else self._combine(existing, record)
            self._records[key] = stored
        return stored

    def get(self, key: str) -> T | None:
        return self._records.get(key)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


def aircraft_store() -> BeaconStore[AircraftBeacon]:
    return BeaconStore(key=lambda beacon: beacon.tracker_id, combine=merge)


def receiver_store() -> BeaconStore[ReceiverBeacon]:
    return BeaconStore(key=lambda beacon: beacon.receiver_name)


__all__ = ["BeaconStore", "aircraft_store", "receiver_store"]
