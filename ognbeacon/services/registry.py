"""FlarmNet device registry: an id -> aircraft descriptor cache loaded from a remote file.

The FlarmNet file carries one device per line. Each line is hex-encoded
ASCII; decoded, a device record is exactly 86 characters of fixed-width
columns. Other lines (the version header, truncated records) are skipped.
"""

from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path
import threading
from types import MappingProxyType
from typing import Mapping
from urllib.parse import urlsplit

import httpx

from ognbeacon.config import settings
from ognbeacon.models.registry import AircraftDescriptor

logger = logging.getLogger("ognbeacon.registry")

REGISTRY_LINE_LENGTH = 86


def parse_registry_line(line: str) -> tuple[str, AircraftDescriptor] | None:
    """Decode one hex-encoded registry line into ``(device id, descriptor)``."""

    try:
        decoded = bytes.fromhex(line.strip()).decode("latin-1")
    except ValueError:
        return None
    if len(decoded) != REGISTRY_LINE_LENGTH:
        return None

    device_id = decoded[0:6].strip()
    descriptor = AircraftDescriptor(
        owner=decoded[6:26].strip(),
        home_base=decoded[27:48].strip(),
        model=decoded[48:69].strip(),
        registration=decoded[69:76].strip(),
        competition_id=decoded[76:79].strip(),
        frequency=decoded[79:86].strip(),
    )
    return device_id, descriptor


class DeviceRegistry:
    """Thread-safe cache of FlarmNet descriptors.

    Reloads are serialised; lookups never wait for a reload and may see a mix
    of old and new entries while one is running. Entries are replaced one key
    at a time and are never removed.
    """

    def __init__(
        self,
        *,
        source: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.source = source or settings.registry_url
        self.timeout = timeout or settings.registry_timeout
        self.transport = transport
        self._cache: dict[str, AircraftDescriptor] = {}
        self._reload_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    def lookup(self, device_id: str) -> AircraftDescriptor | None:
        return self._cache.get(device_id)

    def snapshot(self) -> Mapping[str, AircraftDescriptor]:
        """Return a read-only copy of the current cache."""

        return MappingProxyType(dict(self._cache))

    def reload(self) -> int:
        """Fetch the registry file and update the cache.

        Returns the number of descriptors loaded. A failed fetch is logged and
        leaves the cache as it was.
        """

        with self._reload_lock:
            try:
                content = self._fetch()
            except (httpx.HTTPError, OSError) as exc:
                logger.error("Failed to fetch device registry from %s: %s", self.source, exc)
                return 0

            loaded = 0
            for line in content.splitlines():
                entry = parse_registry_line(line)
                if entry is None:
                    continue
                device_id, descriptor = entry
                self._cache[device_id] = descriptor
                loaded += 1

        logger.info("Loaded %s device descriptors from %s", loaded, self.source)
        return loaded

    def _fetch(self) -> str:
        parts = urlsplit(self.source)
        if parts.scheme in {"http", "https"}:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(self.source)
                response.raise_for_status()
            return response.text
        path = parts.path if parts.scheme == "file" else self.source
        return Path(path).read_text(encoding="latin-1")


@lru_cache(maxsize=1)
def get_device_registry() -> DeviceRegistry:
    """Return the process-wide registry configured from settings."""

    return DeviceRegistry()


__all__ = [
    "DeviceRegistry",
    "REGISTRY_LINE_LENGTH",
    "get_device_registry",
    "parse_registry_line",
]
