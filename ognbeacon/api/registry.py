"""FlarmNet registry lookup and reload endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ognbeacon.models import AircraftDescriptor
from ognbeacon.services import DeviceRegistry, get_device_registry

router = APIRouter(prefix="/api/v1/registry", tags=["registry"])


@router.get(
    "/{device_id}",
    response_model=AircraftDescriptor,
    summary="Look up a device",
)
def lookup_device(
    device_id: str, registry: DeviceRegistry = Depends(get_device_registry)
) -> AircraftDescriptor:
    descriptor = registry.lookup(device_id)
    if descriptor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown device")
    return descriptor


@router.post("/reload", summary="Reload the registry file")
def reload_registry(
    registry: DeviceRegistry = Depends(get_device_registry),
) -> dict[str, int]:
    """Fetch the registry file again; failures keep the current entries."""

    loaded = registry.reload()
    return {"loaded": loaded, "entries": len(registry)}
