"""API routers for the OGN beacon service."""

from fastapi import APIRouter

from .beacons import router as beacons_router
from .health import router as health_router
from .registry import router as registry_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(beacons_router)
api_router.include_router(registry_router)

__all__ = ["api_router"]
