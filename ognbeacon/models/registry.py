"""Aircraft descriptors published by the FlarmNet device registry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AircraftDescriptor(BaseModel):
    """Registration details for one tracker device."""

    model_config = ConfigDict(frozen=True)

    registration: str = Field(default="", description="Aircraft registration")
    competition_id: str = Field(default="", description="Competition number")
    owner: str = Field(default="", description="Pilot or owner")
    home_base: str = Field(default="", description="Home airfield")
    model: str = Field(default="", description="Aircraft model")
    frequency: str = Field(default="", description="Radio frequency")


__all__ = ["AircraftDescriptor"]
