"""Station schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from evstations.models.enums import StationStatus
from evstations.schemas.base import RequestModel, ResponseModel


class Location(BaseModel):
    """Geographic position of a station."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class StationCreate(RequestModel):
    """Create a new station."""

    name: str = Field(..., min_length=1, max_length=255)
    location: Location
    status: StationStatus = StationStatus.ACTIVE
    power_output: float = Field(..., gt=0)
    connector_type: str = Field(..., min_length=1, max_length=100)

    def to_columns(self) -> dict[str, Any]:
        data = self.model_dump(exclude={"location"})
        data.update(self.location.model_dump())
        return data


class StationUpdate(RequestModel):
    """Update a station; omitted or null fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    location: Location | None = None
    status: StationStatus | None = None
    power_output: float | None = Field(None, gt=0)
    connector_type: str | None = Field(None, min_length=1, max_length=100)

    def to_columns(self) -> dict[str, Any]:
        data = self.model_dump(exclude={"location"}, exclude_none=True)
        if self.location is not None:
            data.update(self.location.model_dump())
        return data


class StationResponse(ResponseModel):
    """Station response."""

    id: int
    name: str
    location: Location
    status: StationStatus
    power_output: float
    connector_type: str
    created_by: int
    created_at: datetime
    updated_at: datetime
