"""Charging station API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from evstations.api.dependencies import get_current_user, get_station_service
from evstations.models.user import User
from evstations.schemas.auth import MessageResponse
from evstations.schemas.station import StationCreate, StationResponse, StationUpdate
from evstations.services.station_service import StationService

router = APIRouter(prefix="/api/stations", tags=["stations"])


@router.post("", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
def create_station(
    station_data: StationCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    station_service: Annotated[StationService, Depends(get_station_service)],
):
    """Create a charging station owned by the current user."""
    return station_service.create(current_user.id, station_data.to_columns())


@router.get("", response_model=list[StationResponse])
def get_stations(
    current_user: Annotated[User, Depends(get_current_user)],
    station_service: Annotated[StationService, Depends(get_station_service)],
):
    """Get all charging stations, newest first."""
    return station_service.list_all()


@router.get("/mine", response_model=list[StationResponse])
def get_my_stations(
    current_user: Annotated[User, Depends(get_current_user)],
    station_service: Annotated[StationService, Depends(get_station_service)],
):
    """Get the stations created by the current user."""
    return station_service.list_for_owner(current_user.id)


# Ids are taken as strings so a malformed id reads as "not found" rather than a 400
@router.get("/{station_id}", response_model=StationResponse)
def get_station(
    station_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    station_service: Annotated[StationService, Depends(get_station_service)],
):
    """Get a specific charging station."""
    return station_service.get(station_id)


@router.put("/{station_id}", response_model=StationResponse)
def update_station(
    station_id: str,
    station_data: StationUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    station_service: Annotated[StationService, Depends(get_station_service)],
):
    """Update a charging station (owner only)."""
    return station_service.update(current_user.id, station_id, station_data.to_columns())


@router.delete("/{station_id}", response_model=MessageResponse)
def delete_station(
    station_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    station_service: Annotated[StationService, Depends(get_station_service)],
):
    """Delete a charging station (owner only)."""
    station_service.delete(current_user.id, station_id)
    return MessageResponse(msg="Charging station removed")
