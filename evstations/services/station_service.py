"""Station service for charging station CRUD."""

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from evstations.models.enums import StationStatus
from evstations.models.station import Station
from evstations.services.exceptions import NotFoundError, ValidationError
from evstations.services.ownership import require_owner

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "latitude", "longitude", "power_output", "connector_type")
UPDATABLE_FIELDS = ("name", "latitude", "longitude", "status", "power_output", "connector_type")

# Largest id an INTEGER primary key can hold
MAX_STATION_ID = 2**31 - 1


def parse_station_id(station_id: str | int) -> int | None:
    """Return the integer id, or None if it cannot name a station."""
    try:
        value = int(station_id)
    except (TypeError, ValueError):
        return None
    return value if 0 < value <= MAX_STATION_ID else None


class StationService:
    """Service for station-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, caller_id: int, data: dict[str, Any]) -> Station:
        """Create a station owned by the caller.

        ``data`` holds flat column values (``latitude``/``longitude`` rather
        than a nested location). ``status`` defaults to Active.
        """
        missing = [field for field in REQUIRED_FIELDS if data.get(field) is None]
        if missing:
            raise ValidationError(f"{missing[0]} is required", field=missing[0])

        station = Station(
            name=data["name"],
            latitude=data["latitude"],
            longitude=data["longitude"],
            status=StationStatus(data.get("status") or StationStatus.ACTIVE),
            power_output=data["power_output"],
            connector_type=data["connector_type"],
            created_by=caller_id,
        )
        self.db.add(station)
        self.db.commit()
        self.db.refresh(station)

        logger.info(f"User {caller_id} created station {station.id}")
        return station

    def list_all(self) -> list[Station]:
        """All stations, newest first."""
        return self.db.query(Station).order_by(Station.created_at.desc(), Station.id.desc()).all()

    def list_for_owner(self, owner_id: int) -> list[Station]:
        """Stations created by one user, newest first."""
        return (
            self.db.query(Station)
            .filter(Station.created_by == owner_id)
            .order_by(Station.created_at.desc(), Station.id.desc())
            .all()
        )

    def get(self, station_id: str | int) -> Station:
        """Get a station by id; malformed ids are treated as unknown."""
        parsed = parse_station_id(station_id)
        station = self.db.get(Station, parsed) if parsed is not None else None
        if station is None:
            raise NotFoundError("Charging station not found")
        return station

    def update(self, caller_id: int, station_id: str | int, data: dict[str, Any]) -> Station:
        """Apply the provided fields to a station the caller owns."""
        station = self.get(station_id)
        require_owner(station, caller_id)

        for field in UPDATABLE_FIELDS:
            value = data.get(field)
            if value is None:
                continue
            if field == "status":
                value = StationStatus(value)
            setattr(station, field, value)
        station.updated_at = func.now()

        self.db.commit()
        self.db.refresh(station)

        logger.info(f"User {caller_id} updated station {station.id}")
        return station

    def delete(self, caller_id: int, station_id: str | int) -> None:
        """Remove a station the caller owns."""
        station = self.get(station_id)
        require_owner(station, caller_id)

        self.db.delete(station)
        self.db.commit()
        logger.info(f"User {caller_id} deleted station {station_id}")
