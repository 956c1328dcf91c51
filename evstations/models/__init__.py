"""SQLAlchemy models."""

from evstations.models.station import Station
from evstations.models.user import User

__all__ = [
    "User",
    "Station",
]
