"""Enums for model fields."""

from enum import Enum


class StationStatus(str, Enum):
    """Operational status of a charging station."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
