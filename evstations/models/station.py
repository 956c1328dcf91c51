"""Charging station model."""

from sqlalchemy import Column, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from evstations.database import Base
from evstations.models.enums import StationStatus
from evstations.models.mixins import TimestampMixin


class Station(Base, TimestampMixin):
    """EV charging station, owned by the user who created it."""

    __tablename__ = "stations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    status = Column(
        Enum(StationStatus, values_callable=lambda e: [m.value for m in e], name="station_status"),
        nullable=False,
        default=StationStatus.ACTIVE,
    )
    power_output = Column(Float, nullable=False)  # kW
    connector_type = Column(String(100), nullable=False)
    created_by = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    owner = relationship("User", back_populates="stations")

    @property
    def location(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}
