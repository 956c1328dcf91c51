"""User model."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from evstations.database import Base
from evstations.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and station ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    # SHA-256 hex digest of the emailed reset token, never the token itself
    reset_token_hash = Column(String(64), nullable=True, index=True)
    reset_token_expires_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    stations = relationship("Station", back_populates="owner", cascade="all, delete-orphan")

    def clear_reset_token(self) -> None:
        self.reset_token_hash = None
        self.reset_token_expires_at = None
