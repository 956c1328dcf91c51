"""Ownership rule for mutating owned resources."""

from enum import Enum
from typing import Protocol

from evstations.services.exceptions import ForbiddenError


class Owned(Protocol):
    created_by: int


class Decision(str, Enum):
    """Outcome of an ownership check."""

    ALLOWED = "allowed"
    DENIED = "denied"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOWED


def authorize(resource: Owned, caller_id: int) -> Decision:
    """Allow only the user who created the resource."""
    if resource.created_by != caller_id:
        return Decision.DENIED
    return Decision.ALLOWED


def require_owner(resource: Owned, caller_id: int) -> None:
    """Raise ForbiddenError unless the caller owns the resource."""
    if not authorize(resource, caller_id).allowed:
        raise ForbiddenError()
