"""Domain models for session bookings."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

SESSION_TYPES = (
    "Portrait",
    "Editorial / Fashion",
    "Event",
    "Wedding",
    "Product",
)
DEFAULT_SESSION_TYPE = SESSION_TYPES[0]


class BookingStatus(StrEnum):
    """Lifecycle states of a booking record."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class Booking:
    """Represents a persisted booking request."""

    id: str
    name: str
    email: str
    date: str
    type: str
    message: str
    status: BookingStatus
    created_at: datetime


@dataclass
class BookingForm:
    """Mutable buffer behind the public booking form."""

    name: str = ""
    email: str = ""
    date: str = ""
    type: str = DEFAULT_SESSION_TYPE
    message: str = ""

    def missing_fields(self) -> list[str]:
        """Return the names of required fields left blank."""
        required = {"name": self.name, "email": self.email, "date": self.date}
        return [key for key, value in required.items() if not value.strip()]
