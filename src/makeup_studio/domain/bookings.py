"""Domain models for bookings and contact submissions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(Enum):
    """Lifecycle status of a booking request."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


@dataclass(frozen=True)
class BookingRequest:
    """Booking details submitted from the scheduling page."""

    client_name: str
    client_email: str
    client_phone: str
    service_id: str
    booking_date: str
    start_time: str
    notes: str = ""


@dataclass(frozen=True)
class Booking:
    """A persisted booking row."""

    id: str
    client_name: str
    client_email: str
    client_phone: str
    service_id: str
    service_name: str
    booking_date: str
    start_time: str
    end_time: str
    notes: str
    client_id: str | None
    status: BookingStatus
    created_at: datetime | None


@dataclass(frozen=True)
class ContactSubmission:
    """A message sent through the public contact form."""

    name: str
    email: str
    message: str
    phone: str = ""
    subject: str = ""
