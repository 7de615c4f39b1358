"""Booking requests and contact form submissions."""

import logging
from dataclasses import asdict, dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol

from makeup_studio.domain.bookings import (
    Booking,
    BookingRequest,
    BookingStatus,
    ContactSubmission,
)
from makeup_studio.errors import ValidationError
from makeup_studio.services.content import ServiceRepository

logger = logging.getLogger(__name__)

_MINUTES_PER_DAY = 24 * 60
BOOKING_WINDOW_DAYS = 30
_SUNDAY = 6


class BookingRepository(Protocol):
    """Persistence interface for bookings."""

    def create_booking(self, payload: dict[str, object]) -> Booking:
        """Insert a booking and return it."""

    def list_bookings(self, limit: int) -> list[Booking]:
        """Return recent bookings, newest first."""

    def update_booking(self, booking_id: str, payload: dict[str, object]) -> Booking:
        """Update a booking and return it."""


class ContactRepository(Protocol):
    """Persistence interface for contact submissions."""

    def create_submission(self, payload: dict[str, object]) -> None:
        """Insert a contact submission."""


class ContactRelay(Protocol):
    """External form relay that forwards contact messages."""

    async def submit(self, fields: dict[str, str]) -> None:
        """Forward form fields; raise ContactRelayError on rejection."""


def parse_clock_time(value: str) -> int:
    """Parse ``HH:MM`` into minutes after midnight."""
    hours, sep, minutes = value.strip().partition(":")
    if not sep or not hours.isdigit() or not minutes.isdigit():
        raise ValidationError("start_time", "Please choose a start time (HH:MM)")
    hour, minute = int(hours), int(minutes)
    if hour > 23 or minute > 59:  # noqa: PLR2004
        raise ValidationError("start_time", "Please choose a valid start time")
    return hour * 60 + minute


def derive_end_time(start_time: str, duration_minutes: int) -> str:
    """Return the ``HH:MM`` end time for a start time plus a duration."""
    end = (parse_clock_time(start_time) + duration_minutes) % _MINUTES_PER_DAY
    return f"{end // 60:02d}:{end % 60:02d}"


def _require(value: str, field_name: str, message: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(field_name, message)
    return cleaned


def _require_email(value: str, field_name: str) -> str:
    cleaned = _require(value, field_name, "Please enter your email")
    if "@" not in cleaned:
        raise ValidationError(field_name, "Please enter a valid email address")
    return cleaned


@dataclass
class BookingService:
    """Create and manage booking requests."""

    repository: BookingRepository
    service_repository: ServiceRepository

    def create_booking(
        self, request: BookingRequest, client_id: str | None = None
    ) -> Booking:
        """Validate a booking request, derive its end time and persist it."""
        name = _require(request.client_name, "client_name", "Please enter your name")
        email = _require_email(request.client_email, "client_email")
        phone = _require(
            request.client_phone, "client_phone", "Please enter your phone number"
        )
        service_id = _require(
            request.service_id, "service_id", "Please choose a service"
        )
        try:
            booking_date = date.fromisoformat(request.booking_date.strip())
        except ValueError as exc:
            raise ValidationError("booking_date", "Please choose a date") from exc
        start_time = request.start_time.strip()
        parse_clock_time(start_time)

        service = self.service_repository.get_service(service_id)
        if service is None:
            raise ValidationError("service_id", "Please choose an available service")

        payload: dict[str, object] = {
            "client_name": name,
            "client_email": email,
            "client_phone": phone,
            "service_id": service.id,
            "service_name": service.title,
            "booking_date": booking_date.isoformat(),
            "start_time": start_time,
            "end_time": derive_end_time(start_time, service.duration),
            "notes": request.notes.strip(),
            "status": BookingStatus.PENDING.value,
        }
        if client_id:
            payload["client_id"] = client_id
        booking = self.repository.create_booking(payload)
        logger.info(
            "Booking %s created for %s on %s",
            booking.id,
            service.title,
            booking.booking_date,
        )
        return booking

    def list_bookings(self, limit: int = 50) -> list[Booking]:
        """Return recent bookings."""
        return self.repository.list_bookings(limit)

    def update_status(self, booking_id: str, status: BookingStatus) -> Booking:
        """Set the status of a booking."""
        return self.repository.update_booking(
            booking_id,
            {
                "status": status.value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
        )

    def cancel(self, booking_id: str) -> Booking:
        """Cancel a booking."""
        return self.update_status(booking_id, BookingStatus.CANCELLED)


def next_days(start: date, count: int) -> list[date]:
    """Return ``count`` consecutive days beginning the day after ``start``."""
    return [start + timedelta(days=offset) for offset in range(1, count + 1)]


def bookable_dates(today: date, count: int = BOOKING_WINDOW_DAYS) -> list[date]:
    """Dates offered on the scheduling page; the studio is closed on Sundays."""
    return [day for day in next_days(today, count) if day.weekday() != _SUNDAY]


@dataclass
class ContactService:
    """Accept contact form messages."""

    repository: ContactRepository
    relay: ContactRelay | None = None

    async def submit(self, submission: ContactSubmission) -> None:
        """Validate a message and hand it to the relay or the repository."""
        cleaned = ContactSubmission(
            name=_require(submission.name, "name", "Please enter your name"),
            email=_require_email(submission.email, "email"),
            message=_require(submission.message, "message", "Please enter a message"),
            phone=submission.phone.strip(),
            subject=submission.subject.strip(),
        )
        fields = asdict(cleaned)
        if self.relay is not None:
            await self.relay.submit(fields)
            logger.info("Contact submission relayed")
            return
        self.repository.create_submission(dict(fields))
        logger.info("Contact submission stored")
