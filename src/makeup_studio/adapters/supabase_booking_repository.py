"""Supabase repositories for bookings and contact submissions."""

from dataclasses import dataclass

from supabase import Client

from makeup_studio.adapters.supabase_query import (
    first_row,
    optional_text,
    parse_timestamp,
    run_query,
)
from makeup_studio.domain.bookings import Booking, BookingStatus
from makeup_studio.services.bookings import BookingRepository, ContactRepository


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for the ``bookings`` table."""

    client: Client

    def create_booking(self, payload: dict[str, object]) -> Booking:
        """Insert a booking and return it."""
        rows = run_query(
            self.client.table("bookings").insert(payload), "Create booking"
        )
        return _parse_booking(first_row(rows, "Create booking"))

    def list_bookings(self, limit: int) -> list[Booking]:
        """Return recent bookings, newest first."""
        rows = run_query(
            self.client.table("bookings")
            .select("*")
            .order("created_at", desc=True)
            .limit(limit),
            "List bookings",
        )
        return [_parse_booking(row) for row in rows]

    def update_booking(self, booking_id: str, payload: dict[str, object]) -> Booking:
        """Update a booking and return it."""
        rows = run_query(
            self.client.table("bookings").update(payload).eq("id", booking_id),
            "Update booking",
        )
        return _parse_booking(first_row(rows, "Update booking"))


@dataclass
class SupabaseContactRepository(ContactRepository):
    """Supabase implementation for the ``contact_submissions`` table."""

    client: Client

    def create_submission(self, payload: dict[str, object]) -> None:
        """Insert a contact submission."""
        run_query(
            self.client.table("contact_submissions").insert(payload),
            "Store contact submission",
        )


def _parse_booking(row: dict[str, object]) -> Booking:
    return Booking(
        id=str(row["id"]),
        client_name=str(row.get("client_name") or ""),
        client_email=str(row.get("client_email") or ""),
        client_phone=str(row.get("client_phone") or ""),
        service_id=str(row.get("service_id") or ""),
        service_name=str(row.get("service_name") or ""),
        booking_date=str(row.get("booking_date") or ""),
        start_time=str(row.get("start_time") or ""),
        end_time=str(row.get("end_time") or ""),
        notes=str(row.get("notes") or ""),
        client_id=optional_text(row.get("client_id")),
        status=BookingStatus(row.get("status") or BookingStatus.PENDING.value),
        created_at=parse_timestamp(row.get("created_at")),
    )
