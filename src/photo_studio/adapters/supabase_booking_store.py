"""Supabase-backed booking store."""

from dataclasses import dataclass

import httpx
from supabase import Client, PostgrestAPIError

from photo_studio.adapters.supabase_errors import (
    parse_timestamp,
    read_error,
    write_error,
)
from photo_studio.domain.bookings import Booking, BookingForm, BookingStatus
from photo_studio.services.content import BookingStore


@dataclass
class SupabaseBookingStore(BookingStore):
    """Supabase implementation for the bookings table."""

    client: Client

    def list_bookings(self) -> list[Booking]:
        """Return all bookings ordered by creation time, newest first."""
        try:
            response = (
                self.client.table("bookings")
                .select("id, name, email, date, type, message, status, created_at")
                .order("created_at", desc=True)
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise read_error(exc, "bookings") from exc
        return [_to_booking(row) for row in response.data or []]

    def insert_booking(self, form: BookingForm, status: BookingStatus) -> Booking:
        """Create a booking row and return it."""
        try:
            response = (
                self.client.table("bookings")
                .insert(
                    {
                        "name": form.name.strip(),
                        "email": form.email.strip(),
                        "date": form.date.strip(),
                        "type": form.type,
                        "message": form.message,
                        "status": status.value,
                    }
                )
                .execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as exc:
            raise write_error(exc, "bookings") from exc
        if not response.data:
            raise write_error(RuntimeError("no row returned"), "bookings")
        return _to_booking(response.data[0])


def _to_booking(row: dict[str, object]) -> Booking:
    raw_status = row.get("status")
    status = (
        BookingStatus(raw_status)
        if raw_status in {member.value for member in BookingStatus}
        else BookingStatus.PENDING
    )
    return Booking(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        date=str(row.get("date") or ""),
        type=str(row.get("type") or ""),
        message=str(row.get("message") or ""),
        status=status,
        created_at=parse_timestamp(row.get("created_at")),
    )
