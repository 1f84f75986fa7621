"""Booking request submission flow."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from photo_studio.domain.bookings import (
    SESSION_TYPES,
    Booking,
    BookingForm,
    BookingStatus,
)
from photo_studio.errors import (
    FormValidationError,
    InvalidTransitionError,
    SchemaMissingError,
    StoreWriteError,
)
from photo_studio.services.content import BookingStore, ContentRepository

logger = logging.getLogger(__name__)


class SubmissionStatus(StrEnum):
    """States of a single booking form submission."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class BookingWorkflow:
    """State machine for one booking form.

    idle -> submitting -> success | error; both outcomes return to idle
    through reset(). A successful reset clears the form, a reset after an
    error keeps the entered fields for another attempt.
    """

    store: BookingStore
    content: ContentRepository
    form: BookingForm = field(default_factory=BookingForm)
    status: SubmissionStatus = SubmissionStatus.IDLE
    error: str | None = None
    booking: Booking | None = None

    def submit(self) -> Booking | None:
        """Validate and send the form; return the booking on success."""
        if self.status is not SubmissionStatus.IDLE:
            raise InvalidTransitionError(
                f"Cannot submit while {self.status.value}",
                details={"status": self.status.value},
            )
        _validate(self.form)
        if self.content.schema_missing:
            raise SchemaMissingError("Bookings are not available yet")

        self.status = SubmissionStatus.SUBMITTING
        try:
            booking = self.store.insert_booking(self.form, BookingStatus.PENDING)
        except StoreWriteError as exc:
            logger.warning("Booking submission failed: %s", exc)
            self.status = SubmissionStatus.ERROR
            self.error = exc.message
            return None

        self.content.reload_bookings()
        self.booking = booking
        self.status = SubmissionStatus.SUCCESS
        logger.info("Booking %s received for %s", booking.id, booking.date)
        return booking

    def reset(self) -> None:
        """Re-arm the form for another submission."""
        if self.status is SubmissionStatus.SUBMITTING:
            raise InvalidTransitionError("Cannot reset while submitting")
        if self.status is SubmissionStatus.SUCCESS:
            self.form = BookingForm()
            self.booking = None
        self.error = None
        self.status = SubmissionStatus.IDLE


@dataclass
class BookingService:
    """Creates booking workflows bound to the shared store and cache."""

    store: BookingStore
    content: ContentRepository

    def new_workflow(self, form: BookingForm | None = None) -> BookingWorkflow:
        """Start a workflow, optionally pre-filled."""
        return BookingWorkflow(
            store=self.store,
            content=self.content,
            form=form or BookingForm(),
        )


def _validate(form: BookingForm) -> None:
    missing = form.missing_fields()
    if missing:
        raise FormValidationError(
            "Please fill in all required fields", details={"missing": missing}
        )
    if "@" not in form.email:
        raise FormValidationError(
            "Please enter a valid email address", details={"field": "email"}
        )
    if form.type not in SESSION_TYPES:
        raise FormValidationError(
            "Unknown session type",
            details={"type": form.type, "allowed": list(SESSION_TYPES)},
        )
