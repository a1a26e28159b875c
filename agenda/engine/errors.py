"""Typed errors raised by the availability and conflict engine.

None of these is fatal. Callers catch ``BookingError`` at their boundary
and turn it into a message for staff or the customer.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from agenda.schemas.appointment_schema import Appointment


class BookingError(Exception):
    """Base class for every engine error."""

    code = "booking_error"


class InvalidRequestError(BookingError):
    """The request itself is malformed (no services, unknown ids, bad durations)."""

    code = "invalid_request"


class ScheduleConfigError(BookingError):
    """Operating-hours data is malformed or contradictory."""

    code = "schedule_config"

    def __init__(self, message: str, day_of_week: Optional[int] = None) -> None:
        if day_of_week is not None:
            message = f"{message} (day_of_week={day_of_week})"
        super().__init__(message)
        self.day_of_week = day_of_week


class ClosedDayError(BookingError):
    """The business does not operate on the requested date."""

    code = "closed_day"


class OutsideHoursError(BookingError):
    """The requested time range falls outside opening hours or into the break."""

    code = "outside_hours"


class ConflictError(BookingError):
    """The requested range collides with an existing appointment."""

    code = "conflict"

    def __init__(
        self,
        conflicting: "Appointment",
        customer_name: Optional[str] = None,
    ) -> None:
        self.conflicting = conflicting
        self.customer_name = customer_name or "Another customer"
        self.start_time: datetime = conflicting.start_time
        super().__init__(
            f"Conflict: {self.customer_name} already has an appointment "
            f"at {self.start_time:%H:%M}"
        )


class StaleSlotError(BookingError):
    """A previously offered slot is no longer bookable."""

    code = "stale_slot"


class CommitError(BookingError):
    """Persisting a booking failed; nothing was written."""

    code = "commit_failed"


class InvalidTransitionError(BookingError):
    """A status change is not allowed from the appointment's current status."""

    code = "invalid_transition"
