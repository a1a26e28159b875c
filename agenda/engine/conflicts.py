"""
Conflict detection over a snapshot of appointments.

Intervals are half-open, [start, end): an appointment ending at 10:00
and another starting at 10:00 do not conflict. Conflicts are only ever
evaluated within one professional's timeline, and cancelled appointments
never block.

The scan is linear in the snapshot size, which is bounded by one
business's bookings for the day being checked.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional, TypeVar

from agenda.engine.errors import InvalidRequestError
from agenda.schemas.appointment_schema import Appointment

logger = logging.getLogger(__name__)

T = TypeVar("T", int, datetime)


def intervals_overlap(a_start: T, a_end: T, b_start: T, b_end: T) -> bool:
    """True when half-open intervals [a_start, a_end) and [b_start, b_end) intersect."""
    return a_start < b_end and a_end > b_start


def find_conflict(
    appointments: Iterable[Appointment],
    professional_id: str,
    start: datetime,
    duration_minutes: int,
    exclude_id: Optional[str] = None,
) -> Optional[Appointment]:
    """Return the first appointment that collides with the candidate range, or None.

    Args:
        appointments: Snapshot to scan, in any order.
        professional_id: Only this professional's appointments are considered.
        start: Candidate start, naive local time.
        duration_minutes: Candidate length, must be positive.
        exclude_id: Appointment to ignore, used when re-checking an edit.

    Raises:
        InvalidRequestError: If ``duration_minutes`` is not positive.
    """
    if duration_minutes <= 0:
        raise InvalidRequestError(f"Duration must be positive, got {duration_minutes}")

    end = start + timedelta(minutes=duration_minutes)
    for existing in appointments:
        if exclude_id is not None and existing.id == exclude_id:
            continue
        if existing.is_cancelled:
            continue
        if existing.professional_id != professional_id:
            continue
        if intervals_overlap(start, end, existing.start_time, existing.end_time):
            logger.debug(
                "Candidate %s-%s collides with %s (%s-%s)",
                f"{start:%H:%M}", f"{end:%H:%M}", existing.id,
                f"{existing.start_time:%H:%M}", f"{existing.end_time:%H:%M}",
            )
            return existing
    return None


def has_conflict(
    appointments: Iterable[Appointment],
    professional_id: str,
    start: datetime,
    duration_minutes: int,
    exclude_id: Optional[str] = None,
) -> bool:
    return find_conflict(
        appointments, professional_id, start, duration_minutes, exclude_id
    ) is not None
