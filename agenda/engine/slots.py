"""
Slot generation for one professional on one date.

Start times are enumerated at a fixed cadence from opening time. A
start is offered when the whole chain of services fits before closing,
stays clear of the break, is not in the past, and collides with none of
the professional's existing appointments.

Usage:
    slots = generate_slots(
        appointments, schedules, "pro-1", date(2025, 3, 18), [haircut], now=datetime.now()
    )
    # ["09:00", "09:30", ...]
"""

import logging
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence

from agenda.config import settings
from agenda.engine.conflicts import find_conflict
from agenda.engine.errors import InvalidRequestError
from agenda.engine.hours import MINUTES_PER_HOUR, format_minutes, resolve_operating_window
from agenda.schemas.appointment_schema import Appointment
from agenda.schemas.catalog_schema import Service
from agenda.schemas.schedule_schema import OperatingSchedule

logger = logging.getLogger(__name__)


def total_duration(services: Sequence[Service]) -> int:
    """Summed duration of a service chain.

    Raises:
        InvalidRequestError: If no services were given.
    """
    if not services:
        raise InvalidRequestError("At least one service is required")
    return sum(s.duration_minutes for s in services)


def at_minutes(day: date, minutes: int) -> datetime:
    """Concrete naive datetime for ``minutes`` since midnight on ``day``."""
    return datetime.combine(day, time(minutes // MINUTES_PER_HOUR, minutes % MINUTES_PER_HOUR))


def generate_slots(
    appointments: Iterable[Appointment],
    schedules: Iterable[OperatingSchedule],
    professional_id: str,
    day: date,
    services: Sequence[Service],
    now: datetime,
    cadence_minutes: Optional[int] = None,
) -> list[str]:
    """Enumerate bookable "HH:MM" start times in ascending order.

    A closed day yields an empty list rather than an error.

    Raises:
        InvalidRequestError: If no services were given or the cadence is not positive.
        ScheduleConfigError: If the day's schedule row is malformed.
    """
    duration = total_duration(services)
    cadence = cadence_minutes if cadence_minutes is not None else settings.scheduling.slot_cadence_minutes
    if cadence <= 0:
        raise InvalidRequestError(f"Slot cadence must be positive, got {cadence}")

    window = resolve_operating_window(day, schedules)
    if window is None:
        return []

    snapshot = list(appointments)
    slots: list[str] = []
    for t in range(window.open_minutes, window.close_minutes - duration + 1, cadence):
        if window.overlaps_break(t, t + duration):
            continue

        candidate = at_minutes(day, t)
        if candidate < now:
            continue

        if find_conflict(snapshot, professional_id, candidate, duration) is None:
            slots.append(format_minutes(t))

    logger.debug(
        "%d slots for professional %s on %s (%d min)",
        len(slots), professional_id, day, duration,
    )
    return slots
