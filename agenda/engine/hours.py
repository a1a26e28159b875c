"""
Operating-hours resolver.

Turns a calendar date and the weekly schedule table into the day's open
window, expressed in minutes since midnight ("09:00" -> 540).
"""

import logging
from datetime import date
from typing import Iterable, Optional

from agenda.engine.errors import ScheduleConfigError
from agenda.schemas.schedule_schema import OperatingSchedule, OperatingWindow

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


def parse_hhmm(value: Optional[str], day_of_week: Optional[int] = None) -> int:
    """Parse an "HH:MM" (or "HH:MM:SS") wall-clock string into minutes since midnight.

    Raises:
        ScheduleConfigError: If the value is missing or not a valid time of day.
    """
    if value is None or not str(value).strip():
        raise ScheduleConfigError("Missing time value", day_of_week)

    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isascii() and p.isdigit() for p in parts):
        raise ScheduleConfigError(f"Unparseable time {value!r}", day_of_week)

    hour, minute = int(parts[0]), int(parts[1])
    if not 0 <= hour < HOURS_PER_DAY or not 0 <= minute < MINUTES_PER_HOUR:
        raise ScheduleConfigError(f"Time out of range {value!r}", day_of_week)
    return hour * MINUTES_PER_HOUR + minute


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM"."""
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def weekday_index(day: date) -> int:
    """Day of week with 0=Sunday, matching the schedule table."""
    return (day.weekday() + 1) % 7


def build_window(row: OperatingSchedule) -> OperatingWindow:
    """Parse and validate an open schedule row into an OperatingWindow."""
    dow = row.day_of_week
    open_minutes = parse_hhmm(row.open_time, dow)
    close_minutes = parse_hhmm(row.close_time, dow)
    if open_minutes >= close_minutes:
        raise ScheduleConfigError(
            f"Opening time {row.open_time} must be before closing time {row.close_time}", dow
        )

    has_start = bool(row.break_start)
    has_end = bool(row.break_end)
    if has_start != has_end:
        raise ScheduleConfigError("Break needs both a start and an end", dow)
    if not has_start:
        return OperatingWindow(open_minutes, close_minutes)

    break_start = parse_hhmm(row.break_start, dow)
    break_end = parse_hhmm(row.break_end, dow)
    if break_start >= break_end:
        raise ScheduleConfigError(
            f"Break start {row.break_start} must be before break end {row.break_end}", dow
        )
    if break_start < open_minutes or break_end > close_minutes:
        raise ScheduleConfigError(
            f"Break {row.break_start}-{row.break_end} lies outside "
            f"{row.open_time}-{row.close_time}",
            dow,
        )
    return OperatingWindow(open_minutes, close_minutes, break_start, break_end)


def validate_schedule(row: OperatingSchedule) -> None:
    """Check a schedule row before it is saved. Closed rows are always valid."""
    if row.is_open:
        build_window(row)


def find_day_schedule(
    day: date, schedules: Iterable[OperatingSchedule]
) -> Optional[OperatingSchedule]:
    """Business-level row for the weekday of ``day``, if any."""
    dow = weekday_index(day)
    for row in schedules:
        if row.day_of_week == dow and row.professional_id is None:
            return row
    return None


def resolve_operating_window(
    day: date, schedules: Iterable[OperatingSchedule]
) -> Optional[OperatingWindow]:
    """Resolve the open window for ``day``. Returns None when the business is closed."""
    row = find_day_schedule(day, schedules)
    if row is None or not row.is_open:
        logger.debug("Closed on %s (weekday %d)", day, weekday_index(day))
        return None
    return build_window(row)
