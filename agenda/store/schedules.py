"""Weekly operating-hours table per business."""

import logging
from typing import Optional

from agenda.engine.hours import validate_schedule
from agenda.schemas.schedule_schema import OperatingSchedule

logger = logging.getLogger(__name__)

SUNDAY = 0
SATURDAY = 6


def default_week(
    business_id: str,
    open_time: str = "09:00",
    close_time: str = "18:00",
    break_start: Optional[str] = None,
    break_end: Optional[str] = None,
) -> list[OperatingSchedule]:
    """Monday to Saturday with the same hours, closed on Sunday."""
    return [
        OperatingSchedule(
            business_id=business_id,
            day_of_week=dow,
            is_open=dow != SUNDAY,
            open_time=open_time,
            close_time=close_time,
            break_start=break_start,
            break_end=break_end,
        )
        for dow in range(SUNDAY, SATURDAY + 1)
    ]


class ScheduleBook:
    """Schedule provider. Rows are validated on the way in."""

    def __init__(self) -> None:
        self._rows: dict[tuple[str, Optional[str], int], OperatingSchedule] = {}

    def save(self, row: OperatingSchedule) -> OperatingSchedule:
        """Upsert a weekday row.

        Raises:
            ScheduleConfigError: If the row's times are malformed or contradictory.
        """
        validate_schedule(row)
        self._rows[(row.business_id, row.professional_id, row.day_of_week)] = row
        return row

    def save_week(self, rows: list[OperatingSchedule]) -> list[OperatingSchedule]:
        for row in rows:
            validate_schedule(row)
        saved = [self.save(row) for row in rows]
        logger.info("Saved %d schedule rows", len(saved))
        return saved

    def for_business(self, business_id: str) -> list[OperatingSchedule]:
        return sorted(
            (r for r in self._rows.values() if r.business_id == business_id),
            key=lambda r: r.day_of_week,
        )
