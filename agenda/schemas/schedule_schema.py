"""Weekly operating-hours records and the resolved daily window."""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field


class OperatingSchedule(BaseModel):
    """One weekday row of a business's operating hours.

    ``day_of_week`` counts from 0=Sunday to 6=Saturday. Times are
    "HH:MM" wall-clock strings. ``professional_id`` marks a
    professional-level override row; the resolver only reads
    business-level rows.
    """

    business_id: str = ""
    professional_id: Optional[str] = None
    day_of_week: int = Field(ge=0, le=6)
    is_open: bool = True
    open_time: Optional[str] = "09:00"
    close_time: Optional[str] = "18:00"
    break_start: Optional[str] = None
    break_end: Optional[str] = None


@dataclass(frozen=True)
class OperatingWindow:
    """Open hours for a single date, in minutes since midnight."""

    open_minutes: int
    close_minutes: int
    break_start: Optional[int] = None
    break_end: Optional[int] = None

    @property
    def has_break(self) -> bool:
        return self.break_start is not None and self.break_end is not None

    def overlaps_break(self, start: int, end: int) -> bool:
        """True when [start, end) intersects the break interval."""
        if not self.has_break:
            return False
        return start < self.break_end and end > self.break_start  # type: ignore[operator]

    def contains(self, start: int, end: int) -> bool:
        return self.open_minutes <= start and end <= self.close_minutes
