from agenda.engine.committer import (
    change_status,
    commit_booking,
    purge_cancelled,
    reschedule_appointment,
)
from agenda.engine.conflicts import find_conflict, intervals_overlap
from agenda.engine.errors import (
    BookingError,
    ClosedDayError,
    CommitError,
    ConflictError,
    InvalidRequestError,
    InvalidTransitionError,
    OutsideHoursError,
    ScheduleConfigError,
    StaleSlotError,
)
from agenda.engine.hours import resolve_operating_window
from agenda.engine.lifecycle import StatusAction
from agenda.engine.locks import ProfessionalLocks
from agenda.engine.slots import generate_slots

__all__ = [
    "resolve_operating_window", "find_conflict", "intervals_overlap",
    "generate_slots", "commit_booking", "reschedule_appointment",
    "change_status", "purge_cancelled", "StatusAction", "ProfessionalLocks",
    "BookingError", "ScheduleConfigError", "ConflictError", "ClosedDayError",
    "StaleSlotError", "OutsideHoursError", "CommitError", "InvalidRequestError",
    "InvalidTransitionError",
]
