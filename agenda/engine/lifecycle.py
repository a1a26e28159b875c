"""
Appointment status lifecycle.

Staff actions move an appointment through an explicit transition table:

    pending   --confirm-->  confirmed
    confirmed --complete--> completed
    pending   --cancel-->   cancelled
    confirmed --cancel-->   cancelled

Completed and cancelled are terminal. Status changes never touch the
start time or duration.

Usage:
    new_status = next_status(AppointmentStatus.PENDING, StatusAction.CONFIRM)
    assert new_status == AppointmentStatus.CONFIRMED
"""

import logging
from dataclasses import dataclass
from enum import Enum

from agenda.engine.errors import InvalidTransitionError
from agenda.schemas.appointment_schema import AppointmentStatus

logger = logging.getLogger(__name__)


class StatusAction(str, Enum):
    """Staff actions that change an appointment's status."""
    CONFIRM = "confirm"
    COMPLETE = "complete"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Transition:
    """A single valid status transition."""
    from_status: AppointmentStatus
    to_status: AppointmentStatus
    action: StatusAction


TRANSITIONS: list[Transition] = [
    Transition(AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED, StatusAction.CONFIRM),
    Transition(AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED, StatusAction.COMPLETE),
    Transition(AppointmentStatus.PENDING, AppointmentStatus.CANCELLED, StatusAction.CANCEL),
    Transition(AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED, StatusAction.CANCEL),
]

TERMINAL_STATUSES = frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED})


def valid_actions(status: AppointmentStatus) -> list[StatusAction]:
    """Return all actions valid from ``status``."""
    return [t.action for t in TRANSITIONS if t.from_status == status]


def is_terminal(status: AppointmentStatus) -> bool:
    return status in TERMINAL_STATUSES


def next_status(status: AppointmentStatus, action: StatusAction) -> AppointmentStatus:
    """
    Resolve the status an action leads to.

    Raises:
        InvalidTransitionError: If the action is not valid from ``status``.
    """
    for t in TRANSITIONS:
        if t.from_status == status and t.action == action:
            logger.debug("Status transition: %s -> %s (%s)",
                         status.value, t.to_status.value, action.value)
            return t.to_status

    valid = [a.value for a in valid_actions(status)]
    raise InvalidTransitionError(
        f"Cannot {action.value} an appointment that is {status.value}. "
        f"Valid actions: {valid}"
    )
