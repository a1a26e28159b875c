"""
Booking committer: the engine's write path.

A slot shown to a customer was computed against a snapshot that may be
stale by the time they submit: another booking may have landed, or the
clock may have moved past the slot. Every write therefore re-validates
against a fresh snapshot while holding the professional's lock, and a
multi-service booking is persisted in a single all-or-nothing write.
"""

from datetime import date, datetime, timedelta
from itertools import chain
from typing import Iterable, Optional, Sequence

from agenda.config import settings
from agenda.engine.conflicts import find_conflict
from agenda.engine.errors import (
    ClosedDayError,
    CommitError,
    ConflictError,
    InvalidRequestError,
    OutsideHoursError,
    ScheduleConfigError,
    StaleSlotError,
)
from agenda.engine.hours import format_minutes, parse_hhmm, resolve_operating_window
from agenda.engine.lifecycle import StatusAction, next_status
from agenda.engine.locks import ProfessionalLocks, default_locks
from agenda.engine.slots import at_minutes, total_duration
from agenda.logging_context import get_request_logger
from agenda.schemas.appointment_schema import Appointment, AppointmentStatus
from agenda.schemas.catalog_schema import Service
from agenda.schemas.customer_schema import Customer, CustomerInfo
from agenda.schemas.schedule_schema import OperatingSchedule
from agenda.store.appointments import AppointmentStore, StoreError
from agenda.store.customers import CustomerDirectory

logger = get_request_logger(__name__)


def _start_minutes(start_time: str) -> int:
    try:
        return parse_hhmm(start_time)
    except ScheduleConfigError:
        raise InvalidRequestError(f"Invalid start time {start_time!r}") from None


def check_bookable_range(
    schedules: Iterable[OperatingSchedule],
    day: date,
    start_minutes: int,
    duration_minutes: int,
) -> None:
    """Ensure [start, start + duration) sits inside opening hours on ``day``.

    Raises:
        ClosedDayError: If the business is closed that day.
        OutsideHoursError: If the range leaves the window or touches the break.
        ScheduleConfigError: If the day's schedule row is malformed.
    """
    window = resolve_operating_window(day, schedules)
    if window is None:
        raise ClosedDayError(f"Closed on {day:%A, %Y-%m-%d}")

    end_minutes = start_minutes + duration_minutes
    label = f"{format_minutes(start_minutes)}-{format_minutes(end_minutes)}"
    if not window.contains(start_minutes, end_minutes):
        raise OutsideHoursError(
            f"{label} is outside opening hours "
            f"{format_minutes(window.open_minutes)}-{format_minutes(window.close_minutes)}"
        )
    if window.overlaps_break(start_minutes, end_minutes):
        raise OutsideHoursError(
            f"{label} overlaps the break "
            f"{format_minutes(window.break_start or 0)}-{format_minutes(window.break_end or 0)}"
        )


def _raise_conflict(conflict: Appointment, directory: CustomerDirectory) -> None:
    customer = directory.get(conflict.customer_id)
    error = ConflictError(conflict, customer.name if customer else None)
    logger.info("Rejected by re-validation: %s", error)
    raise error


def commit_booking(
    store: AppointmentStore,
    directory: CustomerDirectory,
    schedules: Iterable[OperatingSchedule],
    business_id: str,
    professional_id: str,
    day: date,
    start_time: str,
    services: Sequence[Service],
    customer: CustomerInfo,
    notes: Optional[str],
    now: datetime,
    locks: Optional[ProfessionalLocks] = None,
) -> list[Appointment]:
    """
    Book a chain of services back to back for one professional.

    Each service becomes its own appointment; the next one starts where
    the previous one ends. Either every appointment is stored or none is.

    Returns:
        The created appointments, in service order.

    Raises:
        InvalidRequestError: If no services were given or the start time is malformed.
        ClosedDayError: If the business is closed on ``day``.
        OutsideHoursError: If the chain does not fit opening hours.
        StaleSlotError: If the start is already in the past.
        ConflictError: If any service in the chain collides with an existing appointment.
        CommitError: If the store rejected the write.
    """
    schedules = list(schedules)
    duration = total_duration(services)
    start_minutes = _start_minutes(start_time)
    check_bookable_range(schedules, day, start_minutes, duration)

    start = at_minutes(day, start_minutes)
    if start < now:
        raise StaleSlotError(f"{start:%Y-%m-%d %H:%M} is in the past; pick another time")

    booked_by: Customer = directory.resolve(business_id, customer)
    status = AppointmentStatus(settings.scheduling.default_appointment_status)
    if locks is None:
        locks = default_locks

    with locks.hold(business_id, professional_id):
        snapshot = store.snapshot(business_id, professional_id, day)
        planned: list[Appointment] = []
        cursor = start
        for service in services:
            conflict = find_conflict(
                chain(snapshot, planned), professional_id, cursor, service.duration_minutes
            )
            if conflict is not None:
                _raise_conflict(conflict, directory)
            planned.append(Appointment(
                business_id=business_id,
                customer_id=booked_by.id,
                professional_id=professional_id,
                service_id=service.id,
                start_time=cursor,
                duration_minutes=service.duration_minutes,
                status=status,
                notes=notes,
            ))
            cursor += timedelta(minutes=service.duration_minutes)

        try:
            created = store.add_many(planned)
        except StoreError as exc:
            logger.error("Booking write failed for %s: %s", professional_id, exc)
            raise CommitError(f"Could not save the booking: {exc}") from exc

    logger.info(
        "Booked %d service(s) for %s with %s on %s at %s",
        len(created), booked_by.name, professional_id, day, start_time,
    )
    return created


def reschedule_appointment(
    store: AppointmentStore,
    directory: CustomerDirectory,
    schedules: Iterable[OperatingSchedule],
    appointment_id: str,
    day: date,
    start_time: str,
    now: datetime,
    duration_minutes: Optional[int] = None,
    professional_id: Optional[str] = None,
    service_id: Optional[str] = None,
    locks: Optional[ProfessionalLocks] = None,
) -> Appointment:
    """Move an appointment, rebuilding its start and duration.

    The appointment itself is excluded from the conflict check so it
    does not collide with its own old slot.

    Raises:
        InvalidRequestError: If the appointment does not exist, is cancelled or completed,
            or the duration is not positive.
        ClosedDayError, OutsideHoursError, StaleSlotError, ConflictError: As for commit_booking.
    """
    current = store.get(appointment_id)
    if current is None:
        raise InvalidRequestError(f"Appointment {appointment_id} not found")
    if current.status in (AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED):
        raise InvalidRequestError(f"Cannot reschedule a {current.status.value} appointment")

    duration = duration_minutes if duration_minutes is not None else current.duration_minutes
    if duration <= 0:
        raise InvalidRequestError(f"Duration must be positive, got {duration}")
    professional_id = professional_id or current.professional_id

    start_minutes = _start_minutes(start_time)
    check_bookable_range(schedules, day, start_minutes, duration)
    start = at_minutes(day, start_minutes)
    if start < now:
        raise StaleSlotError(f"{start:%Y-%m-%d %H:%M} is in the past; pick another time")

    if locks is None:
        locks = default_locks
    with locks.hold(current.business_id, professional_id):
        snapshot = store.snapshot(current.business_id, professional_id, day)
        conflict = find_conflict(snapshot, professional_id, start, duration, exclude_id=appointment_id)
        if conflict is not None:
            _raise_conflict(conflict, directory)

        updated = current.model_copy(update={
            "professional_id": professional_id,
            "service_id": service_id or current.service_id,
            "start_time": start,
            "duration_minutes": duration,
        })
        try:
            saved = store.replace(updated)
        except StoreError as exc:
            raise CommitError(f"Could not save the change: {exc}") from exc

    logger.info("Rescheduled %s to %s %s", appointment_id, day, start_time)
    return saved


def change_status(
    store: AppointmentStore, appointment_id: str, action: StatusAction
) -> Appointment:
    """Apply a staff action (confirm, complete, cancel) to an appointment.

    Raises:
        InvalidRequestError: If the appointment does not exist.
        InvalidTransitionError: If the action is not allowed from the current status.
    """
    current = store.get(appointment_id)
    if current is None:
        raise InvalidRequestError(f"Appointment {appointment_id} not found")
    new_status = next_status(current.status, action)
    return store.update_status(appointment_id, new_status)


def purge_cancelled(
    store: AppointmentStore,
    now: datetime,
    retention_days: Optional[int] = None,
    business_id: Optional[str] = None,
) -> int:
    """Permanently delete cancelled appointments older than the retention period."""
    days = retention_days if retention_days is not None else settings.scheduling.cancelled_retention_days
    cutoff = now - timedelta(days=days)
    removed = store.delete_cancelled_before(cutoff, business_id)
    if removed:
        logger.info("Purged %d cancelled appointment(s) older than %s", len(removed), cutoff.date())
    return len(removed)
