"""
Staff desk: dashboard-side appointment management.

Staff create appointments on behalf of customers, move them, and walk
them through their lifecycle. Unlike the public desk, errors propagate
as typed ``BookingError`` subclasses; their messages are written to be
shown to staff as-is.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from agenda.desks.context import BusinessContext
from agenda.engine.committer import (
    change_status,
    commit_booking,
    purge_cancelled,
    reschedule_appointment,
)
from agenda.engine.errors import InvalidRequestError
from agenda.engine.lifecycle import StatusAction
from agenda.engine.slots import generate_slots
from agenda.logging_context import get_request_logger, new_request_id
from agenda.schemas.appointment_schema import Appointment, AppointmentStatus, AppointmentView
from agenda.schemas.customer_schema import CustomerInfo
from agenda.schemas.schedule_schema import OperatingSchedule

logger = get_request_logger(__name__)

VIEW_DAY = "day"
VIEW_MONTH = "month"
STATUS_ALL = "all"

MISSING_CUSTOMER = "Deleted customer"
MISSING_PROFESSIONAL = "Inactive professional"
MISSING_SERVICE = "Inactive service"


def _period(anchor: date, view: str) -> tuple[datetime, datetime]:
    if view == VIEW_DAY:
        start = datetime.combine(anchor, datetime.min.time())
        return start, start + timedelta(days=1)
    if view == VIEW_MONTH:
        start = datetime(anchor.year, anchor.month, 1)
        if anchor.month == 12:
            return start, datetime(anchor.year + 1, 1, 1)
        return start, datetime(anchor.year, anchor.month + 1, 1)
    raise InvalidRequestError(f"Unknown view {view!r}; use '{VIEW_DAY}' or '{VIEW_MONTH}'")


class StaffDesk:
    """Appointment management for the business's staff."""

    def __init__(self, context: BusinessContext) -> None:
        self._ctx = context

    # ------------------------------------------------------------------ #
    # Creating and moving appointments
    # ------------------------------------------------------------------ #

    async def slots_for(self, professional_id: str, day: date, service_id: str) -> list[str]:
        """Free start times for a single service, as offered in the new-appointment form."""
        ctx = self._ctx
        services = ctx.catalog.services_for_booking(ctx.business_id, [service_id])
        return generate_slots(
            ctx.appointments.snapshot(ctx.business_id, professional_id, day),
            ctx.schedules.for_business(ctx.business_id),
            professional_id,
            day,
            services,
            now=ctx.now(),
        )

    async def create_appointment(
        self,
        professional_id: str,
        day: date,
        start_time: str,
        service_id: str,
        customer: CustomerInfo,
        notes: Optional[str] = None,
    ) -> Appointment:
        ctx = self._ctx
        new_request_id()
        ctx.catalog.bookable_professional(ctx.business_id, professional_id)
        services = ctx.catalog.services_for_booking(ctx.business_id, [service_id])
        created = commit_booking(
            ctx.appointments,
            ctx.customers,
            ctx.schedules.for_business(ctx.business_id),
            ctx.business_id,
            professional_id,
            day,
            start_time,
            services,
            customer,
            notes or None,
            now=ctx.now(),
            locks=ctx.locks,
        )
        return created[0]

    async def reschedule(
        self,
        appointment_id: str,
        day: date,
        start_time: str,
        service_id: Optional[str] = None,
        professional_id: Optional[str] = None,
    ) -> Appointment:
        """Move an appointment; a new service also resets the duration."""
        ctx = self._ctx
        new_request_id()
        duration = None
        if service_id is not None:
            duration = ctx.catalog.services_for_booking(ctx.business_id, [service_id])[0].duration_minutes
        if professional_id is not None:
            ctx.catalog.bookable_professional(ctx.business_id, professional_id)
        return reschedule_appointment(
            ctx.appointments,
            ctx.customers,
            ctx.schedules.for_business(ctx.business_id),
            appointment_id,
            day,
            start_time,
            now=ctx.now(),
            duration_minutes=duration,
            professional_id=professional_id,
            service_id=service_id,
            locks=ctx.locks,
        )

    # ------------------------------------------------------------------ #
    # Lifecycle actions
    # ------------------------------------------------------------------ #

    async def confirm(self, appointment_id: str) -> Appointment:
        return change_status(self._ctx.appointments, appointment_id, StatusAction.CONFIRM)

    async def complete(self, appointment_id: str) -> Appointment:
        return change_status(self._ctx.appointments, appointment_id, StatusAction.COMPLETE)

    async def cancel(self, appointment_id: str) -> Appointment:
        return change_status(self._ctx.appointments, appointment_id, StatusAction.CANCEL)

    async def sweep_cancelled(self) -> int:
        """Delete cancelled appointments past the retention period."""
        return purge_cancelled(
            self._ctx.appointments, self._ctx.now(), business_id=self._ctx.business_id
        )

    # ------------------------------------------------------------------ #
    # Operating hours
    # ------------------------------------------------------------------ #

    async def save_hours(self, rows: list[OperatingSchedule]) -> list[OperatingSchedule]:
        """Validate and store the weekly schedule.

        Raises:
            ScheduleConfigError: If any row is malformed; nothing is saved then.
        """
        rows = [r.model_copy(update={"business_id": self._ctx.business_id}) for r in rows]
        return self._ctx.schedules.save_week(rows)

    # ------------------------------------------------------------------ #
    # Agenda listing
    # ------------------------------------------------------------------ #

    async def agenda(
        self,
        anchor: date,
        view: str = VIEW_DAY,
        status: str = AppointmentStatus.CONFIRMED.value,
        search: Optional[str] = None,
    ) -> list[AppointmentView]:
        """Appointments for a day or month, enriched for display.

        ``status`` is a status value or ``"all"``. ``search`` matches the
        customer name or phone, the professional name or the service name.
        """
        if status != STATUS_ALL:
            try:
                AppointmentStatus(status)
            except ValueError:
                raise InvalidRequestError(f"Unknown status filter {status!r}") from None

        start, end = _period(anchor, view)
        views = [
            self._to_view(a)
            for a in self._ctx.appointments.between(self._ctx.business_id, start, end)
            if status == STATUS_ALL or a.status.value == status
        ]
        if search:
            needle = search.lower()
            views = [
                v for v in views
                if needle in v.customer_name.lower()
                or search in v.customer_phone
                or needle in v.professional_name.lower()
                or needle in v.service_name.lower()
            ]
        return views

    def _to_view(self, appointment: Appointment) -> AppointmentView:
        catalog = self._ctx.catalog
        customer = self._ctx.customers.get(appointment.customer_id)
        professional = catalog.professional(appointment.professional_id)
        service = catalog.service(appointment.service_id)
        return AppointmentView(
            id=appointment.id,
            customer_id=appointment.customer_id,
            customer_name=customer.name if customer else MISSING_CUSTOMER,
            customer_phone=customer.phone if customer else "",
            professional_id=appointment.professional_id,
            professional_name=professional.name if professional else MISSING_PROFESSIONAL,
            service_id=appointment.service_id,
            service_name=service.name if service else MISSING_SERVICE,
            start_time=appointment.start_time,
            duration_minutes=appointment.duration_minutes,
            status=appointment.status,
            notes=appointment.notes,
            price=service.price if service else None,
        )
