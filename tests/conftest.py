"""Shared test fixtures and helpers."""

from datetime import date, datetime, time
from typing import Optional

import pytest

from agenda.desks import BusinessContext, PublicBookingDesk, StaffDesk
from agenda.engine.locks import ProfessionalLocks
from agenda.schemas.appointment_schema import Appointment, AppointmentStatus
from agenda.schemas.catalog_schema import Professional, Service
from agenda.schemas.schedule_schema import OperatingSchedule
from agenda.store.appointments import AppointmentStore
from agenda.store.customers import CustomerDirectory
from agenda.store.schedules import default_week

BUSINESS = "biz-1"
PRO = "pro-1"
OTHER_PRO = "pro-2"

# 2025-03-18 is a Tuesday; 2025-03-16 is the Sunday before it.
DAY = date(2025, 3, 18)
SUNDAY = date(2025, 3, 16)
EARLY = datetime(2025, 3, 18, 7, 0)


def at(hhmm: str, day: date = DAY) -> datetime:
    hour, minute = (int(p) for p in hhmm.split(":"))
    return datetime.combine(day, time(hour, minute))


def make_service(
    service_id: str = "cut",
    duration: int = 30,
    price: float = 40.0,
    name: Optional[str] = None,
    business_id: str = BUSINESS,
) -> Service:
    """Helper to create a Service."""
    return Service(
        id=service_id,
        business_id=business_id,
        name=name or service_id.title(),
        duration_minutes=duration,
        price=price,
    )


def make_appointment(
    start: str = "10:00",
    duration: int = 30,
    professional_id: str = PRO,
    status: AppointmentStatus = AppointmentStatus.CONFIRMED,
    day: date = DAY,
    customer_id: Optional[str] = None,
    appointment_id: Optional[str] = None,
    service_id: Optional[str] = "cut",
) -> Appointment:
    """Helper to create an Appointment with sensible defaults."""
    fields = dict(
        business_id=BUSINESS,
        customer_id=customer_id,
        professional_id=professional_id,
        service_id=service_id,
        start_time=at(start, day),
        duration_minutes=duration,
        status=status,
    )
    if appointment_id is not None:
        fields["id"] = appointment_id
    return Appointment(**fields)


def weekly_schedule(
    break_start: Optional[str] = "12:00",
    break_end: Optional[str] = "13:00",
) -> list[OperatingSchedule]:
    """Open Monday to Saturday 09:00-18:00, closed Sunday."""
    return default_week(BUSINESS, break_start=break_start, break_end=break_end)


@pytest.fixture
def store():
    return AppointmentStore()


@pytest.fixture
def directory():
    return CustomerDirectory()


@pytest.fixture
def schedules():
    return weekly_schedule()


@pytest.fixture
def locks():
    return ProfessionalLocks()


@pytest.fixture
def context():
    ctx = BusinessContext(business_id=BUSINESS, locks=ProfessionalLocks(), clock=lambda: EARLY)
    ctx.catalog.add_service(make_service("cut", 30, 40.0, "Haircut"))
    ctx.catalog.add_service(make_service("beard", 45, 30.0, "Beard trim"))
    ctx.catalog.add_service(
        make_service("retired", 60, 99.0, "Retired").model_copy(update={"is_active": False})
    )
    ctx.catalog.add_professional(Professional(id=PRO, business_id=BUSINESS, name="Ana"))
    ctx.catalog.add_professional(Professional(id=OTHER_PRO, business_id=BUSINESS, name="Bruno"))
    ctx.schedules.save_week(weekly_schedule())
    return ctx


@pytest.fixture
def public_desk(context):
    return PublicBookingDesk(context)


@pytest.fixture
def staff_desk(context):
    return StaffDesk(context)
