"""
Offline console demo. Walks through a full booking without any backend.

Seeds a barbershop open Monday to Saturday 09:00-18:00 with a lunch break,
shows the free slots for a professional, books a two-service chain, and
then shows how the slots changed.

Usage:
    python main.py
    python main.py --date 2025-03-18 --now "2025-03-18 08:00"
    python main.py --services cut beard --time 10:00
"""

import argparse
import asyncio
from datetime import date, datetime, time, timedelta

from agenda.config import settings
from agenda.desks import BusinessContext, PublicBookingDesk, StaffDesk
from agenda.engine.errors import BookingError
from agenda.schemas.appointment_schema import Appointment
from agenda.schemas.booking_schema import BookingRequest
from agenda.schemas.catalog_schema import Professional, Service
from agenda.schemas.customer_schema import CustomerInfo
from agenda.store.schedules import default_week

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DEMO_SERVICES = [
    Service(id="cut", name="Haircut", duration_minutes=30, price=45.0, category="hair"),
    Service(id="beard", name="Beard trim", duration_minutes=45, price=35.0, category="beard"),
    Service(id="color", name="Coloring", duration_minutes=90, price=120.0, category="hair"),
]
DEMO_PROFESSIONALS = [
    Professional(id="ana", name="Ana"),
    Professional(id="bruno", name="Bruno"),
]


def build_demo_context(now: datetime, day: date) -> BusinessContext:
    """A business with one existing 14:00-14:30 booking for Ana on ``day``."""
    business_id = settings.business.default_business_id
    ctx = BusinessContext(business_id=business_id, clock=lambda: now)
    for service in DEMO_SERVICES:
        ctx.catalog.add_service(service.model_copy(update={"business_id": business_id}))
    for professional in DEMO_PROFESSIONALS:
        ctx.catalog.add_professional(professional.model_copy(update={"business_id": business_id}))
    ctx.schedules.save_week(default_week(business_id, break_start="12:00", break_end="13:00"))

    regular = ctx.customers.create(business_id, CustomerInfo(name="Carla Souza", phone="11 91234-5678"))
    ctx.appointments.add(Appointment(
        business_id=business_id,
        customer_id=regular.id,
        professional_id="ana",
        service_id="cut",
        start_time=datetime.combine(day, time(14, 0)),
        duration_minutes=30,
    ))
    return ctx


def _next_weekday(after: date) -> date:
    day = after + timedelta(days=1)
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day


async def run_demo(day: date, now: datetime, service_ids: list[str], start_time: str) -> None:
    ctx = build_demo_context(now, day)
    public = PublicBookingDesk(ctx)
    staff = StaffDesk(ctx)

    print(f"\n{BOLD}{'=' * 60}{RESET}")
    print(f"{BOLD}  {settings.business.name} - {day:%A %d/%m/%Y}{RESET}")
    print(f"{BOLD}{'=' * 60}{RESET}")

    try:
        slots = await public.available_slots("ana", day, service_ids)
    except BookingError as exc:
        print(f"{RED}{exc}{RESET}")
        return
    print(f"{DIM}  >> Slots with Ana for {', '.join(service_ids)}:{RESET}")
    print(f"     {' '.join(slots) or '(none)'}")

    request = BookingRequest(
        professional_id="ana",
        day=day,
        start_time=start_time,
        service_ids=service_ids,
        customer_name="Diego Lima",
        customer_phone="(11) 98765-4321",
    )
    result = await public.book(request)
    colour = GREEN if result.success else RED
    print(f"\n{colour}{BOLD}[Booking]{RESET} {colour}{result.message}{RESET}")
    for appt in result.appointments:
        print(f"{DIM}  >> {appt.id} {appt.start_time:%H:%M}-{appt.end_time:%H:%M} {appt.service_id}{RESET}")

    retry = await public.book(request)
    print(f"{YELLOW}{BOLD}[Same slot again]{RESET} {YELLOW}{retry.message}{RESET}")

    slots = await public.available_slots("ana", day, service_ids)
    print(f"\n{DIM}  >> Slots with Ana afterwards:{RESET}")
    print(f"     {' '.join(slots) or '(none)'}")

    print(f"\n{BOLD}  Agenda{RESET}")
    for view in await staff.agenda(day, status="all"):
        price = f"{view.price:.2f}" if view.price is not None else "-"
        print(
            f"     {view.start_time:%H:%M} {view.professional_name:<6} "
            f"{view.customer_name:<12} {view.service_name:<11} {price:>7} {view.status.value}"
        )
    print(f"{BOLD}{'=' * 60}{RESET}\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Appointment engine console demo")
    parser.add_argument("--date", help="Day to book (YYYY-MM-DD); defaults to the next open day")
    parser.add_argument("--now", help='Current instant ("YYYY-MM-DD HH:MM"); defaults to the wall clock')
    parser.add_argument("--services", nargs="+", default=["cut", "beard"],
                        help="Service ids to chain, in order")
    parser.add_argument("--time", default="10:00", help="Start time to book (HH:MM)")
    args = parser.parse_args()

    now = datetime.strptime(args.now, "%Y-%m-%d %H:%M") if args.now else datetime.now()
    day = date.fromisoformat(args.date) if args.date else _next_weekday(now.date())
    asyncio.run(run_demo(day, now, args.services, args.time))


if __name__ == "__main__":
    main()
