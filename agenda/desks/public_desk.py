"""
Public self-service booking desk.

The customer-facing flow: pick services, pick a professional, pick a
date and one of the offered times, leave a name and phone, book. Every
engine error is turned into a ``BookingResult`` with a message the page
can show, since all of them are recoverable by choosing again.
"""

from datetime import date

from pydantic import ValidationError

from agenda.desks.context import BusinessContext
from agenda.engine.committer import commit_booking
from agenda.engine.errors import BookingError, ClosedDayError, ConflictError, StaleSlotError
from agenda.engine.slots import generate_slots
from agenda.logging_context import get_request_logger, new_request_id
from agenda.schemas.booking_schema import BookingRequest, BookingResult
from agenda.schemas.catalog_schema import Professional, Service
from agenda.schemas.customer_schema import CustomerInfo

logger = get_request_logger(__name__)


class PublicBookingDesk:
    """Read slots and commit bookings on behalf of end customers."""

    def __init__(self, context: BusinessContext) -> None:
        self._ctx = context

    async def list_services(self) -> list[Service]:
        return self._ctx.catalog.active_services(self._ctx.business_id)

    async def list_professionals(self) -> list[Professional]:
        return self._ctx.catalog.active_professionals(self._ctx.business_id)

    async def available_slots(
        self, professional_id: str, day: date, service_ids: list[str]
    ) -> list[str]:
        """Start times for the chain of services. Empty on closed days.

        Raises:
            InvalidRequestError: If a service or the professional is unknown or inactive.
            ScheduleConfigError: If the day's schedule is malformed.
        """
        ctx = self._ctx
        new_request_id()
        ctx.catalog.bookable_professional(ctx.business_id, professional_id)
        services = ctx.catalog.services_for_booking(ctx.business_id, service_ids)
        slots = generate_slots(
            ctx.appointments.snapshot(ctx.business_id, professional_id, day),
            ctx.schedules.for_business(ctx.business_id),
            professional_id,
            day,
            services,
            now=ctx.now(),
        )
        logger.info("Offered %d slot(s) on %s for %s", len(slots), day, professional_id)
        return slots

    async def book(self, request: BookingRequest) -> BookingResult:
        """Commit a booking, re-validating the chosen slot first."""
        ctx = self._ctx
        request_id = new_request_id()
        try:
            ctx.catalog.bookable_professional(ctx.business_id, request.professional_id)
            services = ctx.catalog.services_for_booking(ctx.business_id, request.service_ids)
            created = commit_booking(
                ctx.appointments,
                ctx.customers,
                ctx.schedules.for_business(ctx.business_id),
                ctx.business_id,
                request.professional_id,
                request.day,
                request.start_time,
                services,
                CustomerInfo(
                    name=request.customer_name,
                    phone=request.customer_phone,
                    email=request.customer_email,
                ),
                request.notes,
                now=ctx.now(),
                locks=ctx.locks,
            )
        except ConflictError as exc:
            return BookingResult(
                success=False,
                error_type=exc.code,
                message=f"{request.start_time} was just taken. Please choose another time.",
            )
        except StaleSlotError as exc:
            return BookingResult(
                success=False,
                error_type=exc.code,
                message="That time has already passed. Please choose another time.",
            )
        except ClosedDayError as exc:
            return BookingResult(
                success=False,
                error_type=exc.code,
                message="We are closed on that day. Please choose another date.",
            )
        except BookingError as exc:
            logger.warning("Booking %s rejected: %s", request_id, exc)
            return BookingResult(success=False, error_type=exc.code, message=str(exc))

        names = ", ".join(s.name for s in services)
        return BookingResult(
            success=True,
            message=(
                f"Booking confirmed: {names} on {request.day:%d/%m/%Y} "
                f"at {request.start_time}."
            ),
            appointments=created,
        )

    async def book_from_form(self, form: dict) -> BookingResult:
        """Validate raw form fields, then book. Invalid input becomes a failed result."""
        try:
            request = BookingRequest.model_validate(form)
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            return BookingResult(
                success=False,
                error_type="invalid_request",
                message=f"Please check: {', '.join(fields)}.",
            )
        return await self.book(request)
