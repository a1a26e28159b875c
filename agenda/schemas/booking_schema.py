"""Booking request and result models used at the desk boundary."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from agenda.config import settings
from agenda.schemas.appointment_schema import Appointment
from agenda.utils import count_digits, normalize_phone

MIN_NAME_LENGTH = 2


class BookingRequest(BaseModel):
    """Validated booking request data."""

    professional_id: str
    day: date
    start_time: str
    service_ids: list[str] = Field(min_length=1)
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("customer_name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_NAME_LENGTH:
            raise ValueError("name is required")
        return value

    @field_validator("customer_phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        if count_digits(value) < settings.scheduling.min_phone_digits:
            raise ValueError("phone number is too short")
        return normalize_phone(value)

    @field_validator("start_time")
    @classmethod
    def _check_start_time(cls, value: str) -> str:
        return datetime.strptime(value.strip(), "%H:%M").strftime("%H:%M")

    @field_validator("notes", "customer_email")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class BookingResult(BaseModel):
    """Booking creation result."""

    success: bool
    message: str
    error_type: Optional[str] = None
    appointments: list[Appointment] = Field(default_factory=list)
