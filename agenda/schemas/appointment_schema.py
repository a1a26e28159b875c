"""Appointment records and read-time views."""

import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def _new_appointment_id() -> str:
    return f"APT-{uuid.uuid4().hex[:8].upper()}"


class Appointment(BaseModel):
    """One unit of booked time for one service.

    ``start_time`` is a naive local wall-clock value. It is stored and
    compared as-is, never converted between timezones; a row serialized
    with an offset keeps its wall-clock reading and loses the offset.
    """

    id: str = Field(default_factory=_new_appointment_id)
    business_id: str = ""
    customer_id: Optional[str] = None
    professional_id: str
    service_id: Optional[str] = None
    start_time: datetime
    duration_minutes: int = Field(gt=0)
    status: AppointmentStatus = AppointmentStatus.CONFIRMED
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("start_time")
    @classmethod
    def _drop_offset(cls, value: datetime) -> datetime:
        return value.replace(tzinfo=None) if value.tzinfo is not None else value

    @property
    def end_time(self) -> datetime:
        return self.start_time + timedelta(minutes=self.duration_minutes)

    @property
    def is_cancelled(self) -> bool:
        return self.status == AppointmentStatus.CANCELLED


class AppointmentView(BaseModel):
    """Appointment enriched with names and the service price for display."""

    id: str
    customer_id: Optional[str] = None
    customer_name: str
    customer_phone: str = ""
    professional_id: str
    professional_name: str
    service_id: Optional[str] = None
    service_name: str
    start_time: datetime
    duration_minutes: int
    status: AppointmentStatus
    notes: Optional[str] = None
    price: Optional[float] = None
