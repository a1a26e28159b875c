"""Customer data models."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


def _new_customer_id() -> str:
    return f"CUS-{uuid.uuid4().hex[:8].upper()}"


class Customer(BaseModel):
    """Customer record, unique per business by phone."""

    id: str = Field(default_factory=_new_customer_id)
    business_id: str = ""
    name: str
    phone: str
    email: Optional[str] = None


class CustomerInfo(BaseModel):
    """Contact details typed in by whoever books the appointment."""

    name: str
    phone: str
    email: Optional[str] = None
