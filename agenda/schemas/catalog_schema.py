"""Service and professional reference data."""

from typing import Optional

from pydantic import BaseModel, Field


class Service(BaseModel):
    """A sellable unit of work. Immutable during a booking transaction."""

    id: str
    business_id: str = ""
    name: str
    duration_minutes: int = Field(gt=0)
    price: float = Field(default=0.0, ge=0)
    category: Optional[str] = None
    is_active: bool = True

    model_config = {"frozen": True}


class Professional(BaseModel):
    id: str
    business_id: str = ""
    name: str
    is_active: bool = True

    model_config = {"frozen": True}
