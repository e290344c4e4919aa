"""Availability check schemas."""

from datetime import date

from pydantic import BaseModel, Field

from catering.schemas.catalog import CartItemPayload
from catering.schemas.common import DayStatus


class AvailabilityResult(BaseModel):
    """Admission status for a date with an optional human-readable reason."""

    status: DayStatus
    reason: str | None = None

    @property
    def allowed(self) -> bool:
        return self.status is DayStatus.AVAILABLE


class AvailabilityRequest(BaseModel):
    date: date
    items: list[CartItemPayload] = Field(default_factory=list)
    exclude_order_id: int | None = None


class CalendarRequest(BaseModel):
    start: date
    days: int = Field(default=31, ge=1, le=120)
    items: list[CartItemPayload] = Field(default_factory=list)
    exclude_order_id: int | None = None


class CalendarDay(BaseModel):
    date: date
    status: DayStatus
