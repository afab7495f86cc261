"""Domain models for the shift scheduling service."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

DATE_PATTERN = r"^\d{2}-\d{2}-\d{4}$"  # dd-mm-yyyy
TIME_PATTERN = r"^\d{2}:\d{2}$"  # hh:mm, 24-hour
MAX_DATES_PER_SHIFT = 10


class ShiftType(StrEnum):
    CONSULTATION = "Consultation"
    TELEPHONE = "Telephone"
    AMBULANCE = "Ambulance"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Stored records
# ---------------------------------------------------------------------------


class Shift(CamelModel):
    id: int
    title: str
    description: str | None = None
    price: float = 0
    type: ShiftType
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ShiftDate(CamelModel):
    id: int
    shift_id: int
    date: str
    start_time: str
    end_time: str
    created_at: datetime = Field(default_factory=_utcnow)


class ShiftWithDates(Shift):
    dates: list[ShiftDate] = Field(default_factory=list)


class ShiftDateEntry(CamelModel):
    """One date/time span joined with its owning shift's type.

    This is the shape the overlap check compares against.  ``shift_id`` is
    ``None`` for candidates that have not been persisted yet.
    """

    shift_id: int | None = None
    date: str
    start_time: str
    end_time: str
    type: ShiftType


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class ShiftDateInput(CamelModel):
    date: str = Field(pattern=DATE_PATTERN)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)

    @model_validator(mode="after")
    def _end_after_start(self) -> ShiftDateInput:
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class ShiftInput(CamelModel):
    title: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float = Field(default=0, ge=0)
    type: ShiftType


class ShiftPayload(CamelModel):
    """Body of both create and update requests."""

    shift: ShiftInput
    dates: list[ShiftDateInput] = Field(min_length=1, max_length=MAX_DATES_PER_SHIFT)


class PriceFilterRequest(CamelModel):
    min_price: float = Field(default=0, ge=0)
    max_price: float = Field(ge=0)


class TypeFilterRequest(CamelModel):
    type: ShiftType


class CheckOverlapRequest(ShiftDateInput):
    type: ShiftType
    exclude_shift_id: int | None = None


class CheckOverlapResponse(CamelModel):
    has_overlap: bool


class PriceRange(CamelModel):
    min: float = 0
    max: float = 0


class MessageResponse(CamelModel):
    message: str
