from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from barberbook.core.clock import parse_date

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

class BookingStatus(str, Enum):
    BOOKED = "BOOKED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"

# Statuses that keep a slot (and a unit of daily capacity) in use
SLOT_CONSUMING_STATUSES = frozenset({BookingStatus.BOOKED, BookingStatus.COMPLETED})

TERMINAL_STATUSES = frozenset({
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
    BookingStatus.EXPIRED,
})

class BookingCreate(BaseModel):
    providerId: str
    date: str = Field(..., pattern=DATE_PATTERN)
    timeSlot: str = Field(..., pattern=TIME_PATTERN)
    # Fall back to the user's profile when omitted
    customerName: Optional[str] = None
    customerPhone: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_must_exist(cls, value: str) -> str:
        parse_date(value)
        return value

    @field_validator("customerName", "customerPhone")
    @classmethod
    def strip_contact(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

class Booking(BaseModel):
    id: str
    providerId: str
    userId: str
    customerName: str = Field(..., min_length=1)
    customerPhone: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)
    timeSlot: str = Field(..., pattern=TIME_PATTERN)
    status: BookingStatus = BookingStatus.BOOKED
    createdAt: datetime

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.BOOKED

    @property
    def consumes_slot(self) -> bool:
        return self.status in SLOT_CONSUMING_STATUSES

class BookingResponse(Booking):
    providerName: Optional[str] = None
