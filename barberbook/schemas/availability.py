from pydantic import BaseModel
from typing import List, Optional
from enum import Enum

from barberbook.schemas.booking import Booking

class TimeSlotList(BaseModel):
    slots: List[str]
    morning: List[str]
    afternoon: List[str]

class SlotState(BaseModel):
    timeSlot: str
    taken: bool
    past: bool

    @property
    def bookable(self) -> bool:
        return not self.taken and not self.past

class DayAvailability(BaseModel):
    providerId: str
    date: str
    nonWorkingDay: bool
    dayFull: bool
    bookedCount: int
    maxPerDay: int
    slots: List[SlotState]
    morning: List[SlotState]
    afternoon: List[SlotState]

class DateOption(BaseModel):
    date: str
    weekday: int
    nonWorkingDay: bool
    dayFull: bool

class LoadLevel(str, Enum):
    FREE = "free"
    BUSY = "busy"
    FULL = "full"

class ProviderQueue(BaseModel):
    providerId: str
    providerName: str
    date: str
    queue: List[Booking]
    nextUp: Optional[Booking] = None
    queuedCount: int
    capacity: int
    load: LoadLevel

class WeekCell(BaseModel):
    date: str
    bookedCount: int
    capacity: int
    load: LoadLevel

class ProviderWeek(BaseModel):
    providerId: str
    providerName: str
    days: List[WeekCell]
