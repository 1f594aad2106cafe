"""
Availability rules evaluated against a booking snapshot.

Everything here is pure: callers pass the bookings they just read from the
repository, so the same functions serve the booking board (where slightly
stale data is fine) and the create path (which re-reads right before
committing).

CANCELLED and EXPIRED bookings free their slot. BOOKED and COMPLETED ones
keep it, both for the exact-slot check and for the daily capacity count.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from barberbook.core.clock import format_date, format_time, parse_date
from barberbook.schemas.availability import DateOption, DayAvailability, SlotState
from barberbook.schemas.booking import Booking
from barberbook.schemas.settings import BusinessSettings
from barberbook.services.slot_service import is_morning, slots_for


class BusinessCalendar:
    """Weekend days plus a holiday list, both supplied by configuration."""

    def __init__(self, holidays: Iterable[str] = (), weekend_days: Iterable[int] = (5, 6)):
        self.holidays = frozenset(holidays)
        self.weekend_days = frozenset(weekend_days)

    @classmethod
    def from_settings(cls, app_settings) -> "BusinessCalendar":
        return cls(app_settings.HOLIDAYS, app_settings.WEEKEND_DAYS)

    def is_non_working_day(self, date_str: str) -> bool:
        if date_str in self.holidays:
            return True
        return parse_date(date_str).weekday() in self.weekend_days


def bookings_for_day(bookings: Iterable[Booking], provider_id: str, date_str: str) -> List[Booking]:
    return [b for b in bookings if b.providerId == provider_id and b.date == date_str]


def active_count_for(bookings: Iterable[Booking], provider_id: str, date_str: str) -> int:
    """Bookings using up the provider's daily capacity."""
    return sum(1 for b in bookings_for_day(bookings, provider_id, date_str) if b.consumes_slot)


def is_slot_occupied(bookings: Iterable[Booking], provider_id: str, date_str: str, time_slot: str) -> bool:
    return any(
        b.consumes_slot and b.timeSlot == time_slot
        for b in bookings_for_day(bookings, provider_id, date_str)
    )


def is_day_full(bookings: Iterable[Booking], provider_id: str, date_str: str, max_per_day: int) -> bool:
    return active_count_for(bookings, provider_id, date_str) >= max_per_day


def is_past_slot(date_str: str, time_slot: str, now: datetime) -> bool:
    """A slot is past once its date is before today, or it is today and its start has gone by."""
    today = format_date(now)
    if date_str < today:
        return True
    return date_str == today and time_slot < format_time(now)


def day_availability(
    bookings: List[Booking],
    provider_id: str,
    date_str: str,
    business_settings: BusinessSettings,
    calendar: BusinessCalendar,
    now: datetime,
) -> DayAvailability:
    """Per-slot state for the booking board of one provider and day."""
    states = [
        SlotState(
            timeSlot=slot,
            taken=is_slot_occupied(bookings, provider_id, date_str, slot),
            past=is_past_slot(date_str, slot, now),
        )
        for slot in slots_for(business_settings)
    ]
    booked_count = active_count_for(bookings, provider_id, date_str)
    return DayAvailability(
        providerId=provider_id,
        date=date_str,
        nonWorkingDay=calendar.is_non_working_day(date_str),
        dayFull=booked_count >= business_settings.maxSlotsPerProviderPerDay,
        bookedCount=booked_count,
        maxPerDay=business_settings.maxSlotsPerProviderPerDay,
        slots=states,
        morning=[s for s in states if is_morning(s.timeSlot)],
        afternoon=[s for s in states if not is_morning(s.timeSlot)],
    )


def upcoming_dates(
    bookings: List[Booking],
    provider_id: Optional[str],
    business_settings: BusinessSettings,
    calendar: BusinessCalendar,
    start: date,
    days: int,
) -> List[DateOption]:
    """The date strip of the booking calendar, starting at ``start``."""
    options = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        date_str = format_date(day)
        full = False
        if provider_id is not None:
            full = is_day_full(bookings, provider_id, date_str, business_settings.maxSlotsPerProviderPerDay)
        options.append(
            DateOption(
                date=date_str,
                weekday=day.weekday(),
                nonWorkingDay=calendar.is_non_working_day(date_str),
                dayFull=full,
            )
        )
    return options
