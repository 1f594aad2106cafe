"""
Per-provider daily queue.

The queue for a provider and date is every BOOKED or COMPLETED booking,
ordered by its ``HH:MM`` slot (zero-padded, so text order is time order).
"Next up" is the earliest entry still BOOKED. Check-in uses the same
ordering to refuse anyone who still has an earlier BOOKED booking ahead.
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional

from barberbook.core.clock import format_date
from barberbook.schemas.availability import LoadLevel, ProviderQueue, ProviderWeek, WeekCell
from barberbook.schemas.booking import Booking, BookingStatus
from barberbook.schemas.provider import Provider, UNKNOWN_PROVIDER_NAME
from barberbook.schemas.settings import BusinessSettings
from barberbook.services.availability_service import active_count_for, bookings_for_day
from barberbook.services.slot_service import theoretical_capacity

BUSY_RATIO = 0.7

def provider_queue(bookings: Iterable[Booking], provider_id: str, date_str: str) -> List[Booking]:
    queue = [b for b in bookings_for_day(bookings, provider_id, date_str) if b.consumes_slot]
    queue.sort(key=lambda b: b.timeSlot)
    return queue

def next_up(queue: List[Booking]) -> Optional[Booking]:
    """Earliest booking not yet served; None once the day's queue is done."""
    for booking in queue:
        if booking.status == BookingStatus.BOOKED:
            return booking
    return None

def waiting_ahead(bookings: Iterable[Booking], booking: Booking) -> List[Booking]:
    """Other BOOKED bookings for the same provider and day with an earlier slot."""
    ahead = [
        b for b in bookings_for_day(bookings, booking.providerId, booking.date)
        if b.id != booking.id
        and b.status == BookingStatus.BOOKED
        and b.timeSlot < booking.timeSlot
    ]
    ahead.sort(key=lambda b: b.timeSlot)
    return ahead

def provider_name(providers: Iterable[Provider], provider_id: str) -> str:
    for provider in providers:
        if provider.id == provider_id:
            return provider.name
    return UNKNOWN_PROVIDER_NAME

def load_level(booked: int, capacity: int) -> LoadLevel:
    if booked >= capacity:
        return LoadLevel.FULL
    if booked >= capacity * BUSY_RATIO:
        return LoadLevel.BUSY
    return LoadLevel.FREE

def build_dashboard(
    bookings: List[Booking],
    providers: List[Provider],
    business_settings: BusinessSettings,
    date_str: str,
) -> List[ProviderQueue]:
    capacity = theoretical_capacity(business_settings)
    dashboard = []
    for provider in providers:
        queue = provider_queue(bookings, provider.id, date_str)
        dashboard.append(
            ProviderQueue(
                providerId=provider.id,
                providerName=provider.name,
                date=date_str,
                queue=queue,
                nextUp=next_up(queue),
                queuedCount=len(queue),
                capacity=capacity,
                load=load_level(len(queue), capacity),
            )
        )
    return dashboard

def build_week_board(
    bookings: List[Booking],
    providers: List[Provider],
    business_settings: BusinessSettings,
    start: date,
    days: int,
) -> List[ProviderWeek]:
    capacity = theoretical_capacity(business_settings)
    dates = [format_date(start + timedelta(days=offset)) for offset in range(days)]
    board = []
    for provider in providers:
        cells = []
        for date_str in dates:
            booked = active_count_for(bookings, provider.id, date_str)
            cells.append(WeekCell(date=date_str, bookedCount=booked, capacity=capacity, load=load_level(booked, capacity)))
        board.append(ProviderWeek(providerId=provider.id, providerName=provider.name, days=cells))
    return board
