from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from barberbook.api.deps import get_app_settings, get_calendar, get_repository, resolve_date
from barberbook.core.clock import local_now
from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.schemas.availability import DateOption, DayAvailability, TimeSlotList
from barberbook.services.availability_service import BusinessCalendar, day_availability, upcoming_dates
from barberbook.services.provider_service import get_provider
from barberbook.services.settings_service import get_business_settings
from barberbook.services.slot_service import slots_for, split_morning_afternoon

router = APIRouter()

@router.get("/slots", response_model=TimeSlotList)
async def get_time_slots(
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
):
    """
    The day's bookable slot start times, also grouped into morning and afternoon
    """
    business_settings = await get_business_settings(repository, app_settings)
    slots = slots_for(business_settings)
    morning, afternoon = split_morning_afternoon(slots)
    return TimeSlotList(slots=slots, morning=morning, afternoon=afternoon)

@router.get("/{provider_id}", response_model=DayAvailability)
async def get_provider_day(
    provider_id: str,
    date: Optional[str] = Query(None, description="Day to check (YYYY-MM-DD), defaults to today"),
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
    calendar: BusinessCalendar = Depends(get_calendar),
):
    """
    Slot-by-slot availability for one provider on one day
    """
    date_str = resolve_date(date)
    provider = await get_provider(repository, provider_id)
    business_settings = await get_business_settings(repository, app_settings)
    bookings = await repository.list_bookings()
    return day_availability(bookings, provider.id, date_str, business_settings, calendar, local_now())

@router.get("/{provider_id}/dates", response_model=List[DateOption])
async def get_provider_dates(
    provider_id: str,
    days: Optional[int] = Query(None, ge=1, le=31, description="Number of days from today"),
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
    calendar: BusinessCalendar = Depends(get_calendar),
):
    """
    Bookable dates for a provider, starting today
    """
    provider = await get_provider(repository, provider_id)
    business_settings = await get_business_settings(repository, app_settings)
    bookings = await repository.list_bookings()
    return upcoming_dates(
        bookings,
        provider.id,
        business_settings,
        calendar,
        local_now().date(),
        days or app_settings.BOOKING_WINDOW_DAYS,
    )
