from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from barberbook.api.deps import get_app_settings, get_repository, resolve_date
from barberbook.core.clock import local_now, parse_date
from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.schemas.availability import ProviderQueue, ProviderWeek
from barberbook.services.provider_service import get_provider
from barberbook.services.queue_service import build_dashboard, build_week_board
from barberbook.services.settings_service import get_business_settings

router = APIRouter()

@router.get("/dashboard", response_model=List[ProviderQueue])
async def get_dashboard(
    date: Optional[str] = Query(None, description="Day to show (YYYY-MM-DD), defaults to today"),
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
):
    """
    Every provider's queue for the day, with who is next
    """
    date_str = resolve_date(date)
    business_settings = await get_business_settings(repository, app_settings)
    bookings = await repository.list_bookings()
    providers = await repository.list_providers()
    return build_dashboard(bookings, providers, business_settings, date_str)

@router.get("/week", response_model=List[ProviderWeek])
async def get_week_board(
    start: Optional[str] = Query(None, description="First day (YYYY-MM-DD), defaults to today"),
    days: Optional[int] = Query(None, ge=1, le=31),
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
):
    """
    Booked count against capacity per provider per day
    """
    start_date = parse_date(resolve_date(start)) if start else local_now().date()
    business_settings = await get_business_settings(repository, app_settings)
    bookings = await repository.list_bookings()
    providers = await repository.list_providers()
    return build_week_board(
        bookings, providers, business_settings, start_date, days or app_settings.BOOKING_WINDOW_DAYS
    )

@router.get("/{provider_id}", response_model=ProviderQueue)
async def get_provider_queue(
    provider_id: str,
    date: Optional[str] = Query(None, description="Day to show (YYYY-MM-DD), defaults to today"),
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
):
    date_str = resolve_date(date)
    provider = await get_provider(repository, provider_id)
    business_settings = await get_business_settings(repository, app_settings)
    bookings = await repository.list_bookings()
    return build_dashboard(bookings, [provider], business_settings, date_str)[0]
