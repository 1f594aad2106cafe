from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from barberbook.api.deps import get_app_settings, get_calendar, get_repository
from barberbook.core.auth import get_current_user
from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.schemas.booking import Booking, BookingCreate, BookingResponse
from barberbook.schemas.user import User, UserRole
from barberbook.services.availability_service import BusinessCalendar
from barberbook.services.booking_service import (
    cancel_booking, create_booking, get_booking_by_id, get_user_bookings,
)
from barberbook.services.queue_service import provider_name

router = APIRouter()

def _check_access(booking: Booking, current_user: User) -> None:
    if booking.userId != current_user.id and current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this booking"
        )

async def _with_provider_names(repository: Repository, bookings: List[Booking]) -> List[BookingResponse]:
    providers = await repository.list_providers()
    return [
        BookingResponse(**booking.model_dump(), providerName=provider_name(providers, booking.providerId))
        for booking in bookings
    ]

@router.post("/", response_model=BookingResponse)
async def create_new_booking(
    booking_in: BookingCreate,
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
    calendar: BusinessCalendar = Depends(get_calendar),
    current_user: User = Depends(get_current_user),
):
    """
    Book a slot with a provider. The returned id is the check-in code.
    """
    booking = await create_booking(repository, booking_in, current_user, calendar, app_settings)
    return (await _with_provider_names(repository, [booking]))[0]

@router.get("/me", response_model=List[BookingResponse])
async def get_my_bookings(
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """
    Booking history of the current user, most recent first
    """
    bookings = await get_user_bookings(repository, current_user.id)
    return await _with_provider_names(repository, bookings)

@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """
    Get booking details (owner or operator)
    """
    booking = await get_booking_by_id(repository, booking_id)
    _check_access(booking, current_user)
    return (await _with_provider_names(repository, [booking]))[0]

@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking_endpoint(
    booking_id: str,
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """
    Cancel a booking that has not been served yet
    """
    booking = await get_booking_by_id(repository, booking_id)
    _check_access(booking, current_user)
    cancelled = await cancel_booking(repository, booking_id)
    return (await _with_provider_names(repository, [cancelled]))[0]
