from datetime import datetime
from typing import Dict, FrozenSet, List, Optional
import logging
import uuid

from barberbook.core.clock import local_now
from barberbook.core.config import Settings
from barberbook.core.exceptions import (
    BookingNotFound, CapacityExceeded, ConstraintViolation, InvalidTransition,
    MissingCustomerDetails, NonWorkingDay, OutsideBusinessHours, ProviderNotFound,
    SlotInPast, SlotTaken,
)
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditAction
from barberbook.schemas.booking import Booking, BookingCreate, BookingStatus
from barberbook.schemas.user import User
from barberbook.services import audit_service
from barberbook.services.availability_service import (
    BusinessCalendar, is_day_full, is_past_slot, is_slot_occupied,
)
from barberbook.services.settings_service import get_business_settings
from barberbook.services.slot_service import slots_for

logger = logging.getLogger(__name__)

# BOOKED is the only non-terminal status
ALLOWED_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.BOOKED: frozenset({
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
        BookingStatus.EXPIRED,
    }),
}

TRANSITION_AUDIT_ACTIONS = {
    BookingStatus.COMPLETED: AuditAction.BOOKING_COMPLETED,
    BookingStatus.CANCELLED: AuditAction.BOOKING_CANCELLED,
    BookingStatus.EXPIRED: AuditAction.BOOKING_EXPIRED,
}

def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())

async def create_booking(
    repository: Repository,
    booking_in: BookingCreate,
    user: User,
    calendar: BusinessCalendar,
    app_settings: Settings,
    now: Optional[datetime] = None,
) -> Booking:
    """
    Create a BOOKED booking for the requesting user.

    Preconditions are checked, in order, against a booking snapshot read just
    before the insert: working day, time on the slot grid, provider capacity,
    free slot, not in the past. The repository's unique guard catches a
    concurrent client that commits the same slot between our read and our
    write.

    The returned booking id doubles as the customer's check-in code.
    """
    now = now or local_now()

    provider = await repository.get_provider(booking_in.providerId)
    if provider is None:
        raise ProviderNotFound(booking_in.providerId)

    customer_name = booking_in.customerName or user.name
    customer_phone = booking_in.customerPhone or user.phone
    if not customer_name or not customer_name.strip() or not customer_phone or not customer_phone.strip():
        raise MissingCustomerDetails()

    if calendar.is_non_working_day(booking_in.date):
        raise NonWorkingDay(booking_in.date)

    business_settings = await get_business_settings(repository, app_settings)
    if booking_in.timeSlot not in slots_for(business_settings):
        raise OutsideBusinessHours(booking_in.timeSlot)

    bookings = await repository.list_bookings()
    max_per_day = business_settings.maxSlotsPerProviderPerDay
    if is_day_full(bookings, provider.id, booking_in.date, max_per_day):
        raise CapacityExceeded(provider.id, booking_in.date, max_per_day)
    if is_slot_occupied(bookings, provider.id, booking_in.date, booking_in.timeSlot):
        raise SlotTaken(booking_in.date, booking_in.timeSlot)
    if is_past_slot(booking_in.date, booking_in.timeSlot, now):
        raise SlotInPast(booking_in.date, booking_in.timeSlot)

    booking = Booking(
        id=str(uuid.uuid4()),
        providerId=provider.id,
        userId=user.id,
        customerName=customer_name.strip(),
        customerPhone=customer_phone.strip(),
        date=booking_in.date,
        timeSlot=booking_in.timeSlot,
        status=BookingStatus.BOOKED,
        createdAt=now,
    )

    try:
        await repository.create_booking(booking)
    except ConstraintViolation:
        logger.info(f"Lost race for {provider.id} {booking.date} {booking.timeSlot}")
        raise SlotTaken(booking.date, booking.timeSlot)

    await audit_service.record(
        repository,
        AuditAction.BOOKING_CREATED,
        f"{booking.customerName} booked {provider.name} on {booking.date} {booking.timeSlot}",
    )
    logger.info(f"Booking {booking.id} created for {provider.id} {booking.date} {booking.timeSlot}")
    return booking

async def get_booking_by_id(repository: Repository, booking_id: str) -> Booking:
    booking = await repository.get_booking(booking_id)
    if booking is None:
        raise BookingNotFound(booking_id)
    return booking

async def get_user_bookings(repository: Repository, user_id: str) -> List[Booking]:
    """Booking history for a user, most recent slot first."""
    bookings = [b for b in await repository.list_bookings() if b.userId == user_id]
    bookings.sort(key=lambda b: (b.date, b.timeSlot), reverse=True)
    return bookings

async def transition_booking(repository: Repository, booking: Booking, target: BookingStatus) -> Booking:
    """
    Move a booking along the lifecycle.

    The write is a compare-and-set on the status we validated, so a booking
    that another client moved in the meantime is reported as an invalid
    transition rather than overwritten.
    """
    if not can_transition(booking.status, target):
        raise InvalidTransition(booking.id, booking.status.value, target.value)

    updated = await repository.update_booking_status(booking.id, target, expected_status=booking.status)
    if not updated:
        current = await repository.get_booking(booking.id)
        current_status = current.status.value if current else "missing"
        raise InvalidTransition(booking.id, current_status, target.value)

    await audit_service.record(
        repository,
        TRANSITION_AUDIT_ACTIONS[target],
        f"Booking {booking.id} ({booking.date} {booking.timeSlot}) {booking.status.value} -> {target.value}",
    )
    return booking.model_copy(update={"status": target})

async def cancel_booking(repository: Repository, booking_id: str) -> Booking:
    """Customer cancellation; the slot is free again as soon as this returns."""
    booking = await get_booking_by_id(repository, booking_id)
    cancelled = await transition_booking(repository, booking, BookingStatus.CANCELLED)
    logger.info(f"Booking {booking_id} cancelled")
    return cancelled

async def complete_booking(repository: Repository, booking: Booking) -> Booking:
    return await transition_booking(repository, booking, BookingStatus.COMPLETED)

async def expire_booking(repository: Repository, booking: Booking) -> Booking:
    return await transition_booking(repository, booking, BookingStatus.EXPIRED)
