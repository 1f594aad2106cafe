from datetime import datetime
from typing import Optional
import logging

from barberbook.core.clock import format_date, local_now
from barberbook.core.exceptions import (
    InvalidTransition, NotCheckable, OutOfOrder, ProviderNotFound, UnrecognizedCode,
)
from barberbook.db.repository import Repository
from barberbook.schemas.booking import BookingStatus
from barberbook.schemas.checkin import PROVIDER_CODE_PREFIX, ScanKind, ScanResult
from barberbook.services.booking_service import complete_booking
from barberbook.services.queue_service import provider_name, waiting_ahead

logger = logging.getLogger(__name__)

def provider_code(provider_id: str) -> str:
    """Text encoded in a provider's printed booking QR code."""
    return f"{PROVIDER_CODE_PREFIX}{provider_id}"

def is_provider_code(code: str) -> bool:
    return code.startswith(PROVIDER_CODE_PREFIX)

async def resolve_provider_code(repository: Repository, code: str) -> ScanResult:
    """A provider code opens the booking flow with that provider selected."""
    provider_id = code[len(PROVIDER_CODE_PREFIX):]
    provider = await repository.get_provider(provider_id)
    if provider is None:
        raise ProviderNotFound(provider_id)
    return ScanResult(
        kind=ScanKind.PROVIDER,
        providerId=provider.id,
        providerName=provider.name,
        message=f"Book with {provider.name}",
    )

async def check_in(repository: Repository, token: str, now: Optional[datetime] = None) -> ScanResult:
    """
    Check a customer in with their booking token.

    Works on a fresh read of all bookings. Same-day bookings are served in
    slot order per provider: while an earlier BOOKED booking for that provider
    is still waiting, this one is refused with ``OutOfOrder``.

    Raises:
        UnrecognizedCode: no booking has this id; nothing changes
        NotCheckable: the booking is no longer BOOKED
        OutOfOrder: earlier bookings are still waiting
    """
    now = now or local_now()
    bookings = await repository.list_bookings()

    booking = next((b for b in bookings if b.id == token), None)
    if booking is None:
        logger.debug("Scanned code matched no booking")
        raise UnrecognizedCode(token)

    if booking.status != BookingStatus.BOOKED:
        raise NotCheckable(booking.id, booking.status.value)

    if booking.date == format_date(now):
        ahead = waiting_ahead(bookings, booking)
        if ahead:
            raise OutOfOrder(booking.id, len(ahead), ahead[0].timeSlot)

    try:
        completed = await complete_booking(repository, booking)
    except InvalidTransition as e:
        # Moved on by another client after our read
        raise NotCheckable(booking.id, e.details["currentStatus"]) from e

    providers = await repository.list_providers()
    name = provider_name(providers, booking.providerId)
    logger.info(f"Checked in booking {booking.id} for {booking.providerId} at {booking.timeSlot}")

    return ScanResult(
        kind=ScanKind.CHECKIN,
        success=True,
        message=f"Checked in, {booking.timeSlot} service with {name} is starting",
        providerId=booking.providerId,
        providerName=name,
        timeSlot=booking.timeSlot,
        booking=completed,
    )

async def handle_scan(repository: Repository, code: str, now: Optional[datetime] = None) -> ScanResult:
    """Route a scanned value by its prefix before treating it as a booking id."""
    code = code.strip()
    if is_provider_code(code):
        return await resolve_provider_code(repository, code)
    return await check_in(repository, code, now)
