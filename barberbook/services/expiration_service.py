from datetime import datetime
from typing import List, Optional
import logging

from barberbook.core.clock import local_now, slot_end
from barberbook.core.config import Settings
from barberbook.core.exceptions import InvalidTransition, PersistenceFailure
from barberbook.db.repository import Repository
from barberbook.schemas.booking import Booking, BookingStatus
from barberbook.services.booking_service import expire_booking
from barberbook.services.settings_service import get_business_settings

logger = logging.getLogger(__name__)

def is_overdue(booking: Booking, slot_duration_minutes: int, now: datetime) -> bool:
    """A BOOKED booking is overdue once its slot has ended without a check-in."""
    if booking.status != BookingStatus.BOOKED:
        return False
    return now > slot_end(booking.date, booking.timeSlot, slot_duration_minutes)

async def sweep_expired_bookings(
    repository: Repository,
    app_settings: Settings,
    now: Optional[datetime] = None,
) -> List[Booking]:
    """
    Expire every overdue BOOKED booking and return the ones expired by this run.

    Idempotent: bookings already moved on are skipped, including ones that
    another client completes or cancels while the sweep is running. A storage
    failure on one booking is logged and does not stop the rest of the sweep.
    """
    now = now or local_now()
    business_settings = await get_business_settings(repository, app_settings)
    bookings = await repository.list_bookings()

    expired = []
    for booking in bookings:
        if not is_overdue(booking, business_settings.slotDurationMinutes, now):
            continue
        try:
            expired.append(await expire_booking(repository, booking))
        except InvalidTransition as e:
            logger.debug(f"Skipped expiring {booking.id}: {e.message}")
        except PersistenceFailure as e:
            # Left BOOKED; the next tick retries it
            logger.error(f"Could not expire {booking.id}: {e.message} ({e.cause})")

    if expired:
        logger.info(f"Expired {len(expired)} overdue booking(s)")
    return expired
