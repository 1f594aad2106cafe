from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Set
import logging

from barberbook.core.clock import local_now, slot_start
from barberbook.db.repository import Repository
from barberbook.schemas.booking import Booking, BookingStatus
from barberbook.schemas.notification import Reminder

logger = logging.getLogger(__name__)

# Per user; the oldest reminders are dropped first
INBOX_LIMIT = 20

# In production this would hand off to a push/SMS gateway
class InboxNotifier:
    """Logs each alert and keeps it until the appointment has started."""

    def __init__(self):
        self._inbox: Dict[str, List[Reminder]] = defaultdict(list)

    async def send(self, reminder: Reminder) -> None:
        logger.info(f"Reminder for user {reminder.userId}: {reminder.message}")
        inbox = self._inbox[reminder.userId]
        inbox.append(reminder)
        del inbox[:-INBOX_LIMIT]

    def prune(self, now: datetime) -> None:
        """Drop reminders for appointments that have already started."""
        for user_id in list(self._inbox):
            upcoming = [r for r in self._inbox[user_id] if slot_start(r.date, r.timeSlot) > now]
            if upcoming:
                self._inbox[user_id] = upcoming
            else:
                del self._inbox[user_id]

    def reminders_for(self, user_id: str) -> List[Reminder]:
        return list(self._inbox.get(user_id, []))

class NotificationService:
    """
    Upcoming-booking reminders.

    Re-evaluated on every scheduler tick. A booking is surfaced once while it
    stays inside the reminder window; ids are forgotten as soon as the booking
    leaves the window or stops being BOOKED, so the tracking set only ever
    holds bookings that are currently due.
    """

    def __init__(self, notifier: Optional[InboxNotifier] = None, window_minutes: int = 30):
        self.notifier = notifier or InboxNotifier()
        self.window = timedelta(minutes=window_minutes)
        self._surfaced: Set[str] = set()

    def is_due(self, booking: Booking, now: datetime) -> bool:
        if booking.status != BookingStatus.BOOKED:
            return False
        until_start = slot_start(booking.date, booking.timeSlot) - now
        return timedelta(0) < until_start <= self.window

    async def check_upcoming(self, repository: Repository, now: Optional[datetime] = None) -> List[Reminder]:
        """Send reminders for bookings starting soon; returns the ones sent this tick."""
        now = now or local_now()
        sent = []
        due_ids = set()
        for booking in await repository.list_bookings():
            if not self.is_due(booking, now):
                continue
            due_ids.add(booking.id)
            if booking.id in self._surfaced:
                continue
            reminder = Reminder(
                bookingId=booking.id,
                userId=booking.userId,
                providerId=booking.providerId,
                date=booking.date,
                timeSlot=booking.timeSlot,
                title="Upcoming booking",
                message=f"Your appointment starts at {booking.timeSlot}, please arrive on time.",
                createdAt=now,
            )
            try:
                await self.notifier.send(reminder)
            except Exception as e:
                # Retried on the next tick
                logger.error(f"Error sending reminder for {booking.id}: {str(e)}")
                continue
            self._surfaced.add(booking.id)
            sent.append(reminder)

        # Once out of the window a booking can never be due again
        self._surfaced &= due_ids
        self.notifier.prune(now)
        return sent

    def reminders_for(self, user_id: str) -> List[Reminder]:
        return self.notifier.reminders_for(user_id)
