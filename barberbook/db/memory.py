from typing import Dict, List, Optional

from barberbook.core.exceptions import ConstraintViolation
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditLogEntry
from barberbook.schemas.booking import Booking, BookingStatus
from barberbook.schemas.provider import Provider
from barberbook.schemas.settings import BusinessSettings
from barberbook.schemas.user import User

# Only the most recent entries are kept
AUDIT_LOG_LIMIT = 200

class InMemoryRepository(Repository):
    """
    Process-local storage for development and tests.

    Every method completes without awaiting anything, so each guard runs
    atomically with respect to other coroutines on the event loop.
    Stored models are copied on the way in and out.
    """

    def __init__(self):
        self._bookings: Dict[str, Booking] = {}
        self._providers: Dict[str, Provider] = {}
        self._users: Dict[str, User] = {}
        self._settings: Optional[BusinessSettings] = None
        self._audit_log: List[AuditLogEntry] = []

    async def list_bookings(self) -> List[Booking]:
        return [b.model_copy() for b in self._bookings.values()]

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        booking = self._bookings.get(booking_id)
        return booking.model_copy() if booking else None

    async def create_booking(self, booking: Booking) -> None:
        if booking.id in self._bookings:
            raise ConstraintViolation(f"duplicate booking id {booking.id}")
        if booking.status == BookingStatus.BOOKED:
            for existing in self._bookings.values():
                if (
                    existing.status == BookingStatus.BOOKED
                    and existing.providerId == booking.providerId
                    and existing.date == booking.date
                    and existing.timeSlot == booking.timeSlot
                ):
                    raise ConstraintViolation(
                        f"slot {booking.providerId}/{booking.date}/{booking.timeSlot} already booked"
                    )
        self._bookings[booking.id] = booking.model_copy()

    async def update_booking_status(
        self,
        booking_id: str,
        status: BookingStatus,
        expected_status: BookingStatus = BookingStatus.BOOKED,
    ) -> bool:
        booking = self._bookings.get(booking_id)
        if booking is None or booking.status != expected_status:
            return False
        self._bookings[booking_id] = booking.model_copy(update={"status": status})
        return True

    async def list_providers(self) -> List[Provider]:
        return [p.model_copy() for p in self._providers.values()]

    async def get_provider(self, provider_id: str) -> Optional[Provider]:
        provider = self._providers.get(provider_id)
        return provider.model_copy() if provider else None

    async def save_provider(self, provider: Provider) -> None:
        self._providers[provider.id] = provider.model_copy()

    async def delete_provider(self, provider_id: str) -> bool:
        return self._providers.pop(provider_id, None) is not None

    async def get_settings(self) -> Optional[BusinessSettings]:
        return self._settings.model_copy() if self._settings else None

    async def save_settings(self, business_settings: BusinessSettings) -> None:
        self._settings = business_settings.model_copy()

    async def append_audit_log(self, entry: AuditLogEntry) -> None:
        self._audit_log.insert(0, entry)
        del self._audit_log[AUDIT_LOG_LIMIT:]

    async def list_audit_log(self, limit: int = 100) -> List[AuditLogEntry]:
        return list(self._audit_log[:limit])

    async def get_user(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    async def create_user(self, user: User) -> None:
        if user.id in self._users or any(u.username == user.username for u in self._users.values()):
            raise ConstraintViolation(f"username {user.username} already exists")
        self._users[user.id] = user.model_copy()
