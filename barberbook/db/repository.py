"""
Persistence port used by the booking services.

Adapters are the only source of truth: services never keep booking state
between calls and re-read before every decision. Two guards must be atomic
inside the adapter, since the in-process checks alone cannot close the race
between concurrent clients:

* ``create_booking`` rejects a BOOKED booking whose (provider, date, time)
  already has a BOOKED booking.
* ``update_booking_status`` only writes when the stored status still equals
  ``expected_status``.

Both raise or report failure instead of silently overwriting. I/O problems
surface as ``PersistenceFailure``.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from barberbook.schemas.audit import AuditLogEntry
from barberbook.schemas.booking import Booking, BookingStatus
from barberbook.schemas.provider import Provider
from barberbook.schemas.settings import BusinessSettings
from barberbook.schemas.user import User


class Repository(ABC):

    # Bookings

    @abstractmethod
    async def list_bookings(self) -> List[Booking]:
        ...

    @abstractmethod
    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        ...

    @abstractmethod
    async def create_booking(self, booking: Booking) -> None:
        """Insert, raising ``ConstraintViolation`` if the slot is already BOOKED."""

    @abstractmethod
    async def update_booking_status(
        self,
        booking_id: str,
        status: BookingStatus,
        expected_status: BookingStatus = BookingStatus.BOOKED,
    ) -> bool:
        """Compare-and-set; False when the booking is missing or has moved on."""

    # Providers

    @abstractmethod
    async def list_providers(self) -> List[Provider]:
        ...

    @abstractmethod
    async def get_provider(self, provider_id: str) -> Optional[Provider]:
        ...

    @abstractmethod
    async def save_provider(self, provider: Provider) -> None:
        ...

    @abstractmethod
    async def delete_provider(self, provider_id: str) -> bool:
        ...

    # Settings

    @abstractmethod
    async def get_settings(self) -> Optional[BusinessSettings]:
        ...

    @abstractmethod
    async def save_settings(self, business_settings: BusinessSettings) -> None:
        ...

    # Audit log

    @abstractmethod
    async def append_audit_log(self, entry: AuditLogEntry) -> None:
        ...

    @abstractmethod
    async def list_audit_log(self, limit: int = 100) -> List[AuditLogEntry]:
        """Newest first."""

    # Users

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create_user(self, user: User) -> None:
        """Insert, raising ``ConstraintViolation`` if the username exists."""

    async def close(self) -> None:
        return None
