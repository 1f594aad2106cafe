from datetime import datetime

import pytest
import pytest_asyncio

from barberbook.core.config import Settings
from barberbook.db.memory import InMemoryRepository
from barberbook.schemas.booking import Booking, BookingStatus
from barberbook.schemas.provider import Provider
from barberbook.schemas.settings import BusinessSettings
from barberbook.schemas.user import User
from barberbook.services.availability_service import BusinessCalendar

# Wednesday morning, before opening
NOW = datetime(2024, 5, 8, 7, 0)
FRIDAY = "2024-05-10"
SATURDAY = "2024-05-11"
HOLIDAY = "2024-05-01"

@pytest.fixture
def app_settings():
    return Settings(
        STORAGE_BACKEND="memory",
        SCHEDULER_ENABLED=False,
        HOLIDAYS=[HOLIDAY],
        WEEKEND_DAYS=[5, 6],
        DEFAULT_OPENING_TIME="08:00",
        DEFAULT_CLOSING_TIME="17:00",
        DEFAULT_SLOT_DURATION_MINUTES=45,
        DEFAULT_MAX_SLOTS_PER_PROVIDER_PER_DAY=10,
    )

@pytest.fixture
def calendar():
    return BusinessCalendar(holidays=[HOLIDAY], weekend_days=[5, 6])

@pytest.fixture
def business_settings():
    return BusinessSettings(
        openingTime="08:00",
        closingTime="17:00",
        slotDurationMinutes=45,
        maxSlotsPerProviderPerDay=10,
    )

@pytest_asyncio.fixture
async def repository(business_settings):
    repo = InMemoryRepository()
    await repo.save_settings(business_settings)
    await repo.save_provider(Provider(id="p1", name="Alex", specialty="Fades"))
    await repo.save_provider(Provider(id="p2", name="Sarah", specialty="Styling"))
    return repo

@pytest.fixture
def customer():
    return User(
        id="u1",
        username="jamie",
        name="Jamie Doe",
        phone="555-0100",
        hashedPassword="not-used",
    )

def make_booking(
    booking_id,
    time_slot,
    date=FRIDAY,
    provider_id="p1",
    status=BookingStatus.BOOKED,
    user_id="u1",
):
    return Booking(
        id=booking_id,
        providerId=provider_id,
        userId=user_id,
        customerName="Customer " + booking_id,
        customerPhone="555-0199",
        date=date,
        timeSlot=time_slot,
        status=status,
        createdAt=NOW,
    )
