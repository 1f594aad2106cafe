import pytest

from barberbook.core.exceptions import (
    BookingNotFound, CapacityExceeded, InvalidTransition, MissingCustomerDetails,
    NonWorkingDay, OutsideBusinessHours, ProviderNotFound, SlotInPast, SlotTaken,
)
from barberbook.db.memory import InMemoryRepository
from barberbook.schemas.audit import AuditAction
from barberbook.schemas.booking import BookingCreate, BookingStatus
from barberbook.schemas.provider import Provider
from barberbook.schemas.user import User
from barberbook.services import booking_service

from conftest import FRIDAY, HOLIDAY, NOW, SATURDAY, make_booking


async def book(repository, customer, calendar, app_settings, time_slot, date=FRIDAY, provider_id="p1", **extra):
    booking_in = BookingCreate(providerId=provider_id, date=date, timeSlot=time_slot, **extra)
    return await booking_service.create_booking(repository, booking_in, customer, calendar, app_settings, now=NOW)


@pytest.mark.asyncio
async def test_create_booking(repository, customer, calendar, app_settings):
    booking = await book(repository, customer, calendar, app_settings, "09:30",
                         customerName="  Jamie  ", customerPhone="555-0111")

    assert booking.status == BookingStatus.BOOKED
    assert booking.customerName == "Jamie"
    assert booking.customerPhone == "555-0111"
    assert booking.userId == "u1"
    assert booking.createdAt == NOW

    stored = await repository.get_booking(booking.id)
    assert stored == booking

    audit = await repository.list_audit_log()
    assert audit[0].action == AuditAction.BOOKING_CREATED


@pytest.mark.asyncio
async def test_contact_details_fall_back_to_profile(repository, customer, calendar, app_settings):
    booking = await book(repository, customer, calendar, app_settings, "08:00")

    assert booking.customerName == "Jamie Doe"
    assert booking.customerPhone == "555-0100"


@pytest.mark.asyncio
async def test_missing_contact_details(repository, calendar, app_settings):
    anonymous = User(id="u9", username="anon", name=" ", phone="", hashedPassword="x")

    with pytest.raises(MissingCustomerDetails):
        await book(repository, anonymous, calendar, app_settings, "08:00")
    assert await repository.list_bookings() == []


@pytest.mark.asyncio
async def test_capacity_limit(repository, customer, calendar, app_settings, business_settings):
    await repository.save_settings(business_settings.model_copy(update={"maxSlotsPerProviderPerDay": 2}))
    await book(repository, customer, calendar, app_settings, "08:00")
    await book(repository, customer, calendar, app_settings, "08:45")

    with pytest.raises(CapacityExceeded):
        await book(repository, customer, calendar, app_settings, "09:30")

    # other providers keep their own limit
    await book(repository, customer, calendar, app_settings, "09:30", provider_id="p2")
    assert len(await repository.list_bookings()) == 3


@pytest.mark.asyncio
async def test_completed_bookings_count_toward_capacity(repository, customer, calendar, app_settings, business_settings):
    await repository.save_settings(business_settings.model_copy(update={"maxSlotsPerProviderPerDay": 1}))
    await repository.create_booking(make_booking("done", "08:00", status=BookingStatus.COMPLETED))

    with pytest.raises(CapacityExceeded):
        await book(repository, customer, calendar, app_settings, "09:30")


@pytest.mark.asyncio
@pytest.mark.parametrize("date", [SATURDAY, "2024-05-12", HOLIDAY])
async def test_non_working_days(repository, customer, calendar, app_settings, date):
    with pytest.raises(NonWorkingDay):
        await book(repository, customer, calendar, app_settings, "10:15", date=date)


@pytest.mark.asyncio
async def test_slot_taken(repository, customer, calendar, app_settings):
    await book(repository, customer, calendar, app_settings, "10:15")

    with pytest.raises(SlotTaken) as exc_info:
        await book(repository, customer, calendar, app_settings, "10:15")
    assert exc_info.value.details["timeSlot"] == "10:15"

    # the same time with another provider is free
    await book(repository, customer, calendar, app_settings, "10:15", provider_id="p2")


@pytest.mark.asyncio
async def test_slot_in_past(repository, customer, calendar, app_settings):
    with pytest.raises(SlotInPast):
        await book(repository, customer, calendar, app_settings, "10:15", date="2024-05-07")


@pytest.mark.asyncio
async def test_slot_later_today_is_bookable(repository, customer, calendar, app_settings):
    booking = await book(repository, customer, calendar, app_settings, "08:00", date="2024-05-08")
    assert booking.date == "2024-05-08"


@pytest.mark.asyncio
@pytest.mark.parametrize("time_slot", ["07:15", "09:00", "17:00"])
async def test_time_outside_schedule(repository, customer, calendar, app_settings, time_slot):
    with pytest.raises(OutsideBusinessHours):
        await book(repository, customer, calendar, app_settings, time_slot)


@pytest.mark.asyncio
async def test_unknown_provider(repository, customer, calendar, app_settings):
    with pytest.raises(ProviderNotFound):
        await book(repository, customer, calendar, app_settings, "08:00", provider_id="nobody")


class StaleSnapshotRepository(InMemoryRepository):
    """Simulates a competing client committing between our read and our write."""

    async def list_bookings(self):
        return []


@pytest.mark.asyncio
async def test_concurrent_create_loses_to_storage_guard(customer, calendar, app_settings, business_settings):
    repository = StaleSnapshotRepository()
    await repository.save_settings(business_settings)
    await repository.save_provider(Provider(id="p1", name="Alex"))
    await repository.create_booking(make_booking("first", "11:00"))

    with pytest.raises(SlotTaken):
        await book(repository, customer, calendar, app_settings, "11:00")

    booked = [b for b in repository._bookings.values() if b.timeSlot == "11:00"]
    assert [b.id for b in booked] == ["first"]




@pytest.mark.asyncio
async def test_cancel_frees_slot(repository, customer, calendar, app_settings):
    first = await book(repository, customer, calendar, app_settings, "10:15")

    cancelled = await booking_service.cancel_booking(repository, first.id)
    assert cancelled.status == BookingStatus.CANCELLED

    again = await book(repository, customer, calendar, app_settings, "10:15")
    assert again.id != first.id

    statuses = {b.id: b.status for b in await repository.list_bookings()}
    assert statuses == {first.id: BookingStatus.CANCELLED, again.id: BookingStatus.BOOKED}


@pytest.mark.asyncio
async def test_cancel_twice_is_rejected(repository, customer, calendar, app_settings):
    booking = await book(repository, customer, calendar, app_settings, "10:15")
    await booking_service.cancel_booking(repository, booking.id)

    with pytest.raises(InvalidTransition):
        await booking_service.cancel_booking(repository, booking.id)


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [BookingStatus.COMPLETED, BookingStatus.EXPIRED])
async def test_terminal_bookings_cannot_be_cancelled(repository, status):
    await repository.create_booking(make_booking("t", "08:00", status=status))

    with pytest.raises(InvalidTransition):
        await booking_service.cancel_booking(repository, "t")
    assert (await repository.get_booking("t")).status == status


@pytest.mark.asyncio
async def test_cancel_unknown_booking(repository):
    with pytest.raises(BookingNotFound):
        await booking_service.cancel_booking(repository, "missing")


@pytest.mark.asyncio
async def test_transition_lost_to_concurrent_update(repository):
    await repository.create_booking(make_booking("b1", "08:00"))
    stale = await repository.get_booking("b1")
    await repository.update_booking_status("b1", BookingStatus.COMPLETED)

    with pytest.raises(InvalidTransition) as exc_info:
        await booking_service.transition_booking(repository, stale, BookingStatus.CANCELLED)
    assert exc_info.value.details["currentStatus"] == "COMPLETED"
    assert (await repository.get_booking("b1")).status == BookingStatus.COMPLETED


def test_transition_table():
    assert booking_service.can_transition(BookingStatus.BOOKED, BookingStatus.COMPLETED)
    assert booking_service.can_transition(BookingStatus.BOOKED, BookingStatus.EXPIRED)
    assert not booking_service.can_transition(BookingStatus.CANCELLED, BookingStatus.BOOKED)
    assert not booking_service.can_transition(BookingStatus.EXPIRED, BookingStatus.COMPLETED)


@pytest.mark.asyncio
async def test_never_two_booked_for_same_slot(repository, customer, calendar, app_settings):
    for time_slot in ["08:00", "08:45", "08:00", "09:30", "08:45"]:
        try:
            await book(repository, customer, calendar, app_settings, time_slot)
        except SlotTaken:
            pass

    booked = [(b.providerId, b.date, b.timeSlot) for b in await repository.list_bookings()
              if b.status == BookingStatus.BOOKED]
    assert len(booked) == len(set(booked)) == 3


@pytest.mark.asyncio
async def test_user_history_most_recent_first(repository):
    await repository.create_booking(make_booking("a", "08:00", date="2024-05-09"))
    await repository.create_booking(make_booking("b", "09:30"))
    await repository.create_booking(make_booking("c", "08:00"))
    await repository.create_booking(make_booking("d", "08:45", user_id="someone-else"))

    history = await booking_service.get_user_bookings(repository, "u1")
    assert [b.id for b in history] == ["b", "c", "a"]


@pytest.mark.asyncio
async def test_weekend_reported_before_off_grid_time(repository, customer, calendar, app_settings):
    with pytest.raises(NonWorkingDay):
        await book(repository, customer, calendar, app_settings, "09:00", date=SATURDAY)
