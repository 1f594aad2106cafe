from datetime import datetime

import pytest

from barberbook.schemas.booking import BookingStatus
from barberbook.schemas.notification import Reminder
from barberbook.services.notification_service import INBOX_LIMIT, InboxNotifier, NotificationService

from conftest import make_booking

TODAY = "2024-05-08"


@pytest.mark.asyncio
async def test_reminder_sent_once_inside_window(repository):
    await repository.create_booking(make_booking("soon", "09:30", date=TODAY))
    await repository.create_booking(make_booking("later", "11:00", date=TODAY))
    service = NotificationService(window_minutes=30)

    sent = await service.check_upcoming(repository, now=datetime(2024, 5, 8, 9, 0))
    assert [r.bookingId for r in sent] == ["soon"]
    assert sent[0].userId == "u1"
    assert "09:30" in sent[0].message

    assert await service.check_upcoming(repository, now=datetime(2024, 5, 8, 9, 10)) == []
    assert len(service.reminders_for("u1")) == 1
    assert service.reminders_for("someone-else") == []


def test_due_window_edges():
    service = NotificationService(window_minutes=30)
    booking = make_booking("b", "09:30", date=TODAY)

    assert not service.is_due(booking, datetime(2024, 5, 8, 8, 59))
    assert service.is_due(booking, datetime(2024, 5, 8, 9, 0))
    assert not service.is_due(booking, datetime(2024, 5, 8, 9, 30))
    assert not service.is_due(booking.model_copy(update={"status": BookingStatus.CANCELLED}),
                              datetime(2024, 5, 8, 9, 15))


class FlakyNotifier(InboxNotifier):
    def __init__(self):
        super().__init__()
        self.failures = 1

    async def send(self, reminder):
        if self.failures:
            self.failures -= 1
            raise ConnectionError("gateway down")
        await super().send(reminder)


@pytest.mark.asyncio
async def test_failed_reminder_is_retried(repository):
    await repository.create_booking(make_booking("soon", "09:30", date=TODAY))
    service = NotificationService(notifier=FlakyNotifier(), window_minutes=30)

    assert await service.check_upcoming(repository, now=datetime(2024, 5, 8, 9, 5)) == []
    sent = await service.check_upcoming(repository, now=datetime(2024, 5, 8, 9, 6))
    assert [r.bookingId for r in sent] == ["soon"]


@pytest.mark.asyncio
async def test_reminder_state_is_released_after_the_appointment(repository):
    for day in range(6, 11):
        date = f"2024-05-{day:02d}"
        await repository.create_booking(make_booking(f"b{day}", "09:30", date=date))
    service = NotificationService(window_minutes=30)

    for day in range(6, 11):
        sent = await service.check_upcoming(repository, now=datetime(2024, 5, day, 9, 15))
        assert [r.bookingId for r in sent] == [f"b{day}"]
        # the previous day's booking is gone from both the tracking set and the inbox
        assert service._surfaced == {f"b{day}"}
        assert [r.bookingId for r in service.reminders_for("u1")] == [f"b{day}"]

    await service.check_upcoming(repository, now=datetime(2024, 5, 10, 9, 45))
    assert service._surfaced == set()
    assert service.reminders_for("u1") == []


@pytest.mark.asyncio
async def test_terminal_booking_is_forgotten(repository):
    await repository.create_booking(make_booking("soon", "09:30", date=TODAY))
    service = NotificationService(window_minutes=30)
    await service.check_upcoming(repository, now=datetime(2024, 5, 8, 9, 0))

    await repository.update_booking_status("soon", BookingStatus.CANCELLED)
    await service.check_upcoming(repository, now=datetime(2024, 5, 8, 9, 5))

    assert service._surfaced == set()


@pytest.mark.asyncio
async def test_inbox_is_capped_per_user():
    notifier = InboxNotifier()
    for index in range(INBOX_LIMIT + 5):
        await notifier.send(Reminder(
            bookingId=f"b{index}",
            userId="u1",
            providerId="p1",
            date=TODAY,
            timeSlot="09:30",
            title="Upcoming booking",
            message="Your appointment starts at 09:30, please arrive on time.",
            createdAt=datetime(2024, 5, 8, 9, 0),
        ))

    kept = notifier.reminders_for("u1")
    assert len(kept) == INBOX_LIMIT
    assert kept[0].bookingId == "b5"
