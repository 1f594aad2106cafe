from datetime import date

from barberbook.schemas.availability import LoadLevel
from barberbook.schemas.booking import BookingStatus
from barberbook.schemas.provider import Provider, UNKNOWN_PROVIDER_NAME
from barberbook.services.queue_service import (
    build_dashboard, build_week_board, load_level, next_up, provider_name,
    provider_queue, waiting_ahead,
)

from conftest import FRIDAY, make_booking

PROVIDERS = [Provider(id="p1", name="Alex"), Provider(id="p2", name="Sarah")]


def sample_day():
    return [
        make_booking("late", "14:00"),
        make_booking("early", "08:45", status=BookingStatus.COMPLETED),
        make_booking("middle", "10:15"),
        make_booking("gone", "09:30", status=BookingStatus.CANCELLED),
        make_booking("other", "08:00", provider_id="p2"),
    ]


def test_queue_is_ordered_and_skips_released_bookings():
    queue = provider_queue(sample_day(), "p1", FRIDAY)

    assert [b.id for b in queue] == ["early", "middle", "late"]
    assert next_up(queue).id == "middle"


def test_next_up_is_none_when_everyone_is_served():
    queue = provider_queue([make_booking("a", "08:00", status=BookingStatus.COMPLETED)], "p1", FRIDAY)
    assert next_up(queue) is None
    assert next_up([]) is None


def test_waiting_ahead():
    bookings = sample_day()
    late = next(b for b in bookings if b.id == "late")

    ahead = waiting_ahead(bookings, late)

    assert [b.id for b in ahead] == ["middle"]
    assert waiting_ahead(bookings, next(b for b in bookings if b.id == "middle")) == []


def test_provider_name_fallback():
    assert provider_name(PROVIDERS, "p2") == "Sarah"
    assert provider_name(PROVIDERS, "deleted") == UNKNOWN_PROVIDER_NAME


def test_load_levels():
    assert load_level(0, 12) == LoadLevel.FREE
    assert load_level(8, 12) == LoadLevel.FREE
    assert load_level(9, 12) == LoadLevel.BUSY
    assert load_level(12, 12) == LoadLevel.FULL


def test_dashboard(business_settings):
    dashboard = build_dashboard(sample_day(), PROVIDERS, business_settings, FRIDAY)

    alex, sarah = dashboard
    assert alex.providerName == "Alex"
    assert alex.queuedCount == 3
    assert alex.nextUp.id == "middle"
    assert alex.capacity == 10
    assert sarah.queuedCount == 1
    assert sarah.load == LoadLevel.FREE


def test_week_board(business_settings):
    board = build_week_board(sample_day(), PROVIDERS, business_settings, date(2024, 5, 9), 3)

    alex = board[0]
    assert [cell.date for cell in alex.days] == ["2024-05-09", FRIDAY, "2024-05-11"]
    assert [cell.bookedCount for cell in alex.days] == [0, 3, 0]
