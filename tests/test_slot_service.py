import pytest

from barberbook.core.clock import to_minutes
from barberbook.core.exceptions import InvalidSettings
from barberbook.schemas.settings import BusinessSettings
from barberbook.services.slot_service import (
    generate_time_slots, split_morning_afternoon, theoretical_capacity,
)


def test_default_schedule_slots():
    slots = generate_time_slots("08:00", "17:00", 45)

    assert slots == [
        "08:00", "08:45", "09:30", "10:15", "11:00", "11:45",
        "12:30", "13:15", "14:00", "14:45", "15:30", "16:15",
    ]
    # 16:15 ends exactly at closing; 17:00 itself is never offered
    assert "17:00" not in slots


@pytest.mark.parametrize("opening,closing,duration", [
    ("08:00", "17:00", 45),
    ("09:00", "18:00", 30),
    ("09:00", "10:00", 40),
    ("10:15", "19:50", 25),
    ("00:00", "23:59", 60),
    ("12:00", "12:30", 45),
])
def test_slot_sequence_properties(opening, closing, duration):
    slots = generate_time_slots(opening, closing, duration)
    span = to_minutes(closing) - to_minutes(opening)

    assert len(slots) == span // duration
    assert all(slot < closing for slot in slots)
    assert all(to_minutes(slot) + duration <= to_minutes(closing) for slot in slots)
    assert slots == sorted(set(slots))
    if slots:
        assert slots[0] == opening


def test_trailing_partial_period_is_dropped():
    assert generate_time_slots("09:00", "10:00", 40) == ["09:00"]


@pytest.mark.parametrize("duration", [0, -15])
def test_non_positive_duration_fails_fast(duration):
    with pytest.raises(InvalidSettings):
        generate_time_slots("08:00", "17:00", duration)


def test_opening_after_closing_yields_no_slots():
    assert generate_time_slots("18:00", "09:00", 30) == []


def test_morning_afternoon_partition():
    morning, afternoon = split_morning_afternoon(generate_time_slots("08:00", "17:00", 45))

    assert morning[-1] == "11:45"
    assert afternoon[0] == "12:30"
    assert len(morning) + len(afternoon) == 12


def test_theoretical_capacity_is_bounded_by_schedule():
    roomy = BusinessSettings(openingTime="08:00", closingTime="17:00",
                             slotDurationMinutes=45, maxSlotsPerProviderPerDay=20)
    tight = BusinessSettings(openingTime="08:00", closingTime="17:00",
                             slotDurationMinutes=45, maxSlotsPerProviderPerDay=5)

    assert theoretical_capacity(roomy) == 12
    assert theoretical_capacity(tight) == 5
