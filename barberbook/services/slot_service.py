from typing import List, Tuple

from barberbook.core.clock import from_minutes, to_minutes
from barberbook.core.exceptions import InvalidSettings
from barberbook.schemas.settings import BusinessSettings

NOON_HOUR = 12

def generate_time_slots(opening_time: str, closing_time: str, slot_duration_minutes: int) -> List[str]:
    """
    Bookable slot start times between opening and closing.

    Slots start at ``opening_time`` and step by ``slot_duration_minutes``.
    A slot is only offered if it ends by ``closing_time``; a trailing partial
    period is dropped, so the count is floor((closing - opening) / duration).

    Raises:
        InvalidSettings: the duration is not a positive number of minutes
    """
    if slot_duration_minutes <= 0:
        raise InvalidSettings(f"Slot duration must be positive, got {slot_duration_minutes}")

    start = to_minutes(opening_time)
    end = to_minutes(closing_time)

    slots = []
    current = start
    while current + slot_duration_minutes <= end:
        slots.append(from_minutes(current))
        current += slot_duration_minutes
    return slots

def slots_for(business_settings: BusinessSettings) -> List[str]:
    return generate_time_slots(
        business_settings.openingTime,
        business_settings.closingTime,
        business_settings.slotDurationMinutes,
    )

def is_morning(time_slot: str) -> bool:
    return int(time_slot.split(":")[0]) < NOON_HOUR

def split_morning_afternoon(slots: List[str]) -> Tuple[List[str], List[str]]:
    """Display grouping only."""
    morning = [slot for slot in slots if is_morning(slot)]
    afternoon = [slot for slot in slots if not is_morning(slot)]
    return morning, afternoon

def theoretical_capacity(business_settings: BusinessSettings) -> int:
    """Daily capacity the schedule can physically offer a single provider."""
    return min(business_settings.maxSlotsPerProviderPerDay, len(slots_for(business_settings)))
