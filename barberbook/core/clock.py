"""Wall-clock helpers for the ``YYYY-MM-DD`` / ``HH:MM`` string formats."""
from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def local_now() -> datetime:
    """Naive local wall-clock time; bookings carry no timezone offset."""
    return datetime.now()


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def to_minutes(time_slot: str) -> int:
    """``"08:45"`` -> 525"""
    hours, minutes = time_slot.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def slot_start(date_str: str, time_slot: str) -> datetime:
    return datetime.strptime(f"{date_str} {time_slot}", f"{DATE_FORMAT} {TIME_FORMAT}")


def slot_end(date_str: str, time_slot: str, duration_minutes: int) -> datetime:
    return slot_start(date_str, time_slot) + timedelta(minutes=duration_minutes)
