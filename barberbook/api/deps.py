from fastapi import HTTPException, Request, status
from typing import Optional

from barberbook.core.clock import format_date, local_now, parse_date
from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.services.availability_service import BusinessCalendar
from barberbook.services.notification_service import NotificationService

# Everything stateful hangs off app.state, set up in barberbook.main

def get_repository(request: Request) -> Repository:
    return request.app.state.repository

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_calendar(request: Request) -> BusinessCalendar:
    return request.app.state.calendar

def get_notification_service(request: Request) -> NotificationService:
    return request.app.state.notifications

def resolve_date(value: Optional[str]) -> str:
    """Validate a ``YYYY-MM-DD`` query value, defaulting to today."""
    if value is None:
        return format_date(local_now())
    try:
        parse_date(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date must be formatted as YYYY-MM-DD"
        )
    return value
