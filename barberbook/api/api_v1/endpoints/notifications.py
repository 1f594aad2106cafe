from fastapi import APIRouter, Depends
from typing import List

from barberbook.api.deps import get_notification_service
from barberbook.core.auth import get_current_user
from barberbook.schemas.notification import Reminder
from barberbook.schemas.user import User
from barberbook.services.notification_service import NotificationService

router = APIRouter()

@router.get("/reminders", response_model=List[Reminder])
async def get_my_reminders(
    notifications: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_user),
):
    """
    Reminders raised for the current user's upcoming bookings
    """
    return notifications.reminders_for(current_user.id)
