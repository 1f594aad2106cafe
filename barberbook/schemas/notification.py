from pydantic import BaseModel
from datetime import datetime

class Reminder(BaseModel):
    bookingId: str
    userId: str
    providerId: str
    date: str
    timeSlot: str
    title: str
    message: str
    createdAt: datetime
