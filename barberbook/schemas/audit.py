from pydantic import BaseModel
from datetime import datetime
from enum import Enum

class AuditAction(str, Enum):
    BOOKING_CREATED = "BOOKING_CREATED"
    BOOKING_CANCELLED = "BOOKING_CANCELLED"
    BOOKING_COMPLETED = "BOOKING_COMPLETED"
    BOOKING_EXPIRED = "BOOKING_EXPIRED"
    SETTINGS_UPDATED = "SETTINGS_UPDATED"
    PROVIDER_SAVED = "PROVIDER_SAVED"
    PROVIDER_DELETED = "PROVIDER_DELETED"
    USER_REGISTERED = "USER_REGISTERED"

class AuditLogEntry(BaseModel):
    id: str
    action: AuditAction
    detail: str
    timestamp: datetime
