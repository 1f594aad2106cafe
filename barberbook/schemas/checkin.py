from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum

from barberbook.schemas.booking import Booking

PROVIDER_CODE_PREFIX = "PROVIDER_BOOK:"

class ScanKind(str, Enum):
    PROVIDER = "provider"
    CHECKIN = "checkin"

class ScanRequest(BaseModel):
    code: str = Field(..., min_length=1)

class ScanResult(BaseModel):
    kind: ScanKind
    success: bool = True
    message: str = ""
    providerId: Optional[str] = None
    providerName: Optional[str] = None
    timeSlot: Optional[str] = None
    booking: Optional[Booking] = None
