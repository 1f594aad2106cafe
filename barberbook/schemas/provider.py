from pydantic import BaseModel, Field
from typing import Optional

UNKNOWN_PROVIDER_NAME = "Unknown provider"

class ProviderBase(BaseModel):
    name: str = Field(..., min_length=1)
    specialty: str = ""
    avatarUrl: str = ""
    bio: str = ""

class ProviderCreate(ProviderBase):
    pass

class ProviderUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    specialty: Optional[str] = None
    avatarUrl: Optional[str] = None
    bio: Optional[str] = None

class Provider(ProviderBase):
    id: str

class ProviderCode(BaseModel):
    providerId: str
    code: str
