from pydantic import BaseModel, Field, model_validator

from barberbook.schemas.booking import TIME_PATTERN

class BusinessSettings(BaseModel):
    openingTime: str = Field(..., pattern=TIME_PATTERN)
    closingTime: str = Field(..., pattern=TIME_PATTERN)
    slotDurationMinutes: int = Field(..., gt=0)
    maxSlotsPerProviderPerDay: int = Field(..., ge=1)

    @model_validator(mode="after")
    def opening_before_closing(self):
        # Zero-padded HH:MM compares correctly as text
        if self.openingTime >= self.closingTime:
            raise ValueError("openingTime must be earlier than closingTime")
        return self
