import logging

from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditAction
from barberbook.schemas.settings import BusinessSettings
from barberbook.services import audit_service

logger = logging.getLogger(__name__)

def default_business_settings(app_settings: Settings) -> BusinessSettings:
    return BusinessSettings(
        openingTime=app_settings.DEFAULT_OPENING_TIME,
        closingTime=app_settings.DEFAULT_CLOSING_TIME,
        slotDurationMinutes=app_settings.DEFAULT_SLOT_DURATION_MINUTES,
        maxSlotsPerProviderPerDay=app_settings.DEFAULT_MAX_SLOTS_PER_PROVIDER_PER_DAY,
    )

async def get_business_settings(repository: Repository, app_settings: Settings) -> BusinessSettings:
    """Stored business settings, or the configured defaults if none were saved yet."""
    stored = await repository.get_settings()
    return stored or default_business_settings(app_settings)

async def update_business_settings(repository: Repository, business_settings: BusinessSettings) -> BusinessSettings:
    await repository.save_settings(business_settings)
    await audit_service.record(
        repository,
        AuditAction.SETTINGS_UPDATED,
        f"Hours {business_settings.openingTime}-{business_settings.closingTime}, "
        f"{business_settings.slotDurationMinutes} min slots, "
        f"max {business_settings.maxSlotsPerProviderPerDay} per provider per day",
    )
    logger.info("Business settings updated")
    return business_settings

async def seed_business_settings(repository: Repository, app_settings: Settings) -> None:
    if await repository.get_settings() is None:
        await repository.save_settings(default_business_settings(app_settings))
        logger.info("Seeded default business settings.")
