from fastapi import APIRouter, Depends

from barberbook.api.deps import get_app_settings, get_repository
from barberbook.core.auth import get_current_admin
from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.schemas.settings import BusinessSettings
from barberbook.schemas.user import User
from barberbook.services.settings_service import get_business_settings, update_business_settings

router = APIRouter()

@router.get("/", response_model=BusinessSettings)
async def read_settings(
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
):
    """
    Business hours, slot duration and daily capacity
    """
    return await get_business_settings(repository, app_settings)

@router.put("/", response_model=BusinessSettings)
async def save_settings(
    business_settings: BusinessSettings,
    repository: Repository = Depends(get_repository),
    current_admin: User = Depends(get_current_admin),
):
    """
    Replace the business settings (operator only)
    """
    return await update_business_settings(repository, business_settings)
