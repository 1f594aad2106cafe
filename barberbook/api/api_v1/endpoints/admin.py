from fastapi import APIRouter, Depends
from typing import Dict, List

from barberbook.api.deps import get_app_settings, get_repository
from barberbook.core.auth import get_current_admin
from barberbook.core.config import Settings
from barberbook.db.repository import Repository
from barberbook.schemas.user import User
from barberbook.services.expiration_service import sweep_expired_bookings

router = APIRouter()

@router.post("/sweep", response_model=Dict[str, List[str]])
async def run_expiration_sweep(
    repository: Repository = Depends(get_repository),
    app_settings: Settings = Depends(get_app_settings),
    current_admin: User = Depends(get_current_admin),
):
    """
    Run one expiration pass now instead of waiting for the scheduler
    """
    expired = await sweep_expired_bookings(repository, app_settings)
    return {"expired": [booking.id for booking in expired]}
