from fastapi import APIRouter, Depends

from barberbook.api.deps import get_repository
from barberbook.core.auth import get_current_user
from barberbook.db.repository import Repository
from barberbook.schemas.checkin import ScanRequest, ScanResult
from barberbook.schemas.user import User
from barberbook.services.checkin_service import handle_scan

router = APIRouter()

@router.post("/scan", response_model=ScanResult)
async def scan_code(
    scan: ScanRequest,
    repository: Repository = Depends(get_repository),
    current_user: User = Depends(get_current_user),
):
    """
    Handle a scanned QR code.

    A provider code returns the provider to preselect in the booking flow.
    Anything else is treated as a booking check-in token.
    """
    return await handle_scan(repository, scan.code)
