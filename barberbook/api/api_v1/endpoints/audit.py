from fastapi import APIRouter, Depends, Query
from typing import List

from barberbook.api.deps import get_repository
from barberbook.core.auth import get_current_admin
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditLogEntry
from barberbook.schemas.user import User
from barberbook.services.audit_service import list_entries

router = APIRouter()

@router.get("/", response_model=List[AuditLogEntry])
async def get_audit_log(
    limit: int = Query(100, ge=1, le=200),
    repository: Repository = Depends(get_repository),
    current_admin: User = Depends(get_current_admin),
):
    """
    Most recent audit entries first (operator only)
    """
    return await list_entries(repository, limit)
