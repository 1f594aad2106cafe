from datetime import datetime
from typing import List
import logging
import uuid

from barberbook.core.exceptions import PersistenceFailure
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditAction, AuditLogEntry

logger = logging.getLogger(__name__)

async def record(repository: Repository, action: AuditAction, detail: str) -> None:
    """
    Append an audit entry.

    Fire-and-forget: the state change it describes has already been committed,
    so a failed write is logged and not reported to the caller.
    """
    entry = AuditLogEntry(
        id=str(uuid.uuid4()),
        action=action,
        detail=detail,
        timestamp=datetime.now(),
    )
    try:
        await repository.append_audit_log(entry)
    except PersistenceFailure as e:
        logger.warning(f"Audit entry {action.value} not written: {e.message}")

async def list_entries(repository: Repository, limit: int = 100) -> List[AuditLogEntry]:
    return await repository.list_audit_log(limit)
