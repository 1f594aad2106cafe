from typing import Optional
import logging
import uuid

from barberbook.core.auth import get_password_hash, verify_password
from barberbook.core.config import Settings
from barberbook.core.exceptions import ConstraintViolation
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditAction
from barberbook.schemas.user import User, UserCreate, UserRole
from barberbook.services import audit_service

logger = logging.getLogger(__name__)

async def register_user(repository: Repository, user_in: UserCreate, role: UserRole = UserRole.USER) -> Optional[User]:
    """
    Create a user account.

    Returns None when the username is already taken.
    """
    user = User(
        id=str(uuid.uuid4()),
        username=user_in.username,
        name=user_in.name,
        phone=user_in.phone,
        role=role,
        hashedPassword=get_password_hash(user_in.password),
    )
    try:
        await repository.create_user(user)
    except ConstraintViolation:
        return None
    await audit_service.record(repository, AuditAction.USER_REGISTERED, f"Registered {user.username} ({role.value})")
    return user

async def authenticate_user(repository: Repository, username: str, password: str) -> Optional[User]:
    user = await repository.get_user_by_username(username)
    if user is None or not verify_password(password, user.hashedPassword):
        return None
    return user

async def seed_admin(repository: Repository, app_settings: Settings) -> None:
    if await repository.get_user_by_username(app_settings.ADMIN_USERNAME):
        return
    await register_user(
        repository,
        UserCreate(
            username=app_settings.ADMIN_USERNAME,
            password=app_settings.ADMIN_PASSWORD,
            name="Operator",
            phone="-",
        ),
        role=UserRole.ADMIN,
    )
    logger.info(f"Seeded operator account {app_settings.ADMIN_USERNAME}.")
