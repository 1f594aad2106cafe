from fastapi import APIRouter, Depends, status
from typing import List

from barberbook.api.deps import get_repository
from barberbook.core.auth import get_current_admin
from barberbook.db.repository import Repository
from barberbook.schemas.provider import Provider, ProviderCode, ProviderCreate, ProviderUpdate
from barberbook.schemas.user import User
from barberbook.services.checkin_service import provider_code
from barberbook.services.provider_service import (
    create_provider, delete_provider, get_provider, list_providers, update_provider,
)

router = APIRouter()

@router.get("/", response_model=List[Provider])
async def get_providers(repository: Repository = Depends(get_repository)):
    """
    List all providers
    """
    return await list_providers(repository)

@router.get("/{provider_id}", response_model=Provider)
async def get_provider_details(provider_id: str, repository: Repository = Depends(get_repository)):
    return await get_provider(repository, provider_id)

@router.get("/{provider_id}/code", response_model=ProviderCode)
async def get_provider_code(provider_id: str, repository: Repository = Depends(get_repository)):
    """
    Text to print as the provider's booking QR code
    """
    provider = await get_provider(repository, provider_id)
    return ProviderCode(providerId=provider.id, code=provider_code(provider.id))

@router.post("/", response_model=Provider)
async def add_provider(
    provider_in: ProviderCreate,
    repository: Repository = Depends(get_repository),
    current_admin: User = Depends(get_current_admin),
):
    """
    Add a provider (operator only)
    """
    return await create_provider(repository, provider_in)

@router.put("/{provider_id}", response_model=Provider)
async def edit_provider(
    provider_id: str,
    provider_update: ProviderUpdate,
    repository: Repository = Depends(get_repository),
    current_admin: User = Depends(get_current_admin),
):
    """
    Update a provider (operator only)
    """
    return await update_provider(repository, provider_id, provider_update)

@router.delete("/{provider_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_provider(
    provider_id: str,
    repository: Repository = Depends(get_repository),
    current_admin: User = Depends(get_current_admin),
):
    """
    Delete a provider (operator only). Existing bookings are kept.
    """
    await delete_provider(repository, provider_id)
