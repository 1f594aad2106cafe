from typing import List
import logging
import uuid

from barberbook.core.exceptions import ProviderNotFound
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditAction
from barberbook.schemas.provider import Provider, ProviderCreate, ProviderUpdate
from barberbook.services import audit_service

logger = logging.getLogger(__name__)

DEFAULT_PROVIDERS = [
    Provider(
        id="b1",
        name='Alex "The Fade" Miller',
        specialty="Fades & modern cuts",
        avatarUrl="https://picsum.photos/100/100?random=1",
        bio="Skin fades and texture work.",
    ),
    Provider(
        id="b2",
        name="Sarah Scissors",
        specialty="Long hair & styling",
        avatarUrl="https://picsum.photos/100/100?random=2",
        bio="Ten years of complex layered cuts.",
    ),
    Provider(
        id="b3",
        name="Davide Classic",
        specialty="Beards & classic cuts",
        avatarUrl="https://picsum.photos/100/100?random=3",
        bio="Old-school technique with a modern finish.",
    ),
]

async def list_providers(repository: Repository) -> List[Provider]:
    return await repository.list_providers()

async def get_provider(repository: Repository, provider_id: str) -> Provider:
    provider = await repository.get_provider(provider_id)
    if provider is None:
        raise ProviderNotFound(provider_id)
    return provider

async def create_provider(repository: Repository, provider_in: ProviderCreate) -> Provider:
    provider = Provider(id=str(uuid.uuid4()), **provider_in.model_dump())
    await repository.save_provider(provider)
    await audit_service.record(repository, AuditAction.PROVIDER_SAVED, f"Added provider {provider.name} ({provider.id})")
    return provider

async def update_provider(repository: Repository, provider_id: str, provider_update: ProviderUpdate) -> Provider:
    provider = await get_provider(repository, provider_id)

    # Update only provided fields
    update_data = provider_update.model_dump(exclude_unset=True, exclude_none=True)
    if update_data:
        provider = provider.model_copy(update=update_data)
        await repository.save_provider(provider)
        await audit_service.record(repository, AuditAction.PROVIDER_SAVED, f"Updated provider {provider.name} ({provider.id})")
    return provider

async def delete_provider(repository: Repository, provider_id: str) -> None:
    """Remove a provider. Their bookings stay and show a placeholder name."""
    if not await repository.delete_provider(provider_id):
        raise ProviderNotFound(provider_id)
    await audit_service.record(repository, AuditAction.PROVIDER_DELETED, f"Deleted provider {provider_id}")

async def seed_providers(repository: Repository) -> None:
    if await repository.list_providers():
        return
    for provider in DEFAULT_PROVIDERS:
        await repository.save_provider(provider)
    logger.info(f"Seeded {len(DEFAULT_PROVIDERS)} default providers.")
