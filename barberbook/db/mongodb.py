from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError
from pydantic import BaseModel

from barberbook.core.exceptions import ConstraintViolation, PersistenceFailure
from barberbook.db.repository import Repository
from barberbook.schemas.audit import AuditLogEntry
from barberbook.schemas.booking import Booking, BookingStatus
from barberbook.schemas.provider import Provider
from barberbook.schemas.settings import BusinessSettings
from barberbook.schemas.user import User

logger = logging.getLogger(__name__)

SETTINGS_DOCUMENT_ID = 1
NO_OBJECT_ID = {"_id": 0}

def _to_document(model: BaseModel) -> Dict[str, Any]:
    """Dump a model for BSON: enums as plain values, datetimes kept native."""
    document = model.model_dump(mode="json")
    for field, value in model:
        if isinstance(value, datetime):
            document[field] = value
    return document

class MongoRepository(Repository):
    """Repository backed by MongoDB through motor."""

    def __init__(self, client: AsyncIOMotorClient, db_name: str):
        self.client = client
        self.db = client[db_name]

    @classmethod
    async def connect(cls, mongo_uri: str, db_name: str) -> "MongoRepository":
        """Connect to MongoDB and make sure the indexes exist."""
        try:
            logger.info("Connecting to MongoDB...")
            repository = cls(AsyncIOMotorClient(mongo_uri), db_name)
            await repository.create_indexes()
            logger.info("Connected to MongoDB.")
            return repository
        except PyMongoError as e:
            logger.error(f"Could not connect to MongoDB: {e}")
            raise PersistenceFailure("connect", e) from e

    async def close(self) -> None:
        logger.info("Closing MongoDB connection...")
        self.client.close()
        logger.info("MongoDB connection closed.")

    async def create_indexes(self) -> None:
        """Create indexes for collections."""
        await self.db.bookings.create_index("id", unique=True)
        await self.db.bookings.create_index([("providerId", ASCENDING), ("date", ASCENDING)])
        await self.db.bookings.create_index("userId")
        # At most one BOOKED booking per slot, whatever the clients race on
        await self.db.bookings.create_index(
            [("providerId", ASCENDING), ("date", ASCENDING), ("timeSlot", ASCENDING)],
            unique=True,
            partialFilterExpression={"status": BookingStatus.BOOKED.value},
            name="unique_booked_slot",
        )

        await self.db.providers.create_index("id", unique=True)

        await self.db.users.create_index("id", unique=True)
        await self.db.users.create_index("username", unique=True)

        await self.db.audit_logs.create_index([("timestamp", DESCENDING)])

        logger.info("MongoDB indexes created successfully.")

    # Bookings

    async def list_bookings(self) -> List[Booking]:
        try:
            documents = await self.db.bookings.find({}, NO_OBJECT_ID).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list bookings: {e}")
            raise PersistenceFailure("list bookings", e) from e
        return [Booking(**document) for document in documents]

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        try:
            document = await self.db.bookings.find_one({"id": booking_id}, NO_OBJECT_ID)
        except PyMongoError as e:
            logger.error(f"Failed to fetch booking {booking_id}: {e}")
            raise PersistenceFailure("get booking", e) from e
        return Booking(**document) if document else None

    async def create_booking(self, booking: Booking) -> None:
        try:
            await self.db.bookings.insert_one(_to_document(booking))
        except DuplicateKeyError as e:
            raise ConstraintViolation(str(e)) from e
        except PyMongoError as e:
            logger.error(f"Failed to insert booking {booking.id}: {e}")
            raise PersistenceFailure("create booking", e) from e

    async def update_booking_status(
        self,
        booking_id: str,
        status: BookingStatus,
        expected_status: BookingStatus = BookingStatus.BOOKED,
    ) -> bool:
        try:
            result = await self.db.bookings.update_one(
                {"id": booking_id, "status": expected_status.value},
                {"$set": {"status": status.value, "updatedAt": datetime.now()}},
            )
        except PyMongoError as e:
            logger.error(f"Failed to update booking {booking_id}: {e}")
            raise PersistenceFailure("update booking status", e) from e
        return result.modified_count == 1

    # Providers

    async def list_providers(self) -> List[Provider]:
        try:
            documents = await self.db.providers.find({}, NO_OBJECT_ID).sort("name", ASCENDING).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list providers: {e}")
            raise PersistenceFailure("list providers", e) from e
        return [Provider(**document) for document in documents]

    async def get_provider(self, provider_id: str) -> Optional[Provider]:
        try:
            document = await self.db.providers.find_one({"id": provider_id}, NO_OBJECT_ID)
        except PyMongoError as e:
            raise PersistenceFailure("get provider", e) from e
        return Provider(**document) if document else None

    async def save_provider(self, provider: Provider) -> None:
        try:
            await self.db.providers.replace_one({"id": provider.id}, _to_document(provider), upsert=True)
        except PyMongoError as e:
            logger.error(f"Failed to save provider {provider.id}: {e}")
            raise PersistenceFailure("save provider", e) from e

    async def delete_provider(self, provider_id: str) -> bool:
        try:
            result = await self.db.providers.delete_one({"id": provider_id})
        except PyMongoError as e:
            raise PersistenceFailure("delete provider", e) from e
        return result.deleted_count > 0

    # Settings

    async def get_settings(self) -> Optional[BusinessSettings]:
        try:
            document = await self.db.settings.find_one({"_id": SETTINGS_DOCUMENT_ID})
        except PyMongoError as e:
            logger.error(f"Failed to fetch settings: {e}")
            raise PersistenceFailure("get settings", e) from e
        if not document:
            return None
        document.pop("_id", None)
        return BusinessSettings(**document)

    async def save_settings(self, business_settings: BusinessSettings) -> None:
        try:
            await self.db.settings.replace_one(
                {"_id": SETTINGS_DOCUMENT_ID},
                _to_document(business_settings),
                upsert=True,
            )
        except PyMongoError as e:
            raise PersistenceFailure("save settings", e) from e

    # Audit log

    async def append_audit_log(self, entry: AuditLogEntry) -> None:
        try:
            await self.db.audit_logs.insert_one(_to_document(entry))
        except PyMongoError as e:
            raise PersistenceFailure("append audit log", e) from e

    async def list_audit_log(self, limit: int = 100) -> List[AuditLogEntry]:
        try:
            cursor = self.db.audit_logs.find({}, NO_OBJECT_ID).sort("timestamp", DESCENDING).limit(limit)
            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise PersistenceFailure("list audit log", e) from e
        return [AuditLogEntry(**document) for document in documents]

    # Users

    async def get_user(self, user_id: str) -> Optional[User]:
        try:
            document = await self.db.users.find_one({"id": user_id}, NO_OBJECT_ID)
        except PyMongoError as e:
            raise PersistenceFailure("get user", e) from e
        return User(**document) if document else None

    async def get_user_by_username(self, username: str) -> Optional[User]:
        try:
            document = await self.db.users.find_one({"username": username}, NO_OBJECT_ID)
        except PyMongoError as e:
            raise PersistenceFailure("get user", e) from e
        return User(**document) if document else None

    async def create_user(self, user: User) -> None:
        try:
            await self.db.users.insert_one(_to_document(user))
        except DuplicateKeyError as e:
            raise ConstraintViolation(str(e)) from e
        except PyMongoError as e:
            raise PersistenceFailure("create user", e) from e
