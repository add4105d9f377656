# Operations for the Users Collection
import logging
from typing import Dict, Iterable, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from custody_service.app.models import UserDB, UserSummary

logger = logging.getLogger(__name__)
USERS_COLLECTION = "users"

async def add_user(db: AsyncIOMotorDatabase, user: UserDB) -> UserDB:
    """Inserts a user record. A duplicate email raises pymongo's DuplicateKeyError."""
    await db[USERS_COLLECTION].insert_one(user.model_dump())
    logger.info(f"Added user ID: {user.id} with role {user.role}")
    return user

async def get_user_by_email(db: AsyncIOMotorDatabase, email: str) -> Optional[UserDB]:
    doc = await db[USERS_COLLECTION].find_one({"email": email})
    return UserDB(**doc) if doc else None

async def count_users(db: AsyncIOMotorDatabase) -> int:
    return await db[USERS_COLLECTION].count_documents({})

async def get_user_summaries(db: AsyncIOMotorDatabase, user_ids: Iterable[str]) -> Dict[str, UserSummary]:
    """Resolves display fields for a batch of users, keyed by user id. Unknown ids are simply absent."""
    ids = list(set(user_ids))
    if not ids:
        return {}
    cursor = db[USERS_COLLECTION].find({"id": {"$in": ids}}, {"_id": 0, "id": 1, "name": 1, "email": 1})
    docs = await cursor.to_list(length=None)
    return {doc["id"]: UserSummary(**doc) for doc in docs}
