# Operations for the Documents Collection
import logging
from typing import List

from motor.motor_asyncio import AsyncIOMotorDatabase

from custody_service.app.models import DocumentDB

logger = logging.getLogger(__name__)
DOCUMENTS_COLLECTION = "documents"

async def add_document(db: AsyncIOMotorDatabase, document: DocumentDB) -> DocumentDB:
    """Adds a new uploaded document record to the collection."""
    await db[DOCUMENTS_COLLECTION].insert_one(document.model_dump())
    logger.info(f"Added document ID: {document.id} for user {document.user_id} (type: {document.type})")
    return document

async def list_documents_for_user(db: AsyncIOMotorDatabase, user_id: str) -> List[DocumentDB]:
    """Lists the documents owned by one user."""
    docs = await db[DOCUMENTS_COLLECTION].find({"user_id": user_id}).to_list(length=None)
    return [DocumentDB(**doc) for doc in docs]
