# Operations for the Release Requests Collection
import datetime
import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from custody_service.app.models import ReleaseRequestDB

logger = logging.getLogger(__name__)
RELEASE_REQUESTS_COLLECTION = "requests"

async def add_release_request(db: AsyncIOMotorDatabase, release_request: ReleaseRequestDB) -> ReleaseRequestDB:
    await db[RELEASE_REQUESTS_COLLECTION].insert_one(release_request.model_dump())
    logger.info(f"Added release request ID: {release_request.id} by user {release_request.user_id} for asset {release_request.asset_id}")
    return release_request

async def get_release_request_by_id(db: AsyncIOMotorDatabase, request_id: str) -> Optional[ReleaseRequestDB]:
    doc = await db[RELEASE_REQUESTS_COLLECTION].find_one({"id": request_id})
    return ReleaseRequestDB(**doc) if doc else None

async def list_release_requests(db: AsyncIOMotorDatabase) -> List[ReleaseRequestDB]:
    """All release requests in natural storage order."""
    docs = await db[RELEASE_REQUESTS_COLLECTION].find().to_list(length=None)
    return [ReleaseRequestDB(**doc) for doc in docs]

async def update_release_request_status(
    db: AsyncIOMotorDatabase,
    request_id: str,
    new_status: str,
    processed_by: str,
    expected_status: Optional[str] = None
) -> Optional[ReleaseRequestDB]:
    """
    Records a processing decision and returns the updated request.
    With expected_status set, only a request currently in that status is updated.
    Returns None when nothing matched.
    """
    query_filter = {"id": request_id}
    if expected_status is not None:
        query_filter["status"] = expected_status

    updated_doc = await db[RELEASE_REQUESTS_COLLECTION].find_one_and_update(
        query_filter,
        {"$set": {
            "status": new_status,
            "processed_at": datetime.datetime.now(datetime.UTC),
            "processed_by": processed_by,
        }},
        return_document=ReturnDocument.AFTER
    )
    if not updated_doc:
        logger.warning(f"Release request ID: {request_id} not matched for status update (expected status: {expected_status}).")
        return None
    logger.info(f"Release request ID: {request_id} status set to {new_status} by {processed_by}.")
    return ReleaseRequestDB(**updated_doc)
