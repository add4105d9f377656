# Operations for the Assets Collection
import logging
from typing import Dict, Iterable, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from custody_service.app.models import AssetDB

logger = logging.getLogger(__name__)
ASSETS_COLLECTION = "assets"

async def add_asset(db: AsyncIOMotorDatabase, asset: AssetDB) -> AssetDB:
    await db[ASSETS_COLLECTION].insert_one(asset.model_dump())
    logger.info(f"Added asset ID: {asset.id} ({asset.name})")
    return asset

async def list_assets(db: AsyncIOMotorDatabase) -> List[AssetDB]:
    docs = await db[ASSETS_COLLECTION].find().to_list(length=None)
    return [AssetDB(**doc) for doc in docs]

async def get_assets_by_ids(db: AsyncIOMotorDatabase, asset_ids: Iterable[str]) -> Dict[str, AssetDB]:
    ids = list(set(asset_ids))
    if not ids:
        return {}
    docs = await db[ASSETS_COLLECTION].find({"id": {"$in": ids}}).to_list(length=None)
    return {doc["id"]: AssetDB(**doc) for doc in docs}

async def set_asset_status(db: AsyncIOMotorDatabase, asset_id: str, status: str) -> bool:
    """Sets only the custody status of an asset. Returns False when no asset matched."""
    result = await db[ASSETS_COLLECTION].update_one({"id": asset_id}, {"$set": {"status": status}})
    if result.matched_count == 0:
        logger.warning(f"Asset ID: {asset_id} not found for status update to {status}.")
        return False
    logger.info(f"Asset ID: {asset_id} status set to {status}.")
    return True

async def count_assets(db: AsyncIOMotorDatabase) -> int:
    return await db[ASSETS_COLLECTION].count_documents({})
