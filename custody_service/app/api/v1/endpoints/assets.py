# API Router for Assets
import logging
from typing import List

from fastapi import APIRouter, HTTPException

from custody_service.app.api.dependencies import DatabaseDep, IdentityDep
from custody_service.app.models import AssetDB
from custody_service.infrastructure.database import asset_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/assets", response_model=List[AssetDB], tags=["Assets"])
async def list_assets_api(db: DatabaseDep, identity: IdentityDep):
    try:
        return await asset_store.list_assets(db)
    except Exception as e:
        logger.error(f"Error listing assets for user {identity.user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")
