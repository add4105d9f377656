# API Router for filing Release Requests
import logging
from typing import List

from fastapi import APIRouter, Body, HTTPException
from pydantic import Field

from custody_service.app.api.dependencies import IdentityDep, WorkflowDep
from custody_service.app.models import ReleaseRequestDB
from custody_service.app.models.base import CamelModel

logger = logging.getLogger(__name__)
router = APIRouter()


class CreateReleaseRequest(CamelModel):
    asset_id: str
    document_ids: List[str] = Field(default_factory=list)


@router.post("/requests", status_code=201, response_model=ReleaseRequestDB, tags=["Release Requests"])
async def create_release_request_api(
    workflow: WorkflowDep,
    identity: IdentityDep,
    request_data: CreateReleaseRequest = Body(...),
):
    try:
        return await workflow.create(identity.user_id, request_data.asset_id, request_data.document_ids)
    except Exception as e:
        logger.error(f"Error filing release request for asset {request_data.asset_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")
