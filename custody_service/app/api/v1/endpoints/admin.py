# API Router for admin review of Release Requests
import logging
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException

from custody_service.app.api.dependencies import WorkflowDep, require_role
from custody_service.app.models import ReleaseRequestDB, ResolvedReleaseRequest, UserRole
from custody_service.app.models.base import CamelModel
from custody_service.app.service.exceptions import InvalidRequestStateError, ReleaseRequestNotFoundError
from custody_service.app.service.security import Identity

logger = logging.getLogger(__name__)
router = APIRouter()

require_admin = require_role(UserRole.ADMIN.value)


class TransitionRequest(CamelModel):
    status: str # "approved" or "rejected"; other values are recorded without touching the asset


@router.get("/admin/requests", response_model=List[ResolvedReleaseRequest], tags=["Admin"])
async def list_release_requests_api(workflow: WorkflowDep, identity: Identity = Depends(require_admin)):
    try:
        return await workflow.list()
    except Exception as e:
        logger.error(f"Error listing release requests: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")


@router.put("/admin/requests/{request_id}", response_model=ReleaseRequestDB, tags=["Admin"])
async def transition_release_request_api(
    request_id: str,
    workflow: WorkflowDep,
    identity: Identity = Depends(require_admin),
    request_data: TransitionRequest = Body(...),
):
    try:
        return await workflow.transition(request_id, request_data.status, identity.user_id)
    except ReleaseRequestNotFoundError as e:
        logger.warning(f"Transition of unknown release request {request_id}: {e}")
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRequestStateError as e:
        logger.warning(f"Transition refused for release request {request_id}: {e}")
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error processing release request {request_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")
