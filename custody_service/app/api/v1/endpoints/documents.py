# API Router for Uploaded Documents
import logging
from typing import List

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from custody_service.app.api.dependencies import DatabaseDep, IdentityDep, SettingsDep
from custody_service.app.models import DocumentDB
from custody_service.app.service.document_intake import intake_document
from custody_service.infrastructure.database import document_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/documents", status_code=201, response_model=DocumentDB, tags=["Documents"])
async def upload_document_api(
    db: DatabaseDep,
    settings: SettingsDep,
    identity: IdentityDep,
    document_type: str = Form("", alias="type"),
    document: UploadFile = File(...),
):
    try:
        return await intake_document(db, identity.user_id, document_type, document, settings.UPLOAD_DIR)
    except Exception as e:
        logger.error(f"Error storing document for user {identity.user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")
    finally:
        await document.close()


@router.get("/documents", response_model=List[DocumentDB], tags=["Documents"])
async def list_my_documents_api(db: DatabaseDep, identity: IdentityDep):
    try:
        return await document_store.list_documents_for_user(db, identity.user_id)
    except Exception as e:
        logger.error(f"Error listing documents for user {identity.user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")
