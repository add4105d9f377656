# Document Intake: stores one uploaded file and records it for its owner
import logging
import os
import pathlib
import shutil
import uuid

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from custody_service.app.models import DocumentDB
from custody_service.app.service.exceptions import StorageError
from custody_service.infrastructure.database import document_store

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


def stored_file_name(original_name: str) -> str:
    """Unique on-disk name: a uuid4 prefix plus the caller's base file name."""
    base_name = os.path.basename(original_name or "") or "upload.bin"
    return f"{uuid.uuid4()}-{base_name}"


def save_upload(upload: UploadFile, upload_dir: str) -> str:
    target_dir = pathlib.Path(upload_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    file_name = stored_file_name(upload.filename)
    with open(target_dir / file_name, "wb") as out:
        shutil.copyfileobj(upload.file, out)
    logger.info(f"Stored upload {upload.filename!r} as {file_name}.")
    return file_name


async def intake_document(db: AsyncIOMotorDatabase, user_id: str, document_type: str, upload: UploadFile, upload_dir: str) -> DocumentDB:
    """Writes the file to the upload directory, then records it for the calling user. No content checks."""
    try:
        # Blocking disk copy from the spooled upload
        file_name = await run_in_threadpool(save_upload, upload, upload_dir)
    except OSError as e:
        raise StorageError(f"Failed to store uploaded file: {e}") from e

    document = DocumentDB(user_id=user_id, type=document_type, file_url=f"{UPLOADS_URL_PREFIX}/{file_name}")
    try:
        return await document_store.add_document(db, document)
    except PyMongoError as e:
        raise StorageError(f"Failed to record document: {e}") from e
