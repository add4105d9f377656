# Static files: stored uploads and the front-end entry document
import logging
import pathlib
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse

from custody_service.app.api.dependencies import SettingsDep

logger = logging.getLogger(__name__)
router = APIRouter()

INDEX_FILE = "index.html"
API_PREFIX = "api"


def resolve_inside(root_dir: str, path: str) -> Optional[pathlib.Path]:
    """The file at path under root_dir, or None when it is missing or escapes root_dir."""
    root = pathlib.Path(root_dir).resolve()
    candidate = (root / path).resolve()
    if candidate.is_relative_to(root) and candidate.is_file():
        return candidate
    return None


@router.get("/uploads/{file_name}", include_in_schema=False)
async def serve_upload(file_name: str, settings: SettingsDep):
    stored = resolve_inside(settings.UPLOAD_DIR, file_name)
    if stored is None:
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(stored)


# Must be registered last: it matches every GET path
@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str, request: Request, settings: SettingsDep):
    if full_path == API_PREFIX or full_path.startswith(f"{API_PREFIX}/"):
        # API misses never fall through to the front-end; a trailing slash is redirected to the route without it
        stripped = full_path.rstrip("/")
        if stripped != full_path and stripped != API_PREFIX:
            return RedirectResponse(request.url.replace(path=f"/{stripped}"), status_code=307)
        raise HTTPException(status_code=404, detail="Not found")
    static_file = resolve_inside(settings.STATIC_DIR, full_path) if full_path else None
    return FileResponse(static_file or pathlib.Path(settings.STATIC_DIR) / INDEX_FILE)
