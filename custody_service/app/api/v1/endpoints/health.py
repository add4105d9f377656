# API Router for Health Checks
import logging

from fastapi import APIRouter

from custody_service.app.api.dependencies import DatabaseDep, SettingsDep

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/health", tags=["Monitoring"])
async def health_check(db: DatabaseDep, settings: SettingsDep):
    mongodb_status = "connected"
    try:
        await db.command('ping') # Ping DB
    except Exception as e:
        logger.error(f"MongoDB health check ping failed: {e}")
        mongodb_status = "disconnected"
    return {"status": "ok", "components": {"mongodb": mongodb_status}, "service_name": settings.SERVICE_NAME}
