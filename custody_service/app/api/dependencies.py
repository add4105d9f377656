# FastAPI dependency providers: settings, database, workflow, auth gate and role filter
import logging
from typing import Annotated, Callable, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from motor.motor_asyncio import AsyncIOMotorDatabase

from custody_service.app.config import AppSettings, settings as app_settings
from custody_service.app.service.exceptions import AuthenticationError, AuthorizationError, ConfigurationError
from custody_service.app.service.security import Identity, decode_access_token
from custody_service.app.service.workflow import ReleaseRequestWorkflow
from custody_service.infrastructure.database.connection import get_db

logger = logging.getLogger(__name__)

# auto_error is off so a missing header can be answered with our own 401.
# It also yields None for other schemes, which require_identity treats as a presented credential.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_settings() -> AppSettings:
    return app_settings

SettingsDep = Annotated[AppSettings, Depends(get_settings)]
DatabaseDep = Annotated[AsyncIOMotorDatabase, Depends(get_db)]


async def get_workflow(db: DatabaseDep, settings: SettingsDep) -> ReleaseRequestWorkflow:
    return ReleaseRequestWorkflow(db, require_pending=settings.REQUIRE_PENDING_FOR_TRANSITION)

WorkflowDep = Annotated[ReleaseRequestWorkflow, Depends(get_workflow)]


async def require_identity(
    request: Request,
    settings: SettingsDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    Auth gate. Missing credential -> 401, unverifiable credential -> 400.
    """
    try:
        if credentials is None:
            _, _, presented = request.headers.get("Authorization", "").partition(" ")
            if not presented.strip():
                raise AuthenticationError("Access denied", missing=True)
            raise AuthenticationError("Invalid token")
        return decode_access_token(credentials.credentials, settings)
    except AuthenticationError as e:
        raise HTTPException(status_code=401 if e.missing else 400, detail=str(e))
    except ConfigurationError as e:
        logger.error(f"Cannot verify bearer tokens: {e}")
        raise HTTPException(status_code=500, detail="Server error")

IdentityDep = Annotated[Identity, Depends(require_identity)]


def require_role(role: str) -> Callable:
    """
    Dependency factory for the role filter. Exact match only: admin does not
    satisfy a staff requirement.

    Usage:
        @router.get("/admin/thing")
        async def thing(identity: Identity = Depends(require_role("admin"))): ...
    """
    async def _check_role(identity: IdentityDep) -> Identity:
        if identity.role != role:
            error = AuthorizationError(required_role=role, actual_role=identity.role)
            logger.info(f"Role check failed for user {identity.user_id}: required {role}, has {identity.role}.")
            raise HTTPException(status_code=403, detail=str(error))
        return identity

    return _check_role
