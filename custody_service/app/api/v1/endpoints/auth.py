# API Router for Registration and Login
import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException

from custody_service.app.api.dependencies import DatabaseDep, SettingsDep
from custody_service.app.models import UserPublic
from custody_service.app.models.base import CamelModel
from custody_service.app.service.accounts import authenticate_user, register_user
from custody_service.app.service.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter()


class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: str
    password: str
    role: Optional[str] = None # Defaults to "user"

class LoginRequest(CamelModel):
    email: str
    password: str

class AuthResponse(CamelModel):
    user: UserPublic
    token: str


@router.post("/register", status_code=201, response_model=AuthResponse, tags=["Auth"])
async def register_api(db: DatabaseDep, settings: SettingsDep, request_data: RegisterRequest = Body(...)):
    try:
        user, token = await register_user(
            db,
            settings,
            email=request_data.email,
            password=request_data.password,
            name=request_data.name,
            role=request_data.role,
        )
        return AuthResponse(user=UserPublic.from_db(user), token=token)
    except ValidationError as ve:
        logger.warning(f"Registration rejected for {request_data.email}: {ve}")
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        logger.error(f"Unexpected error registering {request_data.email}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/login", response_model=AuthResponse, tags=["Auth"])
async def login_api(db: DatabaseDep, settings: SettingsDep, request_data: LoginRequest = Body(...)):
    try:
        user, token = await authenticate_user(db, settings, request_data.email, request_data.password)
        return AuthResponse(user=UserPublic.from_db(user), token=token)
    except ValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        logger.error(f"Unexpected error during login: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error")
