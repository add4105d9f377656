# Registration and login
import logging
from typing import Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.concurrency import run_in_threadpool
from pymongo.errors import DuplicateKeyError

from custody_service.app.config import AppSettings
from custody_service.app.models import UserDB, UserRole
from custody_service.app.service.exceptions import ValidationError
from custody_service.app.service.security import create_access_token, hash_password, verify_password
from custody_service.infrastructure.database import user_store

logger = logging.getLogger(__name__)

VALID_ROLES = {role.value for role in UserRole}


async def register_user(
    db: AsyncIOMotorDatabase,
    settings: AppSettings,
    email: str,
    password: str,
    name: Optional[str] = None,
    role: Optional[str] = None
) -> Tuple[UserDB, str]:
    """Creates a user and issues a session token for it."""
    role = role or UserRole.USER.value
    if role not in VALID_ROLES:
        raise ValidationError(f"`{role}` is not a valid role.")
    if not email:
        raise ValidationError("Email is required.")
    if not password:
        raise ValidationError("Password is required.")

    if await user_store.get_user_by_email(db, email):
        raise ValidationError(f"A user with email {email} already exists.")

    try:
        password_hash = await run_in_threadpool(hash_password, password, rounds=settings.BCRYPT_ROUNDS)
    except ValueError as e: # bcrypt refuses passwords longer than 72 bytes
        raise ValidationError(str(e)) from e

    user = UserDB(name=name or "", email=email, password_hash=password_hash, role=role)
    try:
        await user_store.add_user(db, user)
    except DuplicateKeyError:
        # Lost a race with a concurrent registration for the same email
        raise ValidationError(f"A user with email {email} already exists.")

    return user, create_access_token(user.id, user.role, settings)


async def authenticate_user(db: AsyncIOMotorDatabase, settings: AppSettings, email: str, password: str) -> Tuple[UserDB, str]:
    """Checks credentials and issues a session token. Unknown email and wrong password fail identically."""
    user = await user_store.get_user_by_email(db, email)
    if not user or not await run_in_threadpool(verify_password, password, user.password_hash):
        logger.info("Login rejected: invalid credentials.")
        raise ValidationError("Invalid credentials")
    return user, create_access_token(user.id, user.role, settings)
