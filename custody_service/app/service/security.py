"""
Password hashing and bearer session tokens.

Tokens are HS256 JWTs carrying the claims ``id`` and ``role`` with a fixed
one-day validity. The signing secret comes from ``AppSettings.resolve_jwt_secret``.
"""
import datetime
import logging

import bcrypt
import jwt
from pydantic import BaseModel

from custody_service.app.config import AppSettings
from custody_service.app.service.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_TTL = datetime.timedelta(days=1)


class Identity(BaseModel):
    """Caller identity attached to each authenticated call."""
    user_id: str
    role: str


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash
        logger.warning("Password hash could not be checked; treating as mismatch.")
        return False


def create_access_token(user_id: str, role: str, settings: AppSettings) -> str:
    now = datetime.datetime.now(datetime.UTC)
    payload = {"id": user_id, "role": role, "iat": now, "exp": now + TOKEN_TTL}
    return jwt.encode(payload, settings.resolve_jwt_secret(), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: AppSettings) -> Identity:
    """
    Verify a bearer token and return the identity it carries.

    Raises:
        AuthenticationError: If the token is expired, badly signed or lacks claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.resolve_jwt_secret(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired bearer token.")
        raise AuthenticationError("Invalid token")
    except jwt.InvalidTokenError:
        logger.info("Rejected invalid bearer token.")
        raise AuthenticationError("Invalid token")

    user_id = payload.get("id")
    role = payload.get("role")
    if not user_id or not role:
        raise AuthenticationError("Invalid token")
    return Identity(user_id=str(user_id), role=str(role))
