import datetime
import uuid
from enum import Enum

from pydantic import Field

from .base import CamelModel, UtcDatetime


class UserRole(str, Enum):
    USER = "user"
    STAFF = "staff"
    ADMIN = "admin"


class UserDB(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4().hex))
    name: str = ""
    email: str
    password_hash: str # bcrypt hash, never serialized to API responses
    role: UserRole = UserRole.USER.value
    created_at: UtcDatetime = Field(default_factory=lambda: datetime.datetime.now(datetime.UTC))


class UserPublic(CamelModel): # What callers get to see of a user
    id: str
    name: str
    email: str
    role: UserRole

    @classmethod
    def from_db(cls, user: UserDB) -> "UserPublic":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role)


class UserSummary(CamelModel): # Display fields resolved onto release requests
    id: str
    name: str
    email: str
