import datetime
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .asset_db import AssetDB
from .base import CamelModel, UtcDatetime
from .user_db import UserSummary


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReleaseRequestDB(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4().hex))
    user_id: str
    asset_id: str
    document_ids: List[str] = Field(default_factory=list)
    # Enum-like: pending, approved, rejected. Stored as a plain string since transitions write whatever status they are given.
    status: str = Field(default=RequestStatus.PENDING.value)
    created_at: UtcDatetime = Field(default_factory=lambda: datetime.datetime.now(datetime.UTC))
    processed_at: Optional[UtcDatetime] = None
    processed_by: Optional[str] = None


class ResolvedReleaseRequest(ReleaseRequestDB): # Admin view with the referenced user and asset
    user: Optional[UserSummary] = None
    asset: Optional[AssetDB] = None
