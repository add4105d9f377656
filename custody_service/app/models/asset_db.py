import datetime
import uuid
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel, UtcDatetime


class AssetStatus(str, Enum):
    STORED = "stored"
    PENDING = "pending"
    RELEASED = "released"


def _default_deposit_date() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC) - datetime.timedelta(days=5 * 365)


class AssetDB(CamelModel): # One custody record per physical asset
    id: str = Field(default_factory=lambda: str(uuid.uuid4().hex))
    name: str = "Gold Trunk Boxes"
    description: Optional[str] = None
    original_value: float = 25_800_000
    current_value: float = 36_200_000
    demurrage_rate: float = 20
    deposit_date: UtcDatetime = Field(default_factory=_default_deposit_date)
    status: AssetStatus = AssetStatus.STORED.value # The only field the request workflow mutates
    last_updated: UtcDatetime = Field(default_factory=lambda: datetime.datetime.now(datetime.UTC))
