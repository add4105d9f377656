import datetime
import uuid

from pydantic import Field

from .base import CamelModel, UtcDatetime


class DocumentDB(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4().hex))
    user_id: str # Owning user; documents are never shared or deleted
    type: str # Caller supplied label, e.g. "passport", "deed"
    file_url: str # e.g. /uploads/<uuid>-passport.pdf
    uploaded_at: UtcDatetime = Field(default_factory=lambda: datetime.datetime.now(datetime.UTC))
