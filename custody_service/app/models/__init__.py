from .user_db import UserDB, UserPublic, UserSummary, UserRole
from .asset_db import AssetDB, AssetStatus
from .document_db import DocumentDB
from .release_request_db import ReleaseRequestDB, ResolvedReleaseRequest, RequestStatus

__all__ = [
    "UserDB",
    "UserPublic",
    "UserSummary",
    "UserRole",
    "AssetDB",
    "AssetStatus",
    "DocumentDB",
    "ReleaseRequestDB",
    "ResolvedReleaseRequest",
    "RequestStatus",
]
