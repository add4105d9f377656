# Release Request Workflow
import logging
from typing import List, Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase
from opentelemetry import trace
from pymongo.errors import PyMongoError

from custody_service.app.models import AssetStatus, ReleaseRequestDB, RequestStatus, ResolvedReleaseRequest
from custody_service.app.observability import (
    tracer,
    release_requests_created_counter,
    release_requests_processed_counter,
)
from custody_service.app.service.exceptions import (
    InvalidRequestStateError,
    ReleaseRequestNotFoundError,
    StorageError,
)
from custody_service.infrastructure.database import asset_store, release_request_store, user_store

logger = logging.getLogger(__name__)

# Request status -> asset custody status. Statuses not listed leave the asset alone.
CASCADE = {
    RequestStatus.APPROVED.value: AssetStatus.RELEASED.value,
    RequestStatus.REJECTED.value: AssetStatus.STORED.value,
}


class ReleaseRequestWorkflow:
    """
    Files release requests and applies processing decisions, cascading each
    decision onto the custody status of the referenced asset.

    There is no locking between calls: concurrent creates and transitions on
    the same asset or request race, and the last write wins.
    """

    def __init__(self, db: AsyncIOMotorDatabase, require_pending: bool = False):
        self.db = db
        self.require_pending = require_pending

    async def create(self, user_id: str, asset_id: str, document_ids: Sequence[str]) -> ReleaseRequestDB:
        """
        Persists a pending request, then forces the asset to pending.
        Asset and document ids are stored as given, without existence checks.
        The request is not rolled back if the asset write fails.
        """
        with tracer.start_as_current_span("release_request.create") as span:
            span.set_attribute("asset.id", asset_id)
            release_request = ReleaseRequestDB(
                user_id=user_id,
                asset_id=asset_id,
                document_ids=list(document_ids),
            )
            try:
                await release_request_store.add_release_request(self.db, release_request)
            except PyMongoError as e:
                raise StorageError(f"Failed to persist release request: {e}") from e
            span.set_attribute("release_request.id", release_request.id)

            try:
                await asset_store.set_asset_status(self.db, asset_id, AssetStatus.PENDING.value)
            except PyMongoError as e:
                logger.error(f"Release request {release_request.id} persisted but asset {asset_id} was not moved to pending: {e}")
                raise StorageError(f"Failed to update asset {asset_id}: {e}") from e

            release_requests_created_counter.add(1)
            logger.info(f"Release request {release_request.id} filed by user {user_id} for asset {asset_id}.")
            return release_request

    async def list(self) -> List[ResolvedReleaseRequest]:
        """All requests with the requesting user's display fields and the full asset record."""
        try:
            requests = await release_request_store.list_release_requests(self.db)
            users = await user_store.get_user_summaries(self.db, (r.user_id for r in requests))
            assets = await asset_store.get_assets_by_ids(self.db, (r.asset_id for r in requests))
        except PyMongoError as e:
            raise StorageError(f"Failed to list release requests: {e}") from e

        return [
            ResolvedReleaseRequest(
                **r.model_dump(),
                user=users.get(r.user_id),
                asset=assets.get(r.asset_id),
            )
            for r in requests
        ]

    async def transition(self, request_id: str, new_status: str, actor_id: str) -> ReleaseRequestDB:
        """
        Records the processing decision and cascades it onto the asset:
        approved releases the asset, rejected returns it to storage, anything
        else leaves it untouched. Already processed requests can be processed
        again unless the workflow was built with require_pending.
        """
        with tracer.start_as_current_span("release_request.transition") as span:
            span.set_attribute("release_request.id", request_id)
            span.set_attribute("release_request.new_status", new_status)

            expected_status: Optional[str] = RequestStatus.PENDING.value if self.require_pending else None
            try:
                updated = await release_request_store.update_release_request_status(
                    self.db, request_id, new_status, actor_id, expected_status=expected_status
                )
                if updated is None:
                    existing = await release_request_store.get_release_request_by_id(self.db, request_id)
                    if existing is None:
                        raise ReleaseRequestNotFoundError(request_id)
                    raise InvalidRequestStateError(request_id, existing.status, new_status)

                asset_status = CASCADE.get(new_status)
                if asset_status is not None:
                    await asset_store.set_asset_status(self.db, updated.asset_id, asset_status)
                    span.add_event("AssetStatusCascaded", {"asset.id": updated.asset_id, "asset.status": asset_status})
                else:
                    logger.info(f"Status {new_status!r} has no custody cascade; asset {updated.asset_id} left unchanged.")
            except PyMongoError as e:
                trace.get_current_span().record_exception(e)
                raise StorageError(f"Failed to process release request {request_id}: {e}") from e

            release_requests_processed_counter.add(1, {"status": new_status})
            logger.info(f"Release request {request_id} moved to {new_status} by {actor_id}.")
            return updated
