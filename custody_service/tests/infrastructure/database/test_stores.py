import pytest
from unittest.mock import AsyncMock, MagicMock

from custody_service.app.models import AssetDB, DocumentDB, ReleaseRequestDB, UserDB
from custody_service.infrastructure.database import (
    asset_store,
    document_store,
    release_request_store,
    user_store,
)


def make_user(email: str, role: str = "user") -> UserDB:
    return UserDB(name=email.split("@")[0], email=email, password_hash="not-a-real-hash", role=role)


@pytest.mark.asyncio
async def test_add_and_get_user(mongo_db):
    user = make_user("alice@example.com")
    await user_store.add_user(mongo_db, user)

    by_email = await user_store.get_user_by_email(mongo_db, "alice@example.com")

    assert by_email.id == user.id and by_email.role == "user"
    assert await user_store.get_user_by_email(mongo_db, "nobody@example.com") is None
    assert await user_store.count_users(mongo_db) == 1


@pytest.mark.asyncio
async def test_user_summaries_skip_unknown_ids(mongo_db):
    alice = make_user("alice@example.com")
    bob = make_user("bob@example.com")
    await user_store.add_user(mongo_db, alice)
    await user_store.add_user(mongo_db, bob)

    summaries = await user_store.get_user_summaries(mongo_db, [alice.id, alice.id, "missing"])

    assert set(summaries) == {alice.id}
    assert summaries[alice.id].email == "alice@example.com"
    assert await user_store.get_user_summaries(mongo_db, []) == {}


@pytest.mark.asyncio
async def test_set_asset_status_only_touches_status(mongo_db):
    asset = AssetDB(description="Two trunk boxes")
    await asset_store.add_asset(mongo_db, asset)

    assert await asset_store.set_asset_status(mongo_db, asset.id, "released") is True

    [stored] = await asset_store.list_assets(mongo_db)
    assert stored.status == "released"
    assert stored.description == asset.description
    assert stored.original_value == 25_800_000
    assert stored.current_value == 36_200_000


@pytest.mark.asyncio
async def test_set_asset_status_unknown_asset(mongo_db):
    assert await asset_store.set_asset_status(mongo_db, "does-not-exist", "pending") is False
    assert await asset_store.count_assets(mongo_db) == 0


@pytest.mark.asyncio
async def test_documents_listed_per_owner(mongo_db):
    await document_store.add_document(mongo_db, DocumentDB(user_id="u1", type="passport", file_url="/uploads/a"))
    await document_store.add_document(mongo_db, DocumentDB(user_id="u1", type="deed", file_url="/uploads/b"))
    await document_store.add_document(mongo_db, DocumentDB(user_id="u2", type="passport", file_url="/uploads/c"))

    docs = await document_store.list_documents_for_user(mongo_db, "u1")

    assert [d.type for d in docs] == ["passport", "deed"]
    assert all(d.user_id == "u1" for d in docs)


@pytest.mark.asyncio
async def test_update_release_request_status_records_actor(mongo_db):
    release_request = ReleaseRequestDB(user_id="u1", asset_id="a1", document_ids=["d1", "d2"])
    await release_request_store.add_release_request(mongo_db, release_request)

    updated = await release_request_store.update_release_request_status(mongo_db, release_request.id, "approved", "admin-1")

    assert updated.status == "approved"
    assert updated.processed_by == "admin-1"
    assert updated.processed_at is not None
    assert updated.document_ids == ["d1", "d2"]


@pytest.mark.asyncio
async def test_update_release_request_status_with_expected_status(mongo_db):
    release_request = ReleaseRequestDB(user_id="u1", asset_id="a1", status="approved")
    await release_request_store.add_release_request(mongo_db, release_request)

    result = await release_request_store.update_release_request_status(
        mongo_db, release_request.id, "rejected", "admin-1", expected_status="pending"
    )

    assert result is None
    unchanged = await release_request_store.get_release_request_by_id(mongo_db, release_request.id)
    assert unchanged.status == "approved"
    assert unchanged.processed_by is None


@pytest.mark.asyncio
async def test_add_release_request_uses_requests_collection():
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    db = MagicMock()
    db.__getitem__.return_value = collection
    release_request = ReleaseRequestDB(user_id="u1", asset_id="a1")

    result = await release_request_store.add_release_request(db, release_request)

    assert result == release_request
    db.__getitem__.assert_called_once_with("requests")
    inserted = collection.insert_one.call_args[0][0]
    assert inserted["id"] == release_request.id
    assert inserted["status"] == "pending"
    assert "_id" not in inserted
