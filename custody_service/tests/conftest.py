# Shared fixtures: in-memory Motor database, test settings and an API client wired to both
import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from custody_service.app.main import app
from custody_service.app.config import AppSettings
from custody_service.app.api.dependencies import get_settings
from custody_service.app.models import AssetDB
from custody_service.infrastructure.database import asset_store
from custody_service.infrastructure.database.connection import get_db

TEST_JWT_SECRET = "test-secret-for-the-custody-service-suite"


@pytest.fixture
def test_settings(tmp_path) -> AppSettings:
    return AppSettings(
        JWT_SECRET=TEST_JWT_SECRET,
        INSECURE_DEV_MODE=False,
        REQUIRE_PENDING_FOR_TRANSITION=False,
        BCRYPT_ROUNDS=4, # Minimum cost keeps hashing fast in tests
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )

@pytest.fixture
def mongo_db():
    client = AsyncMongoMockClient(tz_aware=True)
    return client["gold_vault_test"]

@pytest.fixture
def client(mongo_db, test_settings):
    app.dependency_overrides[get_db] = lambda: mongo_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides = {}

@pytest.fixture
def seed_asset(mongo_db):
    """Factory inserting an asset directly into the database."""
    def _factory(status: str = "stored", **fields) -> AssetDB:
        asset = AssetDB(status=status, **fields)
        asyncio.run(asset_store.add_asset(mongo_db, asset))
        return asset
    return _factory

@pytest.fixture
def register_user(client):
    """Factory registering a user through the API; returns (user json, auth headers)."""
    def _factory(email: str, role: str = "user", password: str = "s3cret-pass", name: str = "Test User"):
        response = client.post(
            "/api/register",
            json={"name": name, "email": email, "password": password, "role": role},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}
    return _factory

@pytest.fixture
def fetch_asset(mongo_db):
    def _fetch(asset_id: str) -> dict:
        return asyncio.run(mongo_db[asset_store.ASSETS_COLLECTION].find_one({"id": asset_id}))
    return _fetch
