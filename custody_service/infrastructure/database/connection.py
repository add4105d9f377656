# MongoDB client construction and the FastAPI database dependency
import logging
from typing import AsyncGenerator, Tuple

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .user_store import USERS_COLLECTION

logger = logging.getLogger(__name__)

# The client is owned by whoever calls connect_to_mongo (app.state for the API); nothing is cached here.

async def connect_to_mongo(mongo_details: str, db_name: str) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    logger.info(f"Attempting to connect to MongoDB at {mongo_details}...")
    try:
        client = AsyncIOMotorClient(mongo_details, tz_aware=True)
        # Verify connection by pinging the admin database
        await client.admin.command('ping')
    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}", exc_info=True)
        raise ConnectionError(f"Failed to connect to MongoDB: {e}") from e
    db = client[db_name]
    logger.info(f"Successfully connected to MongoDB and database '{db_name}' is set.")
    return client, db

async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Creates the indexes the stores rely on. Idempotent."""
    await db[USERS_COLLECTION].create_index("email", unique=True)
    await db[USERS_COLLECTION].create_index("id", unique=True)
    logger.info("MongoDB indexes ensured.")

def close_mongo_connection(client: AsyncIOMotorClient) -> None:
    client.close()
    logger.info("MongoDB connection closed.")

async def get_db(request: Request) -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    db = getattr(request.app.state, "db", None)
    if db is None:
        logger.error("Database requested before the application finished connecting to MongoDB.")
        raise ConnectionError("Database client is not available. Connection might have failed or was not established.")
    yield db
