# First-start seeding of accounts and the default asset
import logging
from typing import List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.concurrency import run_in_threadpool

from custody_service.app.config import AppSettings
from custody_service.app.models import AssetDB, UserDB, UserRole
from custody_service.app.service.security import hash_password
from custody_service.infrastructure.database import asset_store, user_store

logger = logging.getLogger(__name__)

# (name, email, password, role). Well-known credentials: only seeded in insecure dev mode.
DEFAULT_ACCOUNTS: List[Tuple[str, str, str, str]] = [
    ("Admin", "admin@example.com", "admin123", UserRole.ADMIN.value),
    ("Staff", "staff@example.com", "staff123", UserRole.STAFF.value),
    ("User", "user@example.com", "user123", UserRole.USER.value),
]

DEFAULT_ASSET_DESCRIPTION = "Two trunk boxes of gold deposited by Angela Saxe"


async def initialize_data(db: AsyncIOMotorDatabase, settings: AppSettings) -> bool:
    """
    Seeds an empty deployment and returns whether anything was written.

    Nothing happens once any user exists. Default accounts are only created in
    insecure dev mode; the default asset is created when no asset exists yet.
    """
    if await user_store.count_users(db) > 0:
        logger.info("Users already present; skipping seed data.")
        return False

    seeded = False
    if settings.INSECURE_DEV_MODE:
        for name, email, password, role in DEFAULT_ACCOUNTS:
            user = UserDB(
                name=name,
                email=email,
                password_hash=await run_in_threadpool(hash_password, password, rounds=settings.BCRYPT_ROUNDS),
                role=role,
            )
            await user_store.add_user(db, user)
        logger.warning("INSECURE_DEV_MODE: seeded default accounts with well-known passwords.")
        seeded = True
    else:
        logger.info("Default accounts not seeded (INSECURE_DEV_MODE is off).")

    if await asset_store.count_assets(db) == 0:
        asset = await asset_store.add_asset(db, AssetDB(description=DEFAULT_ASSET_DESCRIPTION))
        logger.info(f"Seeded default asset {asset.id}.")
        seeded = True
    return seeded
