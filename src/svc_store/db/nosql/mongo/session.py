from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from svc_store.db.settings import MongoSettings, get_mongo_settings
from svc_store.exceptions import StoreError

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None


async def initialize_mongo(
    url: Optional[str] = None,
    db_name: Optional[str] = None,
    *,
    settings: Optional[MongoSettings] = None,
) -> AsyncIOMotorDatabase:
    """Open the process-wide client and select the database.

    Explicit ``url``/``db_name`` win over settings. The database name falls back
    to the one embedded in the connection string.
    """
    global _client, _db
    settings = settings or get_mongo_settings()
    resolved_url = url or settings.resolved_url

    if _client is not None:
        await dispose_mongo()

    _client = AsyncIOMotorClient(
        resolved_url,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )
    try:
        name = db_name or settings.db_name
        _db = _client[name] if name else _client.get_default_database()
    except Exception:
        _client.close()
        _client = None
        raise
    logger.info("Mongo attached: db=%s", _db.name)
    return _db


async def dispose_mongo() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
        logger.info("Mongo client closed")
    _client = None
    _db = None


def get_mongo_db() -> AsyncIOMotorDatabase:
    if _db is None:
        raise RuntimeError("Mongo is not initialized; call initialize_mongo() first")
    return _db


def get_collection(name: str) -> AsyncIOMotorCollection:
    return get_mongo_db()[name]


async def ping_mongo() -> bool:
    try:
        await get_mongo_db().command("ping")
    except PyMongoError as exc:
        raise StoreError(str(exc)) from exc
    return True
